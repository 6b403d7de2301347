"""Mini README: Pydantic request models for the HTTP and CLI surfaces.

Structure:
    * LngLatModel, RegionModel - geometry payloads.
    * RequirementsModel, OrderModel - medical dispatch records.
    * CapabilityModel, DroneModel, FleetModel - pre-fetched fleet data; no-fly
      zones arrive as vertex lists or as one GeoJSON object.
    * PlanRequest - body of the planning endpoints and CLI input files.
    * PairRequest, StepRequest, RegionQuery - geometry helper bodies.

Field aliases follow the camelCase JSON used by API consumers. Shape and
type checks happen here; coordinate ranges and polygon closure are enforced
when the models are converted into engine records.
"""

from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..dispatch import DroneRecord, FleetSnapshot
from ..geometry import Position
from ..models import DispatchRequirements, DroneCapability, MedDispatchRecord, RestrictedArea
from ..utils.geojson import restricted_areas_from_geojson


class _ApiModel(BaseModel):
    class Config:
        populate_by_name = True


class LngLatModel(_ApiModel):
    lng: float
    lat: float

    def to_position(self) -> Position:
        return Position(self.lng, self.lat)


class RegionModel(_ApiModel):
    name: str = "region"
    vertices: List[LngLatModel]

    def to_area(self) -> RestrictedArea:
        return RestrictedArea(
            name=self.name, vertices=[vertex.to_position() for vertex in self.vertices]
        )


class RequirementsModel(_ApiModel):
    capacity: float = Field(..., ge=0)
    cooling: bool = False
    heating: bool = False
    max_cost: Optional[float] = Field(None, alias="maxCost")

    def to_requirements(self) -> DispatchRequirements:
        return DispatchRequirements(
            capacity=self.capacity,
            cooling=self.cooling,
            heating=self.heating,
            max_cost=self.max_cost,
        )


class OrderModel(_ApiModel):
    id: int
    delivery_date: Optional[date] = Field(None, alias="date")
    delivery_time: Optional[time] = Field(None, alias="time")
    requirements: RequirementsModel
    delivery: LngLatModel

    def to_record(self) -> MedDispatchRecord:
        return MedDispatchRecord(
            order_id=self.id,
            delivery=self.delivery.to_position(),
            requirements=self.requirements.to_requirements(),
            delivery_date=self.delivery_date,
            delivery_time=self.delivery_time,
        )


class CapabilityModel(_ApiModel):
    cooling: bool = False
    heating: bool = False
    capacity: float = Field(..., ge=0)
    max_moves: int = Field(..., alias="maxMoves", ge=0)
    cost_per_move: float = Field(..., alias="costPerMove", ge=0)
    cost_initial: float = Field(0.0, alias="costInitial", ge=0)
    cost_final: float = Field(0.0, alias="costFinal", ge=0)

    def to_capability(self) -> DroneCapability:
        return DroneCapability(
            cooling=self.cooling,
            heating=self.heating,
            capacity=self.capacity,
            max_moves=self.max_moves,
            cost_per_move=self.cost_per_move,
            cost_initial=self.cost_initial,
            cost_final=self.cost_final,
        )


class DroneModel(_ApiModel):
    id: int
    name: Optional[str] = None
    origin: LngLatModel
    capability: CapabilityModel

    def to_record(self) -> DroneRecord:
        return DroneRecord(
            drone_id=self.id,
            origin=self.origin.to_position(),
            capability=self.capability.to_capability(),
        )


class FleetModel(_ApiModel):
    drones: List[DroneModel] = Field(default_factory=list)
    restricted_areas: List[RegionModel] = Field(default_factory=list, alias="restrictedAreas")
    restricted_areas_geojson: Optional[Dict[str, Any]] = Field(None, alias="restrictedAreasGeoJson")

    def to_snapshot(self) -> FleetSnapshot:
        areas = [area.to_area() for area in self.restricted_areas]
        if self.restricted_areas_geojson is not None:
            areas.extend(restricted_areas_from_geojson(self.restricted_areas_geojson))
        return FleetSnapshot(
            drones=[drone.to_record() for drone in self.drones],
            restricted_areas=areas,
        )


class PlanRequest(_ApiModel):
    orders: List[OrderModel] = Field(default_factory=list)
    fleet: FleetModel

    def to_records(self) -> List[MedDispatchRecord]:
        return [order.to_record() for order in self.orders]


class PairRequest(_ApiModel):
    position1: LngLatModel
    position2: LngLatModel


class StepRequest(_ApiModel):
    start: LngLatModel
    angle: float


class RegionQuery(_ApiModel):
    position: LngLatModel
    region: RegionModel
