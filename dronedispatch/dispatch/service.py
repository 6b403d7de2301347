"""Mini README: Request-level entry points for delivery planning.

Structure:
    * DroneRecord - one candidate drone with origin and capability.
    * FleetSnapshot - pre-fetched drones and restricted areas for a request.
    * DispatchService - builds a fresh PlanningContext per call and runs the
      allocator or single-flight planner.

The drone list in a snapshot is already filtered for capability and
day/time availability; its order is the order drones are tried in. A failed
full allocation is logged and reported as the empty plan, never as a partial
plan.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..configuration import DispatchSettings, SelectionPolicy, get_settings
from ..context import PlanningContext
from ..errors import AllocationError
from ..geometry import Position
from ..logging_utils import get_logger
from ..models import DroneCapability, MedDispatchRecord, RestrictedArea
from .allocator import Allocator
from .plans import DeliveryPlan, assemble_plan, flight_to_line_string

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DroneRecord:
    """Candidate drone as delivered by the fleet data source."""

    drone_id: int
    origin: Position
    capability: DroneCapability


@dataclass(slots=True)
class FleetSnapshot:
    """Drones and geofences fetched for a single planning request."""

    drones: List[DroneRecord] = field(default_factory=list)
    restricted_areas: List[RestrictedArea] = field(default_factory=list)

    @property
    def drone_ids(self) -> List[int]:
        return [drone.drone_id for drone in self.drones]


class DispatchService:
    """Plan deliveries for incoming order batches."""

    def __init__(self, settings: Optional[DispatchSettings] = None) -> None:
        self.settings = settings or get_settings()

    def build_context(self, snapshot: FleetSnapshot) -> PlanningContext:
        """Create the request-scoped context for ``snapshot``."""

        origins: Dict[int, Position] = {drone.drone_id: drone.origin for drone in snapshot.drones}
        capabilities: Dict[int, DroneCapability] = {
            drone.drone_id: drone.capability for drone in snapshot.drones
        }
        return PlanningContext(
            restricted_areas=snapshot.restricted_areas,
            origins=origins,
            capabilities=capabilities,
            settings=self.settings,
        )

    def calc_delivery_plan(
        self, orders: Optional[Sequence[MedDispatchRecord]], snapshot: FleetSnapshot
    ) -> DeliveryPlan:
        """Allocate ``orders`` across the fleet and return the delivery plan."""

        started = time.monotonic()
        LOGGER.info("Delivery plan requested for %s orders", len(orders or []))
        if not orders:
            return DeliveryPlan.empty()
        if not snapshot.drones:
            LOGGER.warning("No candidate drones supplied")
            return DeliveryPlan.empty()

        context = self.build_context(snapshot)
        try:
            allocation = Allocator(context).allocate(orders, snapshot.drone_ids)
        except AllocationError as error:
            LOGGER.error(
                "Could not allocate all orders (unassigned=%s): %s", error.unassigned, error
            )
            return DeliveryPlan.empty()

        plan = assemble_plan(allocation)
        LOGGER.info(
            "Delivery plan ready in %.0fms: cost=%.4f moves=%s drones=%s",
            (time.monotonic() - started) * 1000,
            plan.total_cost,
            plan.total_moves,
            len(plan.drone_paths),
        )
        return plan

    def calc_delivery_path_geojson(
        self,
        orders: Optional[Sequence[MedDispatchRecord]],
        snapshot: FleetSnapshot,
        policy: Optional[SelectionPolicy] = None,
    ) -> Dict[str, object]:
        """Return one drone's consolidated flight over all orders as a LineString."""

        LOGGER.info("Single-flight path requested for %s orders", len(orders or []))
        if not orders or not snapshot.drones:
            return flight_to_line_string(None)

        context = self.build_context(snapshot)
        selection = Allocator(context).plan_single_flight(orders, snapshot.drone_ids, policy)
        if selection is None:
            LOGGER.error("No single drone can fly all %s orders", len(orders))
            return flight_to_line_string(None)
        LOGGER.info(
            "Drone %s selected for single flight (cost=%.4f)", selection.drone_id, selection.flight.cost
        )
        return flight_to_line_string(selection.flight)
