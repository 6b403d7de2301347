"""Mini README: Turn committed flights into plan payloads.

Structure:
    * DeliveryPath / DronePath / DeliveryPlan - immutable plan records.
    * slice_flight - split one flight path into per-order segments.
    * assemble_plan - fold an Allocation into a DeliveryPlan.
    * flight_to_line_string - flatten one flight for map visualisation.

Segments are cut at the hover indices recorded by the flight builder. The
segment of order ``i`` starts at the previous order's hover (the origin for
the first order) and ends at its own hover; the last order's segment also
carries the return leg home.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..geometry import Position
from ..utils.geojson import line_string
from .allocator import Allocation
from .flights import Flight


@dataclass(frozen=True, slots=True)
class DeliveryPath:
    """Flight path segment belonging to one order."""

    delivery_id: int
    flight_path: Tuple[Position, ...]

    def as_dict(self) -> Dict[str, object]:
        return {
            "deliveryId": self.delivery_id,
            "flightPath": [position.as_dict() for position in self.flight_path],
        }


@dataclass(frozen=True, slots=True)
class DronePath:
    """All deliveries flown by one drone."""

    drone_id: int
    deliveries: Tuple[DeliveryPath, ...]

    def as_dict(self) -> Dict[str, object]:
        return {
            "droneId": self.drone_id,
            "deliveries": [delivery.as_dict() for delivery in self.deliveries],
        }


@dataclass(frozen=True, slots=True)
class DeliveryPlan:
    """Terminal output of a planning request."""

    total_cost: float = 0.0
    total_moves: int = 0
    drone_paths: Tuple[DronePath, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "DeliveryPlan":
        return cls()

    def as_dict(self) -> Dict[str, object]:
        """Export with the camelCase keys used by API consumers."""

        return {
            "totalCost": self.total_cost,
            "totalMoves": self.total_moves,
            "dronePaths": [drone_path.as_dict() for drone_path in self.drone_paths],
        }


def slice_flight(flight: Flight) -> List[DeliveryPath]:
    """Split ``flight.path`` into one segment per order."""

    segments: List[DeliveryPath] = []
    last = len(flight.orders) - 1
    for index, order in enumerate(flight.orders):
        start = 0 if index == 0 else flight.hover_indices[index - 1]
        end = len(flight.path) - 1 if index == last else flight.hover_indices[index]
        segments.append(DeliveryPath(order.order_id, flight.path[start : end + 1]))
    return segments


def assemble_plan(allocation: Allocation) -> DeliveryPlan:
    """Fold every committed flight into a ``DeliveryPlan``."""

    drone_paths: List[DronePath] = []
    for drone_id, flights in allocation.drone_flights.items():
        deliveries = [segment for flight in flights for segment in slice_flight(flight)]
        if deliveries:
            drone_paths.append(DronePath(drone_id, tuple(deliveries)))
    return DeliveryPlan(
        total_cost=allocation.total_cost,
        total_moves=allocation.total_moves,
        drone_paths=tuple(drone_paths),
    )


def flight_to_line_string(flight: Optional[Flight]) -> Dict[str, object]:
    """GeoJSON LineString of ``flight``; empty coordinates when there is none."""

    return line_string(flight.path if flight is not None else ())
