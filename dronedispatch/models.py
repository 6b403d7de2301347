"""Mini README: Domain records consumed and produced by the dispatch engine.

Structure:
    * DroneCapability - payload, environment and cost model of one drone.
    * DispatchRequirements - what a single order needs from its drone.
    * MedDispatchRecord - a medical delivery order.
    * RestrictedArea - named, closed no-fly polygon.

Records are plain dataclasses. Drone rosters, service-point origins and
restricted areas arrive already fetched; the HTTP layer converts its request
models into these types before any planning happens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional, Sequence

from .geometry import Position, is_in_region, validate_closed_polygon


@dataclass(frozen=True, slots=True)
class DroneCapability:
    """Capability and cost model for one drone."""

    cooling: bool
    heating: bool
    capacity: float
    max_moves: int
    cost_per_move: float
    cost_initial: float
    cost_final: float

    def flight_cost(self, moves: int) -> float:
        """Cost of one round trip taking ``moves`` moves."""

        return self.cost_initial + self.cost_final + moves * self.cost_per_move

    def supports(self, requirements: "DispatchRequirements") -> bool:
        """Return True if the drone offers the environment the order needs."""

        if requirements.cooling and not self.cooling:
            return False
        if requirements.heating and not self.heating:
            return False
        return True


@dataclass(frozen=True, slots=True)
class DispatchRequirements:
    """Payload and environmental requirements of an order."""

    capacity: float
    cooling: bool = False
    heating: bool = False
    max_cost: Optional[float] = None


@dataclass(frozen=True, slots=True)
class MedDispatchRecord:
    """A medical delivery order."""

    order_id: int
    delivery: Position
    requirements: DispatchRequirements
    delivery_date: Optional[date] = None
    delivery_time: Optional[time] = None


@dataclass(frozen=True, slots=True)
class RestrictedArea:
    """No-fly polygon; the vertex list must be closed."""

    name: str
    vertices: Sequence[Position] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        vertices = tuple(self.vertices)
        validate_closed_polygon(vertices)
        object.__setattr__(self, "vertices", vertices)

    def contains(self, point: Position) -> bool:
        return is_in_region(point, self.vertices)


def total_capacity(orders: Sequence[MedDispatchRecord]) -> float:
    """Sum of requested capacity across ``orders``."""

    return sum(order.requirements.capacity for order in orders)
