"""Mini README: Greedy multi-round allocation of orders to drones.

Structure:
    * Allocation - committed flights per drone with running totals.
    * SingleFlightSelection - the drone and flight chosen in single-flight mode.
    * Allocator - greedy bin packing over drones and orders.

Each round visits the candidate drones in input order. For every drone the
still-unassigned orders are sorted by distance from that drone's origin and
added one at a time; an order stays in the candidate set only if the flight
builder still accepts the grown set, paths recomputed. The resulting
non-empty flight is committed and its orders leave the pool.

A round that commits nothing means the remaining orders cannot be served by
any drone and raises ``AllocationError``. Sorting is stable and drones keep
their input order, so identical input always yields the identical plan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..configuration import SelectionPolicy
from ..context import PlanningContext
from ..errors import AllocationError, ValidationError
from ..geometry import distance
from ..logging_utils import get_logger
from ..models import MedDispatchRecord
from .flights import Flight, FlightBuilder

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class Allocation:
    """Flights committed per drone, kept in first-commit order."""

    drone_flights: Dict[int, List[Flight]] = field(default_factory=dict)
    total_cost: float = 0.0
    total_moves: int = 0

    def add_flight(self, drone_id: int, flight: Flight) -> None:
        self.drone_flights.setdefault(drone_id, []).append(flight)
        self.total_cost += flight.cost
        self.total_moves += flight.moves

    @property
    def flights(self) -> List[Tuple[int, Flight]]:
        return [
            (drone_id, flight)
            for drone_id, flights in self.drone_flights.items()
            for flight in flights
        ]

    def assigned_order_ids(self) -> List[int]:
        return [order_id for _, flight in self.flights for order_id in flight.order_ids]

    @property
    def is_empty(self) -> bool:
        return not self.drone_flights


@dataclass(frozen=True, slots=True)
class SingleFlightSelection:
    """Drone chosen to carry every order in one flight."""

    drone_id: int
    flight: Flight


class Allocator:
    """Assign orders to drones using greedy nearest-first packing."""

    def __init__(self, context: PlanningContext, builder: Optional[FlightBuilder] = None) -> None:
        self.context = context
        self.builder = builder or FlightBuilder(context)

    def allocate(
        self, orders: Sequence[MedDispatchRecord], drone_ids: Sequence[int]
    ) -> Allocation:
        """Allocate every order to some drone flight.

        Raises:
            AllocationError: a round committed nothing, or the round limit ran
                out with orders still unassigned.
            ValidationError: two orders share an identifier.
        """

        _ensure_unique_ids(orders)
        allocation = Allocation()
        remaining: Dict[int, MedDispatchRecord] = {order.order_id: order for order in orders}
        max_rounds = self.context.settings.max_allocation_rounds
        LOGGER.info("Allocating %s orders across %s drones", len(orders), len(drone_ids))

        round_number = 0
        while remaining and round_number < max_rounds:
            round_number += 1
            LOGGER.info("Round %s: %s orders remaining", round_number, len(remaining))
            progress = False

            for drone_id in drone_ids:
                if not remaining:
                    break
                if not self.context.has_drone_data(drone_id):
                    LOGGER.warning("Drone %s has no origin or capability data, skipping", drone_id)
                    continue

                flight = self.best_flight_for(drone_id, list(remaining.values()))
                if flight is None:
                    continue

                allocation.add_flight(drone_id, flight)
                for order_id in flight.order_ids:
                    del remaining[order_id]
                progress = True
                LOGGER.info(
                    "Drone %s takes orders %s (moves=%s cost=%.4f)",
                    drone_id,
                    flight.order_ids,
                    flight.moves,
                    flight.cost,
                )

            if not progress:
                raise AllocationError(
                    f"No drone could serve any of the {len(remaining)} remaining orders "
                    f"in round {round_number}",
                    unassigned=list(remaining),
                )

        if remaining:
            raise AllocationError(
                f"{len(remaining)} orders still unassigned after {round_number} rounds",
                unassigned=list(remaining),
            )
        return allocation

    def best_flight_for(
        self, drone_id: int, candidates: Sequence[MedDispatchRecord]
    ) -> Optional[Flight]:
        """Greedily grow the largest feasible flight for ``drone_id``."""

        if not candidates:
            return None
        origin = self.context.origin_of(drone_id)
        capability = self.context.capability_of(drone_id)
        ordered = sorted(candidates, key=lambda order: distance(origin, order.delivery))

        selected: List[MedDispatchRecord] = []
        selected_capacity = 0.0
        flight: Optional[Flight] = None
        for order in ordered:
            required = order.requirements.capacity
            if selected_capacity + required > capability.capacity:
                continue
            trial = self.builder.build(origin, capability, selected + [order])
            if trial is None:
                continue
            selected.append(order)
            selected_capacity += required
            flight = trial

        if flight is None:
            LOGGER.debug("Drone %s cannot serve any of %s candidates", drone_id, len(candidates))
        return flight

    def plan_single_flight(
        self,
        orders: Sequence[MedDispatchRecord],
        drone_ids: Sequence[int],
        policy: Optional[SelectionPolicy] = None,
    ) -> Optional[SingleFlightSelection]:
        """Find one drone whose single flight serves all ``orders`` in sequence."""

        policy = SelectionPolicy(policy or self.context.settings.selection_policy)
        best: Optional[SingleFlightSelection] = None
        for drone_id in drone_ids:
            if not self.context.has_drone_data(drone_id):
                LOGGER.warning("Drone %s has no origin or capability data, skipping", drone_id)
                continue
            LOGGER.debug("Trying drone %s for a single flight", drone_id)
            flight = self.builder.build(
                self.context.origin_of(drone_id),
                self.context.capability_of(drone_id),
                orders,
            )
            if flight is None:
                continue
            LOGGER.info(
                "Drone %s can fly all orders: moves=%s cost=%.4f", drone_id, flight.moves, flight.cost
            )
            if policy is SelectionPolicy.FIRST:
                return SingleFlightSelection(drone_id, flight)
            if best is None or flight.cost < best.flight.cost:
                best = SingleFlightSelection(drone_id, flight)
        return best


def _ensure_unique_ids(orders: Sequence[MedDispatchRecord]) -> None:
    seen = set()
    for order in orders:
        if order.order_id in seen:
            raise ValidationError(f"Duplicate order id {order.order_id}")
        seen.add(order.order_id)
