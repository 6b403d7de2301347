"""Mini README: Round-trip flight construction and feasibility checks.

Structure:
    * Flight - immutable round trip with hover markers, moves and cost.
    * RejectionReason - why a candidate flight was refused.
    * FlightEvaluation - a built flight or the reason it failed.
    * FlightBuilder - stitches pathfinder legs into flights.

A flight leaves the drone origin, visits every delivery in the given order
and returns home. After each delivery the delivery position is repeated
once; that duplicate is the hover marking the drop-off, and because it does
not change position it never counts as a move. The cost of a flight is a
single round-trip charge, no matter how many orders ride along.

Infeasible flights are not errors: the builder returns ``None`` (or a
rejection reason from ``evaluate``) so callers can try other combinations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..context import PlanningContext
from ..geometry import Position
from ..logging_utils import get_logger
from ..models import DroneCapability, MedDispatchRecord, total_capacity
from ..pathfinding import Pathfinder, count_moves

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Flight:
    """One round trip from a drone origin serving one or more orders."""

    orders: Tuple[MedDispatchRecord, ...]
    path: Tuple[Position, ...]
    hover_indices: Tuple[int, ...]
    moves: int
    cost: float

    @property
    def order_ids(self) -> List[int]:
        return [order.order_id for order in self.orders]


class RejectionReason(str, Enum):
    """Reasons a candidate flight is infeasible."""

    NO_ORDERS = "no_orders"
    UNSUPPORTED_REQUIREMENTS = "unsupported_requirements"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    UNREACHABLE = "unreachable"
    MOVES_EXCEEDED = "moves_exceeded"
    COST_EXCEEDED = "cost_exceeded"


@dataclass(frozen=True, slots=True)
class FlightEvaluation:
    """Result of evaluating a candidate order sequence for one drone."""

    flight: Optional[Flight] = None
    reason: Optional[RejectionReason] = None

    @property
    def feasible(self) -> bool:
        return self.flight is not None


class FlightBuilder:
    """Build and validate flights against one planning context."""

    def __init__(self, context: PlanningContext, pathfinder: Optional[Pathfinder] = None) -> None:
        self.context = context
        self.pathfinder = pathfinder or Pathfinder(context)

    def build(
        self,
        origin: Position,
        capability: DroneCapability,
        orders: Sequence[MedDispatchRecord],
    ) -> Optional[Flight]:
        """Return the flight for ``orders`` or ``None`` when infeasible."""

        return self.evaluate(origin, capability, orders).flight

    def evaluate(
        self,
        origin: Position,
        capability: DroneCapability,
        orders: Sequence[MedDispatchRecord],
    ) -> FlightEvaluation:
        """Build a flight visiting ``orders`` in sequence and check its limits."""

        if not orders:
            return self._reject(RejectionReason.NO_ORDERS, "no orders supplied")

        for order in orders:
            if not capability.supports(order.requirements):
                return self._reject(
                    RejectionReason.UNSUPPORTED_REQUIREMENTS,
                    f"order {order.order_id} needs cooling/heating the drone lacks",
                )

        required = total_capacity(orders)
        if required > capability.capacity:
            return self._reject(
                RejectionReason.CAPACITY_EXCEEDED,
                f"capacity {required} > {capability.capacity}",
            )

        path: List[Position] = [origin]
        hover_indices: List[int] = []
        current = origin
        for order in orders:
            leg = self.pathfinder.find_path(current, order.delivery)
            if not leg.found:
                return self._reject(
                    RejectionReason.UNREACHABLE, f"no path to order {order.order_id}"
                )
            path.extend(leg.positions[1:])
            if path[-1] != order.delivery:
                path.append(order.delivery)
            path.append(order.delivery)
            hover_indices.append(len(path) - 1)
            current = order.delivery

        home = self.pathfinder.find_path(current, origin)
        if not home.found:
            return self._reject(RejectionReason.UNREACHABLE, "no return path to origin")
        path.extend(home.positions[1:])
        if path[-1] != origin:
            path.append(origin)

        moves = count_moves(path)
        if moves > capability.max_moves:
            return self._reject(
                RejectionReason.MOVES_EXCEEDED, f"moves {moves} > {capability.max_moves}"
            )

        cost = capability.flight_cost(moves)
        if self.context.settings.enforce_max_cost:
            share = cost / len(orders)
            for order in orders:
                ceiling = order.requirements.max_cost
                if ceiling is not None and share > ceiling:
                    return self._reject(
                        RejectionReason.COST_EXCEEDED,
                        f"order {order.order_id} share {share:.4f} > maxCost {ceiling}",
                    )

        flight = Flight(
            orders=tuple(orders),
            path=tuple(path),
            hover_indices=tuple(hover_indices),
            moves=moves,
            cost=cost,
        )
        LOGGER.debug(
            "Built flight for orders %s: moves=%s cost=%.4f", flight.order_ids, moves, cost
        )
        return FlightEvaluation(flight=flight)

    @staticmethod
    def _reject(reason: RejectionReason, detail: str) -> FlightEvaluation:
        LOGGER.debug("Flight rejected (%s): %s", reason.value, detail)
        return FlightEvaluation(reason=reason)
