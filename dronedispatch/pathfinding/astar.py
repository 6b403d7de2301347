"""Mini README: A* search over the step-quantized position space.

Structure:
    * SearchOutcome - diagnostic label describing how a search ended.
    * SearchNode - arena element holding g/h costs and a parent index.
    * PathResult - positions found (empty on failure) plus diagnostics.
    * count_moves / grid_key - helpers shared with the flight builder.
    * Pathfinder - runs searches against a PlanningContext.

Drones move in fixed steps along sixteen bearings, so floating point
positions drift and almost never repeat exactly. The best-known cost map is
therefore keyed by the position rounded to the nearest multiple of the step
size; without that the search would never recognise a revisited cell.

Nodes live in a list owned by one search call and refer to their parent by
index. A node's parent can be rebound to a cheaper predecessor while the
node is still open, which keeps the parent links a tree.

Every failure (blocked endpoint, empty frontier, iteration cap, time
budget) yields the same empty ``PathResult``; ``outcome`` only exists for
logging and diagnostics.
"""

from __future__ import annotations

import heapq
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..context import PlanningContext
from ..geometry import Direction16, Position, distance, is_close, step_from
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

GridKey = Tuple[int, int]


class SearchOutcome(str, Enum):
    """How a pathfinding call finished."""

    FOUND = "found"
    ALREADY_CLOSE = "already_close"
    BLOCKED_ENDPOINT = "blocked_endpoint"
    EXHAUSTED = "exhausted"
    ITERATION_LIMIT = "iteration_limit"
    TIMEOUT = "timeout"


@dataclass(slots=True)
class SearchNode:
    """Search tree element; ``parent`` indexes the owning arena."""

    position: Position
    g: float
    h: float
    parent: Optional[int] = None

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass(frozen=True, slots=True)
class PathResult:
    """Outcome of one pathfinding call."""

    positions: Tuple[Position, ...]
    outcome: SearchOutcome
    iterations: int = 0

    @property
    def found(self) -> bool:
        return bool(self.positions)

    @property
    def move_count(self) -> int:
        return count_moves(self.positions)


def count_moves(path: Sequence[Position]) -> int:
    """Count transitions between different consecutive positions.

    Repeated consecutive positions are hovers and never count as moves.
    """

    return sum(1 for previous, current in zip(path, path[1:]) if previous != current)


def grid_key(position: Position, step: float) -> GridKey:
    """Quantize ``position`` to the nearest multiple of ``step``."""

    return (round(position.lng / step), round(position.lat / step))


class Pathfinder:
    """A* pathfinder bound to one request's planning context."""

    def __init__(self, context: PlanningContext) -> None:
        self.context = context
        self.settings = context.settings

    def find_path(self, origin: Position, target: Position) -> PathResult:
        """Return a path from ``origin`` to ``target`` or an empty result.

        Results are memoised on the planning context so repeated legs during
        allocation do not search twice.
        """

        cached = self.context.cached_path(origin, target)
        if cached is not None:
            return cached  # type: ignore[return-value]
        result = self._search(origin, target)
        self.context.remember_path(origin, target, result)
        return result

    def _search(self, origin: Position, target: Position) -> PathResult:
        context = self.context
        step = context.step_size

        if context.is_restricted(target):
            LOGGER.debug("Target %s lies in a restricted area", target)
            return PathResult((), SearchOutcome.BLOCKED_ENDPOINT)
        if context.is_restricted(origin):
            LOGGER.debug("Origin %s lies in a restricted area", origin)
            return PathResult((), SearchOutcome.BLOCKED_ENDPOINT)

        if is_close(origin, target, step):
            if not context.crosses_restricted(origin, target):
                return PathResult((origin,), SearchOutcome.ALREADY_CLOSE)
            LOGGER.debug("Direct hop %s -> %s crosses a restricted edge", origin, target)

        LOGGER.debug(
            "Searching %s -> %s (%.6f degrees, >= %d steps)",
            origin,
            target,
            distance(origin, target),
            int(distance(origin, target) / step),
        )

        started = time.monotonic()
        nodes: List[SearchNode] = [SearchNode(origin, 0.0, distance(origin, target))]
        best: Dict[GridKey, int] = {grid_key(origin, step): 0}
        closed: Set[GridKey] = set()
        sequence = 0
        frontier: List[Tuple[float, int, int]] = [(nodes[0].f, sequence, 0)]

        iterations = 0
        while frontier:
            if iterations >= self.settings.max_iterations:
                LOGGER.warning(
                    "A* gave up after %s iterations (%s -> %s)", iterations, origin, target
                )
                return PathResult((), SearchOutcome.ITERATION_LIMIT, iterations)
            elapsed = time.monotonic() - started
            if elapsed > self.settings.time_limit_seconds:
                LOGGER.warning(
                    "A* timed out after %.2fs and %s iterations (%s -> %s)",
                    elapsed,
                    iterations,
                    origin,
                    target,
                )
                return PathResult((), SearchOutcome.TIMEOUT, iterations)

            iterations += 1
            if iterations % self.settings.progress_log_interval == 0:
                LOGGER.debug(
                    "A* iteration %s: open=%s closed=%s", iterations, len(frontier), len(closed)
                )

            f_cost, _, index = heapq.heappop(frontier)
            current = nodes[index]
            key = grid_key(current.position, step)
            if key in closed or f_cost > current.f:
                continue

            if is_close(current.position, target, step) and not context.crosses_restricted(
                current.position, target
            ):
                path = self._reconstruct(nodes, index)
                if path[-1] != target:
                    path.append(target)
                LOGGER.debug(
                    "A* reached %s in %s iterations with %s positions", target, iterations, len(path)
                )
                return PathResult(tuple(path), SearchOutcome.FOUND, iterations)

            closed.add(key)

            for direction in Direction16:
                neighbour = step_from(current.position, direction, step)
                neighbour_key = grid_key(neighbour, step)
                if neighbour_key in closed:
                    continue
                tentative_g = current.g + step
                known = best.get(neighbour_key)
                if known is not None and nodes[known].g <= tentative_g:
                    continue
                if context.is_restricted(neighbour) or context.crosses_restricted(
                    current.position, neighbour
                ):
                    continue

                if known is None:
                    nodes.append(SearchNode(neighbour, tentative_g, distance(neighbour, target), index))
                    known = len(nodes) - 1
                    best[neighbour_key] = known
                else:
                    node = nodes[known]
                    node.position = neighbour
                    node.g = tentative_g
                    node.h = distance(neighbour, target)
                    node.parent = index
                sequence += 1
                heapq.heappush(frontier, (nodes[known].f, sequence, known))

        LOGGER.debug("A* exhausted the frontier after %s iterations", iterations)
        return PathResult((), SearchOutcome.EXHAUSTED, iterations)

    @staticmethod
    def _reconstruct(nodes: Sequence[SearchNode], index: int) -> List[Position]:
        """Walk parent links from ``index`` back to the root."""

        path: List[Position] = []
        current: Optional[int] = index
        while current is not None:
            node = nodes[current]
            path.append(node.position)
            current = node.parent
        path.reverse()
        return path


def find_path(context: PlanningContext, origin: Position, target: Position) -> PathResult:
    """Convenience wrapper running one search against ``context``."""

    return Pathfinder(context).find_path(origin, target)
