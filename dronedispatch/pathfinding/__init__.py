"""Mini README: Pathfinding subsystem for restricted-area aware flight legs.

Exports the A* pathfinder and its result types. Searches always run against
an explicit ``PlanningContext`` so that geofence data and path caches stay
scoped to one planning request.
"""

from .astar import PathResult, Pathfinder, SearchNode, SearchOutcome, count_moves, find_path, grid_key

__all__ = [
    "PathResult",
    "Pathfinder",
    "SearchNode",
    "SearchOutcome",
    "count_moves",
    "find_path",
    "grid_key",
]
