"""Mini README: Request-scoped planning state.

Structure:
    * PlanningContext - restricted areas, drone origins and capabilities,
      search settings and the per-request path cache.

A context is built once per planning request from freshly fetched data and
passed explicitly into every pathfinding and allocation call. Nothing in
the engine keeps module-level or thread-bound state, so concurrent requests
working from different geofence snapshots never see each other's paths.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .configuration import DispatchSettings, get_settings
from .geometry import Position, segment_crosses_polygon_edge
from .logging_utils import get_logger
from .models import DroneCapability, RestrictedArea

LOGGER = get_logger(__name__)


class PlanningContext:
    """Data snapshot and caches for a single planning request."""

    def __init__(
        self,
        *,
        restricted_areas: Optional[Iterable[RestrictedArea]] = None,
        origins: Optional[Mapping[int, Position]] = None,
        capabilities: Optional[Mapping[int, DroneCapability]] = None,
        settings: Optional[DispatchSettings] = None,
    ) -> None:
        self.restricted_areas: List[RestrictedArea] = list(restricted_areas or [])
        self.origins: Dict[int, Position] = dict(origins or {})
        self.capabilities: Dict[int, DroneCapability] = dict(capabilities or {})
        self.settings = settings or get_settings()
        # values are PathResult instances; typed loosely to avoid an import cycle
        self._path_cache: Dict[Tuple[Position, Position], object] = {}
        LOGGER.debug(
            "Planning context with %s restricted areas and %s drones",
            len(self.restricted_areas),
            len(self.origins),
        )

    @property
    def step_size(self) -> float:
        return self.settings.step_size

    def has_drone_data(self, drone_id: int) -> bool:
        return drone_id in self.origins and drone_id in self.capabilities

    def origin_of(self, drone_id: int) -> Position:
        if drone_id not in self.origins:
            raise KeyError(f"Drone {drone_id} has no known origin")
        return self.origins[drone_id]

    def capability_of(self, drone_id: int) -> DroneCapability:
        if drone_id not in self.capabilities:
            raise KeyError(f"Drone {drone_id} has no known capability")
        return self.capabilities[drone_id]

    def is_restricted(self, point: Position) -> bool:
        """True if ``point`` lies in or on any restricted area."""

        return any(area.contains(point) for area in self.restricted_areas)

    def crosses_restricted(self, start: Position, end: Position) -> bool:
        """True if the straight move ``start -> end`` touches a restricted edge."""

        return any(
            segment_crosses_polygon_edge(start, end, area.vertices)
            for area in self.restricted_areas
        )

    def cached_path(self, origin: Position, target: Position) -> Optional[object]:
        return self._path_cache.get((origin, target))

    def remember_path(self, origin: Position, target: Position, result: object) -> None:
        self._path_cache[(origin, target)] = result

    @property
    def cached_path_count(self) -> int:
        return len(self._path_cache)
