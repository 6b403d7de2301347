"""Mini README: Planar geometry primitives for the 16-direction move model.

Structure:
    * Position - validated, hashable (longitude, latitude) pair.
    * Direction16 - the sixteen compass bearings a drone may step along.
    * distance / is_close - Euclidean metric and goal-radius test.
    * step_from / angle_to_direction / next_position - fixed-length moves.

Distances are computed in degrees on a flat plane, which is accurate
enough at city scale. A step is always ``STEP_SIZE`` long regardless of
bearing, and ``is_close`` uses the same value as its radius because exact
coordinate equality is rarely reachable with fixed-length steps.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from ..errors import ValidationError

STEP_SIZE = 0.00015
CLOSE_RADIUS = STEP_SIZE
DIRECTION_SPACING = 22.5


@dataclass(frozen=True, slots=True)
class Position:
    """Longitude/latitude pair in degrees."""

    lng: float
    lat: float

    def __post_init__(self) -> None:
        if not (isinstance(self.lng, (int, float)) and isinstance(self.lat, (int, float))):
            raise ValidationError(f"Coordinates must be numeric, got ({self.lng!r}, {self.lat!r})")
        if not (math.isfinite(self.lng) and math.isfinite(self.lat)):
            raise ValidationError(f"Coordinates must be finite, got ({self.lng}, {self.lat})")
        if not -180.0 <= self.lng <= 180.0:
            raise ValidationError(f"Longitude {self.lng} outside [-180, 180]")
        if not -90.0 <= self.lat <= 90.0:
            raise ValidationError(f"Latitude {self.lat} outside [-90, 90]")

    def as_dict(self) -> Dict[str, float]:
        """Return the ``{"lng", "lat"}`` mapping used in plan payloads."""

        return {"lng": self.lng, "lat": self.lat}

    def as_coordinates(self) -> List[float]:
        """Return ``[lng, lat]`` as used by GeoJSON."""

        return [self.lng, self.lat]


class Direction16(Enum):
    """Compass directions, bearing measured counter-clockwise from east."""

    E = 0.0
    ENE = 22.5
    NE = 45.0
    NNE = 67.5
    N = 90.0
    NNW = 112.5
    NW = 135.0
    WNW = 157.5
    W = 180.0
    WSW = 202.5
    SW = 225.0
    SSW = 247.5
    S = 270.0
    SSE = 292.5
    SE = 315.0
    ESE = 337.5

    @property
    def bearing(self) -> float:
        return self.value


def distance(a: Position, b: Position) -> float:
    """Euclidean distance between two positions in degrees."""

    return math.hypot(a.lng - b.lng, a.lat - b.lat)


def is_close(a: Position, b: Position, radius: float = CLOSE_RADIUS) -> bool:
    """Return True when ``b`` lies strictly within ``radius`` of ``a``."""

    return distance(a, b) < radius


def step_from(position: Position, direction: Direction16, step: float = STEP_SIZE) -> Position:
    """Translate ``position`` by one step along ``direction``."""

    radians = math.radians(direction.bearing)
    return Position(
        position.lng + math.cos(radians) * step,
        position.lat + math.sin(radians) * step,
    )


def angle_to_direction(bearing: float) -> Direction16:
    """Map a bearing in degrees onto one of the sixteen directions.

    Only exact multiples of 22.5 within [0, 360] are accepted; 360 is the
    same direction as 0.
    """

    try:
        bearing = float(bearing)
    except (TypeError, ValueError) as error:
        raise ValidationError(f"Angle must be numeric, got {bearing!r}") from error
    if bearing < 0 or bearing > 360 or bearing % DIRECTION_SPACING != 0:
        raise ValidationError("Angle must be one of {0, 22.5, 45, ..., 337.5, 360}")
    members = list(Direction16)
    index = int((bearing % 360) / DIRECTION_SPACING) % len(members)
    return members[index]


def next_position(start: Position, bearing: float, step: float = STEP_SIZE) -> Position:
    """Step once from ``start`` along a raw bearing."""

    return step_from(start, angle_to_direction(bearing), step)
