"""Mini README: Geometry subsystem for positions, steps and no-fly polygons.

Exports the flat-plane primitives used by the pathfinder together with the
polygon containment and edge-crossing tests that gate search expansion.
"""

from .primitives import (
    CLOSE_RADIUS,
    STEP_SIZE,
    Direction16,
    Position,
    angle_to_direction,
    distance,
    is_close,
    next_position,
    step_from,
)
from .regions import is_in_region, segment_crosses_polygon_edge, validate_closed_polygon

__all__ = [
    "CLOSE_RADIUS",
    "STEP_SIZE",
    "Direction16",
    "Position",
    "angle_to_direction",
    "distance",
    "is_close",
    "is_in_region",
    "next_position",
    "segment_crosses_polygon_edge",
    "step_from",
    "validate_closed_polygon",
]
