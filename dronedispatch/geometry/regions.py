"""Mini README: Polygon tests used to keep drones out of restricted areas.

Structure:
    * validate_closed_polygon - reject open or undersized vertex lists.
    * is_in_region - boundary-inclusive, even-odd point-in-polygon test.
    * segment_crosses_polygon_edge - does a single move touch any edge.

Polygons are closed vertex lists whose first and last vertices are equal,
with at least four entries. The segment test exists so that one step can
never hop across a thin no-fly zone while both endpoints stay outside it.
Zero-length polygon edges fall back to a direct distance check instead of
dividing by their length.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..errors import ValidationError
from .primitives import Position

BOUNDARY_TOLERANCE = 1e-12
ORIENTATION_TOLERANCE = 1e-20


def validate_closed_polygon(vertices: Optional[Sequence[Position]]) -> None:
    """Ensure the polygon exists, has at least four points and is closed."""

    if vertices is None or len(vertices) < 4:
        raise ValidationError("Region must be a closed polygon with at least 4 vertices")
    first, last = vertices[0], vertices[-1]
    if first.lng != last.lng or first.lat != last.lat:
        raise ValidationError("Region must be closed (last vertex repeats first)")


def _point_segment_distance(point: Position, a: Position, b: Position) -> float:
    """Shortest distance from ``point`` to segment ``ab``."""

    dx = b.lng - a.lng
    dy = b.lat - a.lat
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return math.hypot(point.lng - a.lng, point.lat - a.lat)
    t = ((point.lng - a.lng) * dx + (point.lat - a.lat) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(point.lng - (a.lng + t * dx), point.lat - (a.lat + t * dy))


def _on_segment(point: Position, a: Position, b: Position) -> bool:
    """True if ``point`` lies on segment ``ab`` within the boundary tolerance."""

    if (
        point.lng < min(a.lng, b.lng) - BOUNDARY_TOLERANCE
        or point.lng > max(a.lng, b.lng) + BOUNDARY_TOLERANCE
        or point.lat < min(a.lat, b.lat) - BOUNDARY_TOLERANCE
        or point.lat > max(a.lat, b.lat) + BOUNDARY_TOLERANCE
    ):
        return False

    nx, ny = a.lat - b.lat, b.lng - a.lng
    norm = math.hypot(nx, ny)
    if norm <= BOUNDARY_TOLERANCE:
        # degenerate edge
        return math.hypot(point.lng - a.lng, point.lat - a.lat) <= BOUNDARY_TOLERANCE
    c = -(nx * a.lng + ny * a.lat)
    return abs(nx * point.lng + ny * point.lat + c) / norm <= BOUNDARY_TOLERANCE


def is_in_region(point: Position, vertices: Optional[Sequence[Position]]) -> bool:
    """Return True if ``point`` is inside or on the border of the polygon.

    Raises:
        ValidationError: the polygon is missing, too short or not closed.
    """

    validate_closed_polygon(vertices)

    for a, b in zip(vertices, vertices[1:]):
        if _on_segment(point, a, b):
            return True

    inside = False
    for a, b in zip(vertices, vertices[1:]):
        if (a.lat > point.lat) != (b.lat > point.lat):
            crossing = a.lng + (point.lat - a.lat) * (b.lng - a.lng) / (b.lat - a.lat)
            if point.lng < crossing:
                inside = not inside
    return inside


def _orientation(p: Position, q: Position, r: Position) -> int:
    """Sign of the turn p -> q -> r: 1 counter-clockwise, -1 clockwise, 0 collinear."""

    cross = (q.lng - p.lng) * (r.lat - p.lat) - (q.lat - p.lat) * (r.lng - p.lng)
    if cross > ORIENTATION_TOLERANCE:
        return 1
    if cross < -ORIENTATION_TOLERANCE:
        return -1
    return 0


def _within_box(p: Position, q: Position, r: Position) -> bool:
    """For collinear p, q, r: does q fall within the bounding box of pr."""

    return (
        min(p.lng, r.lng) <= q.lng <= max(p.lng, r.lng)
        and min(p.lat, r.lat) <= q.lat <= max(p.lat, r.lat)
    )


def segments_intersect(p1: Position, p2: Position, q1: Position, q2: Position) -> bool:
    """Orientation-based intersection test for segments p1p2 and q1q2."""

    o1 = _orientation(p1, p2, q1)
    o2 = _orientation(p1, p2, q2)
    o3 = _orientation(q1, q2, p1)
    o4 = _orientation(q1, q2, p2)

    if o1 != o2 and o3 != o4:
        return True
    if o1 == 0 and _within_box(p1, q1, p2):
        return True
    if o2 == 0 and _within_box(p1, q2, p2):
        return True
    if o3 == 0 and _within_box(q1, p1, q2):
        return True
    if o4 == 0 and _within_box(q1, p2, q2):
        return True
    return False


def segment_crosses_polygon_edge(
    p1: Position, p2: Position, vertices: Optional[Sequence[Position]]
) -> bool:
    """Return True if the move p1 -> p2 touches any edge of the polygon."""

    validate_closed_polygon(vertices)

    for a, b in zip(vertices, vertices[1:]):
        if math.hypot(b.lng - a.lng, b.lat - a.lat) <= BOUNDARY_TOLERANCE:
            if _point_segment_distance(a, p1, p2) <= BOUNDARY_TOLERANCE:
                return True
            continue
        if segments_intersect(p1, p2, a, b):
            return True
    return False
