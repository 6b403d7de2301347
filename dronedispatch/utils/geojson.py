"""Mini README: GeoJSON helper utilities for the dispatch engine.

This module converts GeoJSON polygon payloads into restricted areas and
renders flight paths as LineString geometries. Keeping the logic isolated
avoids importing web framework dependencies when running unit tests or
reusing the helpers from the command line.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Union

from ..errors import ValidationError
from ..geometry import Position
from ..models import RestrictedArea


def line_string(path: Iterable[Position]) -> Dict[str, object]:
    """Return a GeoJSON LineString for ``path`` (possibly empty)."""

    return {
        "type": "LineString",
        "coordinates": [position.as_coordinates() for position in path],
    }


def _polygon_to_area(name: str, geometry: Dict[str, Any]) -> RestrictedArea:
    if geometry.get("type") != "Polygon":
        raise ValidationError("Only polygon GeoJSON payloads are supported")

    coordinates = geometry.get("coordinates")
    if not coordinates:
        raise ValidationError("Polygon coordinates are required")

    try:
        vertices = [Position(float(point[0]), float(point[1])) for point in coordinates[0]]
    except (TypeError, ValueError, IndexError) as error:
        raise ValidationError("Polygon coordinates must be [lng, lat] pairs") from error
    return RestrictedArea(name=name, vertices=vertices)


def restricted_areas_from_geojson(payload: Union[str, Dict[str, Any]]) -> List[RestrictedArea]:
    """Parse a Polygon, Feature or FeatureCollection into restricted areas.

    Only the outer ring of each polygon is used. Feature names come from the
    ``name`` property when present.
    """

    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as error:
            raise ValidationError("GeoJSON payload is invalid JSON") from error
    if not isinstance(payload, dict):
        raise ValidationError("GeoJSON payload must be an object")

    if payload.get("type") == "FeatureCollection":
        features = payload.get("features") or []
    elif payload.get("type") == "Feature":
        features = [payload]
    else:
        features = [{"geometry": payload, "properties": {}}]

    areas: List[RestrictedArea] = []
    for index, feature in enumerate(features):
        properties = feature.get("properties") or {}
        name = str(properties.get("name", f"area-{index}"))
        areas.append(_polygon_to_area(name, feature.get("geometry") or {}))
    return areas
