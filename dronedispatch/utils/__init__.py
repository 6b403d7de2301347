"""Mini README: Utility helper functions for the dispatch engine.

Currently exports the GeoJSON helpers that read restricted areas and render
flight paths for map clients.
"""

from .geojson import line_string, restricted_areas_from_geojson

__all__ = ["line_string", "restricted_areas_from_geojson"]
