"""Data models.

Defines the data structures used throughout the conversion:
- Geometry: Point, LineString, Polygon, GeometryCollection
- Feature / FeatureCollection: converted placemarks, the unit of output
- FolderRef: a KML Folder with its path name
"""

from kml_layers.models.feature import Feature, FeatureCollection
from kml_layers.models.folder import FolderRef
from kml_layers.models.geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    Point,
    Polygon,
    Position,
)

__all__ = [
    "Feature",
    "FeatureCollection",
    "FolderRef",
    "Geometry",
    "GeometryCollection",
    "LineString",
    "Point",
    "Polygon",
    "Position",
]
