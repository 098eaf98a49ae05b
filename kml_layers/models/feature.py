"""Data model for converted KML features.

A Feature represents a single Placemark converted to GeoJSON: its
geometry, its flat string properties (name, description, ExtendedData)
and, when the conversion grouped features by folder, the folder path.
FeatureCollections are the unit of GeoJSON output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kml_layers.models.geometry import Geometry


@dataclass(frozen=True, slots=True)
class Feature:
    """A single Placemark converted to a GeoJSON feature.

    Attributes:
        geometry: Converted geometry. Never ``None``; placemarks without
            a recognised geometry do not become features.
        properties: Flat ``str -> str`` properties, including
            ``folderPath`` when ``folder_path`` is set.
        folder_path: Folder path of the owning folder, or ``None`` for a
            placemark outside any folder.
    """

    geometry: Geometry
    properties: dict[str, str] = field(default_factory=dict)
    folder_path: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON ``Feature`` object."""
        return {
            "type": "Feature",
            "geometry": self.geometry.to_geojson(),
            "properties": dict(self.properties),
        }


@dataclass(slots=True)
class FeatureCollection:
    """An ordered batch of features.

    Attributes:
        name: Folder path the collection was built for, or ``None`` for
            the merged output and for placemarks outside any folder.
        features: Features in input document order.
    """

    name: str | None = None
    features: list[Feature] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.features)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON ``FeatureCollection`` object."""
        return {
            "type": "FeatureCollection",
            "features": [f.to_dict() for f in self.features],
        }
