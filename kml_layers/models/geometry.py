"""GeoJSON geometry value types.

Each geometry converted from a KML element is one of ``Point``,
``LineString``, ``Polygon`` or ``GeometryCollection``. Positions are
``(lon, lat)`` or ``(lon, lat, alt)`` float tuples, already in GeoJSON
axis order, so ``to_geojson()`` only has to turn tuples into lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, TypeAlias

Position: TypeAlias = tuple[float, ...]


def _position_list(position: Position) -> list[float]:
    return list(position)


@dataclass(frozen=True, slots=True)
class Point:
    """A single position."""

    geom_type: ClassVar[str] = "Point"

    position: Position

    def to_geojson(self) -> dict[str, object]:
        return {"type": self.geom_type, "coordinates": _position_list(self.position)}


@dataclass(frozen=True, slots=True)
class LineString:
    """An ordered sequence of at least two positions."""

    geom_type: ClassVar[str] = "LineString"

    positions: list[Position] = field(default_factory=list)

    def to_geojson(self) -> dict[str, object]:
        return {
            "type": self.geom_type,
            "coordinates": [_position_list(p) for p in self.positions],
        }


@dataclass(frozen=True, slots=True)
class Polygon:
    """An exterior ring plus zero or more hole rings.

    Attributes:
        exterior: Closed outer ring (first position equals last).
        holes: Closed inner rings, in document order.
    """

    geom_type: ClassVar[str] = "Polygon"

    exterior: list[Position] = field(default_factory=list)
    holes: list[list[Position]] = field(default_factory=list)

    @property
    def rings(self) -> list[list[Position]]:
        """All rings, exterior first."""
        return [self.exterior, *self.holes]

    def to_geojson(self) -> dict[str, object]:
        return {
            "type": self.geom_type,
            "coordinates": [[_position_list(p) for p in ring] for ring in self.rings],
        }


@dataclass(frozen=True, slots=True)
class GeometryCollection:
    """Geometries converted from the children of a KML ``<MultiGeometry>``."""

    geom_type: ClassVar[str] = "GeometryCollection"

    geometries: list[Geometry] = field(default_factory=list)

    def to_geojson(self) -> dict[str, object]:
        return {
            "type": self.geom_type,
            "geometries": [g.to_geojson() for g in self.geometries],
        }


Geometry: TypeAlias = Point | LineString | Polygon | GeometryCollection
