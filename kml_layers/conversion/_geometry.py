"""KML geometry → GeoJSON geometry conversion.

Supported KML geometries:
- ``Point`` → Point (first coordinate tuple)
- ``LineString`` → LineString (at least two positions)
- ``Polygon`` → Polygon (outer ring + holes, every ring force-closed)
- ``gx:Track`` → LineString built from ``gx:coord`` records
- ``MultiGeometry`` → GeometryCollection (recursive)

A geometry that yields too few positions converts to ``None`` rather
than to a malformed GeoJSON value; the placemark is then dropped.
Unsupported geometry types (Model, gx:MultiTrack, ...) are ignored.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lxml import etree

from kml_layers.conversion._coordinates import parse_coordinates, parse_track_coord
from kml_layers.conversion._elements import (
    all_descendants,
    direct_child,
    direct_children,
    first_descendant,
    is_extension_element,
    local_name,
    text,
)
from kml_layers.core.constants import DEFAULT_MAX_DEPTH
from kml_layers.core.exceptions import NestingDepthError
from kml_layers.models.geometry import (
    GeometryCollection,
    LineString,
    Point,
    Polygon,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lxml.etree import _Element

    from kml_layers.models.geometry import Geometry, Position

logger = logging.getLogger("kml_layers.conversion")

#: Lookup order when searching a scope for "its" geometry.
GEOMETRY_PRIORITY: tuple[str, ...] = ("Point", "LineString", "Polygon", "Track", "MultiGeometry")

#: Geometry types accepted as direct children of a MultiGeometry.
MULTI_GEOMETRY_MEMBERS = frozenset({"Point", "LineString", "Polygon", "MultiGeometry"})

MIN_LINE_POSITIONS = 2


# ---------------------------------------------------------------------------
# Geometry lookup
# ---------------------------------------------------------------------------


def geometry_kind(elem: _Element) -> str | None:
    """Return the supported geometry type of an element, or ``None``.

    ``Track`` only counts in the ``gx`` extension namespace.
    """
    name = local_name(elem)
    if name not in GEOMETRY_PRIORITY:
        return None
    if name == "Track" and not is_extension_element(elem):
        return None
    return name


def _first_by_priority(candidates: Iterable[_Element]) -> _Element | None:
    elements = list(candidates)
    for kind in GEOMETRY_PRIORITY:
        for elem in elements:
            if geometry_kind(elem) == kind:
                return elem
    return None


def find_geometry(scope: _Element) -> _Element | None:
    """Find the geometry element of a scope (typically a Placemark).

    Direct children are searched first, then all descendants; within
    each pass the first element of the highest-priority type wins
    (Point, LineString, Polygon, gx:Track, MultiGeometry).
    """
    found = _first_by_priority(scope.iterchildren(etree.Element))
    if found is None:
        found = _first_by_priority(scope.iterdescendants(etree.Element))
    return found


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def convert_geometry(
    elem: _Element, *, max_depth: int = DEFAULT_MAX_DEPTH, _depth: int = 1
) -> Geometry | None:
    """Convert one KML geometry element to a GeoJSON geometry.

    Returns:
        The converted geometry, or ``None`` when the element is not a
        supported geometry or does not hold enough positions.

    Raises:
        NestingDepthError: If MultiGeometry nesting exceeds ``max_depth``.
    """
    kind = geometry_kind(elem)
    if kind == "Point":
        return _convert_point(elem)
    if kind == "LineString":
        return _convert_line_string(elem)
    if kind == "Polygon":
        return _convert_polygon(elem)
    if kind == "Track":
        return _convert_track(elem)
    if kind == "MultiGeometry":
        return _convert_multi_geometry(elem, max_depth=max_depth, depth=_depth)
    logger.debug("Ignoring unsupported geometry <%s>", local_name(elem))
    return None


def close_ring(ring: list[Position]) -> list[Position]:
    """Return the ring closed: first position appended when last differs.

    Closing an already closed ring returns an equal ring.
    """
    if ring and ring[0] != ring[-1]:
        return [*ring, ring[0]]
    return list(ring)


def _coordinates_of(elem: _Element | None) -> list[Position]:
    if elem is None:
        return []
    return parse_coordinates(text(first_descendant(elem, "coordinates")))


def _convert_point(elem: _Element) -> Point | None:
    positions = _coordinates_of(elem)
    if not positions:
        return None
    return Point(position=positions[0])


def _convert_line_string(elem: _Element) -> LineString | None:
    positions = _coordinates_of(elem)
    if len(positions) < MIN_LINE_POSITIONS:
        return None
    return LineString(positions=positions)


def _outer_ring(polygon: _Element) -> list[Position]:
    outer = first_descendant(polygon, "outerBoundaryIs")
    if outer is not None:
        ring = first_descendant(outer, "LinearRing")
        if ring is not None:
            return _coordinates_of(ring)
        return []

    # Abbreviated input: coordinates (or a bare LinearRing) right under the polygon
    coordinates = direct_child(polygon, "coordinates")
    if coordinates is not None:
        return parse_coordinates(text(coordinates))
    return _coordinates_of(direct_child(polygon, "LinearRing"))


def _convert_polygon(elem: _Element) -> Polygon | None:
    exterior = _outer_ring(elem)
    if not exterior:
        return None

    holes: list[list[Position]] = []
    for boundary in all_descendants(elem, "innerBoundaryIs"):
        for ring in direct_children(boundary, "LinearRing"):
            hole = _coordinates_of(ring)
            if hole:
                holes.append(close_ring(hole))

    return Polygon(exterior=close_ring(exterior), holes=holes)


def _convert_track(elem: _Element) -> LineString | None:
    positions: list[Position] = []
    for coord in direct_children(elem, "coord"):
        if not is_extension_element(coord):
            continue
        position = parse_track_coord(text(coord))
        if position is not None:
            positions.append(position)
    if len(positions) < MIN_LINE_POSITIONS:
        return None
    return LineString(positions=positions)


def _convert_multi_geometry(
    elem: _Element, *, max_depth: int, depth: int
) -> GeometryCollection | None:
    if depth > max_depth:
        msg = f"MultiGeometry nesting exceeds the maximum depth of {max_depth}"
        raise NestingDepthError(msg)

    geometries: list[Geometry] = []
    for child in elem.iterchildren(etree.Element):
        if local_name(child) not in MULTI_GEOMETRY_MEMBERS:
            continue
        geometry = convert_geometry(child, max_depth=max_depth, _depth=depth + 1)
        if geometry is not None:
            geometries.append(geometry)

    if not geometries:
        return None
    return GeometryCollection(geometries=geometries)
