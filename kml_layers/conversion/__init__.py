"""KML → GeoJSON conversion engine — composable pipeline.

Converts a parsed KML document into GeoJSON FeatureCollections, either
one per ``<Folder>`` (layered) or a single merged collection.

The pipeline is split into focused stages:
- **_loading**: bytes → lxml tree (hardened parser)
- **_elements**: namespace-agnostic lookups and the per-run element index
- **_coordinates**: KML coordinate text → position tuples
- **_geometry**: KML geometry element → GeoJSON geometry
- **_properties**: Placemark name/description/ExtendedData → properties
- **_folders**: Folder hierarchy walk and folder path names
- **_assembler**: Placemark → Feature, grouped by folder or merged

Supported KML structures:
- Point, LineString, Polygon (with holes), gx:Track, MultiGeometry
- Nested Folder hierarchies (folder path as ``folderPath`` property)
- ExtendedData/Data and Schema/SchemaData typed metadata
- Degenerate input: short tuples skipped, unclosed rings auto-closed,
  placemarks without usable geometry dropped
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_layers.conversion._assembler import (
    assemble_layers,
    assemble_merged,
    placemark_to_feature,
)
from kml_layers.conversion._coordinates import (
    format_coordinates,
    parse_coordinates,
    parse_track_coord,
)
from kml_layers.conversion._elements import (
    ElementIndex,
    all_descendants,
    attribute,
    direct_child,
    direct_children,
    first_descendant,
    is_extension_element,
    local_name,
    text,
)
from kml_layers.conversion._folders import folder_path_of, walk_folders
from kml_layers.conversion._geometry import close_ring, convert_geometry, find_geometry
from kml_layers.conversion._loading import parse_kml_bytes, read_kml_bytes
from kml_layers.conversion._properties import extract_properties
from kml_layers.core.constants import DEFAULT_MAX_DEPTH

if TYPE_CHECKING:
    from kml_layers.models.feature import FeatureCollection

logger = logging.getLogger("kml_layers.conversion")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "ElementIndex",
    "all_descendants",
    "assemble_layers",
    "assemble_merged",
    "attribute",
    "close_ring",
    "convert_geometry",
    "convert_layers",
    "convert_merged",
    "direct_child",
    "direct_children",
    "extract_properties",
    "find_geometry",
    "first_descendant",
    "folder_path_of",
    "format_coordinates",
    "is_extension_element",
    "load_index",
    "local_name",
    "parse_coordinates",
    "parse_kml_bytes",
    "parse_track_coord",
    "placemark_to_feature",
    "read_kml_bytes",
    "text",
    "walk_folders",
]


def load_index(kml_bytes: bytes) -> ElementIndex:
    """Parse KML bytes and index the resulting tree.

    Raises:
        InputError: If ``kml_bytes`` is empty.
        KmlParseError: If ``kml_bytes`` is not well-formed XML.
    """
    index = ElementIndex(parse_kml_bytes(kml_bytes))
    logger.info(
        "Parsed KML document: %d element(s), %d placemark(s)",
        len(index),
        len(index.placemarks()),
    )
    return index


def convert_layers(
    kml_bytes: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[FeatureCollection]:
    """Convert KML bytes into one FeatureCollection per non-empty folder.

    The last collection, with ``name`` set to ``None``, holds the
    placemarks outside any folder (when there are any).
    """
    return assemble_layers(load_index(kml_bytes), max_depth=max_depth)


def convert_merged(kml_bytes: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH) -> FeatureCollection:
    """Convert KML bytes into a single FeatureCollection of every placemark."""
    return assemble_merged(load_index(kml_bytes), max_depth=max_depth)
