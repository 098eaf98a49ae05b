"""Placemark → Feature assembly and grouping.

Layered mode produces one FeatureCollection per non-empty folder, in
folder-walk order, plus one overflow collection for placemarks no
folder claimed. A folder claims only its *direct* Placemark children;
deeper placemarks belong to the nested folder's own collection.

Merged mode produces a single FeatureCollection with every placemark,
each tagged with the folder path of its ancestors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_layers.conversion._elements import direct_children
from kml_layers.conversion._folders import folder_path_of, walk_folders
from kml_layers.conversion._geometry import convert_geometry, find_geometry
from kml_layers.conversion._properties import extract_properties
from kml_layers.core.constants import DEFAULT_MAX_DEPTH
from kml_layers.models.feature import Feature, FeatureCollection

if TYPE_CHECKING:
    from lxml.etree import _Element

    from kml_layers.conversion._elements import ElementIndex

logger = logging.getLogger("kml_layers.conversion")


def placemark_to_feature(
    placemark: _Element,
    folder_path: str | None = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Feature | None:
    """Convert a Placemark element to a Feature.

    Returns:
        The feature, or ``None`` when the placemark has no supported
        geometry or its geometry holds too few positions.
    """
    geometry_elem = find_geometry(placemark)
    if geometry_elem is None:
        logger.debug("Dropping placemark without geometry (line %s)", placemark.sourceline)
        return None

    geometry = convert_geometry(geometry_elem, max_depth=max_depth)
    if geometry is None:
        logger.debug("Dropping placemark with empty geometry (line %s)", placemark.sourceline)
        return None

    folder_path = folder_path or None
    return Feature(
        geometry=geometry,
        properties=extract_properties(placemark, folder_path=folder_path),
        folder_path=folder_path,
    )


def assemble_layers(
    index: ElementIndex, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[FeatureCollection]:
    """Group the document's placemarks into one collection per folder.

    Returns:
        Collections for every folder that yielded at least one feature,
        in folder-walk order, followed by the overflow collection
        (``name`` is ``None``) when any unclaimed placemark converted.
    """
    claimed: set[int] = set()
    layers: list[FeatureCollection] = []

    for folder in walk_folders(index.root, max_depth=max_depth):
        collection = FeatureCollection(name=folder.path_name)
        for placemark in direct_children(folder.element, "Placemark"):
            claimed.add(index.ordinal(placemark))
            feature = placemark_to_feature(placemark, folder.path_name, max_depth=max_depth)
            if feature is not None:
                collection.features.append(feature)
        if collection.features:
            layers.append(collection)

    overflow = FeatureCollection(name=None)
    for placemark in index.placemarks():
        if index.ordinal(placemark) in claimed:
            continue
        feature = placemark_to_feature(placemark, max_depth=max_depth)
        if feature is not None:
            overflow.features.append(feature)
    if overflow.features:
        layers.append(overflow)

    logger.info(
        "Assembled %d layer(s) from %d placemark(s)",
        len(layers),
        len(index.placemarks()),
    )
    return layers


def assemble_merged(
    index: ElementIndex, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> FeatureCollection:
    """Convert every placemark of the document into a single collection."""
    merged = FeatureCollection(name=None)
    placemarks = index.placemarks()
    for placemark in placemarks:
        feature = placemark_to_feature(placemark, folder_path_of(placemark), max_depth=max_depth)
        if feature is not None:
            merged.features.append(feature)

    logger.info(
        "Merged %d feature(s) from %d placemark(s)",
        len(merged.features),
        len(placemarks),
    )
    return merged
