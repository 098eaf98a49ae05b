"""Placemark property extraction.

Builds the flat ``str -> str`` GeoJSON properties of a placemark from:

- ``name`` and ``description`` (direct children, blank values skipped);
- the folder path (``folderPath``), when the caller supplies one;
- ``ExtendedData/Data/value``: untyped key-value pairs;
- ``ExtendedData/SchemaData/SimpleData``: typed fields of a ``<Schema>``.

Key collisions resolve first-write-wins, in the order listed above: a
``Data`` entry named ``name`` does not replace the placemark name, and
a ``SimpleData`` field never replaces a ``Data`` value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kml_layers.conversion._elements import (
    all_descendants,
    attribute,
    direct_child,
    first_descendant,
    text,
)
from kml_layers.core.constants import FOLDER_PATH_PROPERTY

if TYPE_CHECKING:
    from lxml.etree import _Element

SCALAR_FIELDS: tuple[str, ...] = ("name", "description")


def _extended_data_pairs(placemark: _Element) -> list[tuple[str, str]]:
    extended = first_descendant(placemark, "ExtendedData")
    if extended is None:
        return []

    pairs: list[tuple[str, str]] = []

    # Pattern 1: Data/value (untyped)
    for data in all_descendants(extended, "Data"):
        key = attribute(data, "name")
        value = text(direct_child(data, "value"))
        if key and key.strip() and value is not None:
            pairs.append((key, value))

    # Pattern 2: SchemaData/SimpleData (typed via Schema)
    for schema_data in all_descendants(extended, "SchemaData"):
        for simple in all_descendants(schema_data, "SimpleData"):
            key = attribute(simple, "name")
            value = text(simple)
            if key and key.strip() and value is not None:
                pairs.append((key, value))

    return pairs


def extract_properties(placemark: _Element, *, folder_path: str | None = None) -> dict[str, str]:
    """Extract the GeoJSON properties of a Placemark element.

    Args:
        placemark: The ``<Placemark>`` element.
        folder_path: Folder path to record as ``folderPath``; ignored
            when ``None`` or blank.

    Returns:
        Properties in write order. Empty when the placemark carries no
        name, description, folder path or extended data.
    """
    properties: dict[str, str] = {}

    for field_name in SCALAR_FIELDS:
        value = text(direct_child(placemark, field_name))
        if value is not None:
            properties[field_name] = value

    if folder_path and folder_path.strip():
        properties.setdefault(FOLDER_PATH_PROPERTY, folder_path)

    for key, value in _extended_data_pairs(placemark):
        properties.setdefault(key, value)

    return properties
