"""GeoJSON serialisation and zip packaging.

Everything is built in memory. Callers write the returned bytes only
once the whole conversion has succeeded, so a failed run leaves no
partial output behind.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from typing import TYPE_CHECKING

from kml_layers.core.constants import DEFAULT_JSON_INDENT
from kml_layers.output.naming import build_entry_name, dedupe_entry_name

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kml_layers.models.feature import FeatureCollection

logger = logging.getLogger("kml_layers.output")


def serialize_collection(
    collection: FeatureCollection, *, indent: int = DEFAULT_JSON_INDENT
) -> bytes:
    """Serialise a FeatureCollection to pretty-printed UTF-8 GeoJSON."""
    return json.dumps(collection.to_dict(), indent=indent, ensure_ascii=False).encode("utf-8")


def build_archive(
    entries: Iterable[tuple[str, bytes]], *, compress: bool = True
) -> bytes:
    """Bundle ``(name, data)`` entries into a zip archive, in the given order."""
    compression = zipfile.ZIP_DEFLATED if compress else zipfile.ZIP_STORED
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=compression) as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


def layer_entries(
    layers: Iterable[FeatureCollection],
    base_prefix: str,
    *,
    indent: int = DEFAULT_JSON_INDENT,
) -> list[tuple[str, bytes]]:
    """Name and serialise each layer; the ``name=None`` layer becomes the root entry.

    The root entry name is reserved: a folder that would map onto it is
    renamed like any other duplicate.
    """
    root_name = build_entry_name(base_prefix, None)
    taken: set[str] = {root_name}
    entries: list[tuple[str, bytes]] = []
    for layer in layers:
        if layer.name is None:
            name = root_name
        else:
            name = dedupe_entry_name(build_entry_name(base_prefix, layer.name), taken)
        entries.append((name, serialize_collection(layer, indent=indent)))
        logger.debug("Packaged %s (%d feature(s))", name, len(layer))
    return entries
