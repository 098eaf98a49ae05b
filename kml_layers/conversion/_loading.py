"""KML input loading.

Reads raw bytes from disk and parses them into an lxml element tree.
Parsing is hardened the same way for every caller: no entity
resolution, no network access, no huge-tree mode.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lxml import etree

from kml_layers.conversion._elements import local_name
from kml_layers.core.exceptions import InputError, KmlParseError

if TYPE_CHECKING:
    from pathlib import Path

    from lxml.etree import _Element

logger = logging.getLogger("kml_layers.conversion")


def read_kml_bytes(kml_path: Path) -> bytes:
    """Read a KML file from disk.

    Raises:
        InputError: If the path is not a regular file or cannot be read.
    """
    if not kml_path.is_file():
        msg = f"KML file not found: {kml_path.absolute()}"
        raise InputError(msg)
    try:
        return kml_path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read KML file: {exc}"
        raise InputError(msg) from exc


def parse_kml_bytes(content: bytes) -> _Element:
    """Parse KML bytes and return the root element.

    Raises:
        InputError: If ``content`` is empty.
        KmlParseError: If ``content`` is not well-formed XML.
    """
    if not content or not content.strip():
        msg = "KML input is empty"
        raise InputError(msg)

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        root: _Element = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML: {exc}"
        raise KmlParseError(msg) from exc

    if local_name(root) not in ("kml", "Document", "Folder", "Placemark"):
        logger.warning("Unexpected root element <%s>; converting anyway", local_name(root))
    return root
