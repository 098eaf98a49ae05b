"""Deterministic archive entry naming for layered exports.

Entry names follow::

    {base-prefix}__{folder-path}.geojson
    {base-prefix}__root.geojson

Both parts are sanitised for use as file names: characters illegal on
common filesystems become ``_``, and any whitespace run becomes ``_``.
Case and non-ASCII characters are preserved.
"""

from __future__ import annotations

import logging
import re

from kml_layers.core.constants import (
    DEFAULT_BASE_PREFIX,
    ENTRY_SEPARATOR,
    GEOJSON_SUFFIX,
    ROOT_ENTRY_NAME,
)

logger = logging.getLogger("kml_layers.output")

# Characters not allowed in file names on Windows, plus control whitespace
_ILLEGAL_RE = re.compile(r'[\\/:*?"<>|\r\n\t]+')
_WHITESPACE_RE = re.compile(r"\s+")


def sanitise_filename(value: str) -> str:
    """Make a string safe to use as (part of) a file name.

    - NUL characters become spaces
    - Runs of ``\\ / : * ? " < > |`` CR LF TAB become ``_``
    - Runs of whitespace become ``_``
    """
    out = value.replace("\x00", " ")
    out = _ILLEGAL_RE.sub("_", out)
    return _WHITESPACE_RE.sub("_", out)


def resolve_base_prefix(
    override: str | None,
    document_name: str | None,
    default: str = DEFAULT_BASE_PREFIX,
) -> str:
    """Pick and sanitise the archive entry prefix.

    The first non-blank of ``override`` (trimmed), ``document_name`` and
    ``default`` wins.
    """
    if override is not None and override.strip():
        chosen = override.strip()
    elif document_name is not None and document_name.strip():
        chosen = document_name
    else:
        chosen = default
    return sanitise_filename(chosen)


def build_entry_name(base_prefix: str, folder_path: str | None) -> str:
    """Build the archive entry name for a folder, or for the root group when ``None``."""
    part = ROOT_ENTRY_NAME if folder_path is None else sanitise_filename(folder_path)
    return f"{base_prefix}{ENTRY_SEPARATOR}{part}{GEOJSON_SUFFIX}"


def dedupe_entry_name(name: str, taken: set[str]) -> str:
    """Return ``name``, or ``name`` with ``_2``, ``_3``, ... before the suffix if taken.

    The returned name is added to ``taken``.
    """
    candidate = name
    if candidate in taken:
        stem = name.removesuffix(GEOJSON_SUFFIX)
        counter = 2
        while f"{stem}_{counter}{GEOJSON_SUFFIX}" in taken:
            counter += 1
        candidate = f"{stem}_{counter}{GEOJSON_SUFFIX}"
        logger.warning("Duplicate archive entry %s renamed to %s", name, candidate)
    taken.add(candidate)
    return candidate
