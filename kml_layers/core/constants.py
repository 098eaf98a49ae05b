"""Shared conversion constants — single source of truth.

Centralises the extension namespace, folder path and output naming
literals, and the default limits used by the conversion engine, the
output packager and the CLI.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Namespaces
# ---------------------------------------------------------------------------

GX_NAMESPACE: str = "http://www.google.com/kml/ext/2.2"
"""Google extension namespace (``gx:Track``, ``gx:coord``)."""

# ---------------------------------------------------------------------------
# Folder path naming
# ---------------------------------------------------------------------------

FOLDER_PATH_SEPARATOR: str = "_"
"""Joins ancestor folder names into a folder path."""

UNNAMED_FOLDER: str = "unnamed"
"""Display name of a folder without a ``<name>`` child."""

FOLDER_PATH_PROPERTY: str = "folderPath"
"""Feature property carrying the folder path."""

# ---------------------------------------------------------------------------
# Output naming
# ---------------------------------------------------------------------------

DEFAULT_BASE_PREFIX: str = "layers"
"""Archive entry prefix when the document has no name."""

ENTRY_SEPARATOR: str = "__"
"""Separates the base prefix from the folder part of an entry name."""

ROOT_ENTRY_NAME: str = "root"
"""Folder part of the entry holding placemarks outside any folder."""

GEOJSON_SUFFIX: str = ".geojson"
ZIP_SUFFIX: str = ".zip"

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

DEFAULT_MAX_DEPTH: int = 64
"""Maximum Folder / MultiGeometry nesting accepted in one document."""

DEFAULT_JSON_INDENT: int = 2
