"""KML Folder hierarchy traversal.

Two derivations of a placemark's folder path exist:

- ``walk_folders`` walks top-down from the document container and lists
  every ``<Folder>`` at every depth with its full path name (layered
  export);
- ``folder_path_of`` scans a single element's ancestors bottom-up
  (merged export).

Both join folder names root-most first with ``FOLDER_PATH_SEPARATOR``
and substitute ``UNNAMED_FOLDER`` for folders without a name, so for an
ordinary document they agree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_layers.conversion._elements import (
    direct_child,
    direct_children,
    first_descendant,
    local_name,
    text,
)
from kml_layers.core.constants import (
    DEFAULT_MAX_DEPTH,
    FOLDER_PATH_SEPARATOR,
    UNNAMED_FOLDER,
)
from kml_layers.core.exceptions import NestingDepthError
from kml_layers.models.folder import FolderRef

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_layers.conversion")


def folder_display_name(folder: _Element) -> str:
    """Return a folder's ``<name>`` text, or ``UNNAMED_FOLDER``."""
    return text(direct_child(folder, "name")) or UNNAMED_FOLDER


def folder_scope(root: _Element) -> _Element:
    """Return the element whose direct-child folders are the top-level folders.

    That is the first ``<Document>`` (the root itself if it is one), or
    the root when the file has no Document container.
    """
    if local_name(root) == "Document":
        return root
    document = first_descendant(root, "Document")
    return document if document is not None else root


def walk_folders(root: _Element, *, max_depth: int = DEFAULT_MAX_DEPTH) -> list[FolderRef]:
    """List every Folder under the document container, depth-first pre-order.

    Siblings keep document order; each entry carries the names of all
    its ancestors plus its own, joined by ``FOLDER_PATH_SEPARATOR``.

    Raises:
        NestingDepthError: If folders nest deeper than ``max_depth``.
    """
    out: list[FolderRef] = []
    _walk(folder_scope(root), [], out, max_depth)
    logger.debug("Indexed %d folder(s)", len(out))
    return out


def _walk(parent: _Element, path: list[str], out: list[FolderRef], max_depth: int) -> None:
    for folder in direct_children(parent, "Folder"):
        path.append(folder_display_name(folder))
        if len(path) > max_depth:
            msg = f"Folder nesting exceeds the maximum depth of {max_depth}"
            raise NestingDepthError(msg)
        out.append(
            FolderRef(
                element=folder,
                path_name=FOLDER_PATH_SEPARATOR.join(path),
                depth=len(path),
            )
        )
        _walk(folder, path, out, max_depth)
        path.pop()


def folder_path_of(elem: _Element) -> str:
    """Join the names of every ancestor ``<Folder>`` of an element, root-most first.

    Returns ``""`` when the element has no Folder ancestor.
    """
    names = [
        folder_display_name(ancestor)
        for ancestor in elem.iterancestors()
        if local_name(ancestor) == "Folder"
    ]
    names.reverse()
    return FOLDER_PATH_SEPARATOR.join(names)
