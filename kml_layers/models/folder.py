"""Folder reference produced by the folder walker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lxml.etree import _Element


@dataclass(frozen=True, slots=True)
class FolderRef:
    """A ``<Folder>`` element paired with its full lineage name.

    Attributes:
        element: The ``<Folder>`` element.
        path_name: Ancestor folder names, top-level first and this folder
            last, joined by ``FOLDER_PATH_SEPARATOR``.
        depth: Nesting depth, ``1`` for a top-level folder.
    """

    element: _Element
    path_name: str
    depth: int = 1
