"""Namespace-agnostic element lookup over a parsed KML tree.

KML files in the wild use the 2.2 namespace, the older 2.0/2.1
namespaces, a ``kml:`` prefix, or no namespace at all. Every lookup here
therefore compares the *local* tag name only: ``{uri}`` and any
``prefix:`` are stripped before comparing. The namespace URI is looked
at in one place, ``is_extension_element``, to tell ``gx:Track`` apart
from a core element of the same local name.

Descendant queries exclude the starting element, skip comments and
processing instructions, and return elements in document pre-order.
No lookup mutates the tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from kml_layers.core.constants import GX_NAMESPACE

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lxml.etree import _Element

# ---------------------------------------------------------------------------
# Tag names
# ---------------------------------------------------------------------------


def local_name(elem: _Element) -> str:
    """Return the tag name without namespace URI or prefix.

    Comments and processing instructions have no local name (``""``).
    """
    tag = elem.tag
    if not isinstance(tag, str):
        return ""
    return tag.rpartition("}")[2].rpartition(":")[2]


def namespace_of(elem: _Element) -> str:
    """Return the namespace URI of an element, ``""`` when it has none."""
    tag = elem.tag
    if isinstance(tag, str) and tag.startswith("{"):
        return tag[1:].partition("}")[0]
    return ""


def is_extension_element(elem: _Element) -> bool:
    """Whether the element belongs to the Google ``gx`` extension namespace."""
    return namespace_of(elem) == GX_NAMESPACE


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def _descendants(root: _Element) -> Iterator[_Element]:
    return root.iterdescendants(etree.Element)


def first_descendant(root: _Element, name: str) -> _Element | None:
    """Return the first descendant with the given local name, in document order."""
    for elem in _descendants(root):
        if local_name(elem) == name:
            return elem
    return None


def all_descendants(root: _Element, name: str) -> list[_Element]:
    """Return every descendant with the given local name, in document order."""
    return [elem for elem in _descendants(root) if local_name(elem) == name]


def direct_child(root: _Element, name: str) -> _Element | None:
    """Return the first direct child with the given local name."""
    for elem in root.iterchildren(etree.Element):
        if local_name(elem) == name:
            return elem
    return None


def direct_children(root: _Element, name: str) -> list[_Element]:
    """Return every direct child with the given local name, in document order."""
    return [elem for elem in root.iterchildren(etree.Element) if local_name(elem) == name]


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


def text(elem: _Element | None) -> str | None:
    """Return the trimmed text content of an element, ``None`` when blank.

    Text content includes the text of nested elements and CDATA sections,
    but not comments.
    """
    if elem is None:
        return None
    content = etree.tostring(elem, method="text", encoding="unicode", with_tail=False)
    content = content.strip()
    return content or None


def attribute(elem: _Element | None, name: str) -> str | None:
    """Return an attribute value verbatim, ``None`` when absent."""
    if elem is None:
        return None
    return elem.get(name)


# ---------------------------------------------------------------------------
# Per-run index
# ---------------------------------------------------------------------------


class ElementIndex:
    """Local-name index over one parsed tree, built once per conversion run.

    Every element gets a stable ordinal (its position in document
    pre-order, the root being ``0``). The ordinal, not the element
    object, is what callers use to remember elements across passes.
    """

    def __init__(self, root: _Element) -> None:
        self.root = root
        self._elements: list[_Element] = list(root.iter(etree.Element))
        self._ordinals: dict[_Element, int] = {
            elem: idx for idx, elem in enumerate(self._elements)
        }
        self._by_name: dict[str, list[_Element]] = {}
        for elem in self._elements[1:]:
            self._by_name.setdefault(local_name(elem), []).append(elem)

    def __len__(self) -> int:
        return len(self._elements)

    def ordinal(self, elem: _Element) -> int:
        """Return the document-order ordinal of an element of this tree.

        Raises:
            KeyError: If the element does not belong to the indexed tree.
        """
        return self._ordinals[elem]

    def find_all(self, name: str) -> list[_Element]:
        """Every descendant of the root with the given local name."""
        return list(self._by_name.get(name, ()))

    def find_first(self, name: str) -> _Element | None:
        """The first descendant of the root with the given local name."""
        found = self._by_name.get(name)
        return found[0] if found else None

    def placemarks(self) -> list[_Element]:
        """Every ``<Placemark>`` in the document, in document order.

        Includes the root when the document is a bare Placemark.
        """
        found = self.find_all("Placemark")
        if local_name(self.root) == "Placemark":
            found.insert(0, self.root)
        return found

    def document(self) -> _Element | None:
        """The first ``<Document>`` container, or ``None``."""
        if local_name(self.root) == "Document":
            return self.root
        return self.find_first("Document")
