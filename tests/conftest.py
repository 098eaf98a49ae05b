"""Shared pytest fixtures for the KML Layers test suite."""

from collections.abc import Callable
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def layered_kml(data_dir: Path) -> Path:
    """Path to a KML with root placemarks and nested, named and unnamed folders."""
    return data_dir / "01_water_roads_layers.kml"


@pytest.fixture()
def geometries_kml(data_dir: Path) -> Path:
    """Path to a KML with one placemark per supported geometry type."""
    return data_dir / "02_all_geometries.kml"


# ---------------------------------------------------------------------------
# Edge-case KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def empty_file_kml(edge_cases_dir: Path) -> Path:
    """Path to a zero-byte file."""
    return edge_cases_dir / "10_empty_file.kml"


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "11_malformed_not_xml.kml"


@pytest.fixture()
def unclosed_tags_kml(edge_cases_dir: Path) -> Path:
    """Path to XML with an unclosed tag."""
    return edge_cases_dir / "12_malformed_unclosed_tags.kml"


@pytest.fixture()
def empty_kml(edge_cases_dir: Path) -> Path:
    """Path to a valid KML with no placemarks."""
    return edge_cases_dir / "13_empty_no_features.kml"


@pytest.fixture()
def degenerate_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML with degenerate and unsupported geometries."""
    return edge_cases_dir / "15_degenerate_geometries.kml"


# ---------------------------------------------------------------------------
# Inline KML helpers
# ---------------------------------------------------------------------------


GX_NS = 'xmlns:gx="http://www.google.com/kml/ext/2.2"'


def _wrap_kml(body: str, *, extra_ns: str = GX_NS) -> bytes:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<kml xmlns="http://www.opengis.net/kml/2.2" {extra_ns}>{body}</kml>'
    ).encode()


@pytest.fixture()
def kml_document() -> Callable[..., bytes]:
    """Return a helper wrapping a KML fragment in a ``<kml>`` root.

    The root declares the KML 2.2 default namespace and the ``gx`` prefix.
    """
    return _wrap_kml
