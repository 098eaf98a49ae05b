"""Tests for placemark assembly into layered and merged collections.

Covers:
- One collection per non-empty folder, in folder-walk order
- A folder claims only its direct Placemark children
- Overflow collection for unclaimed placemarks, always last
- Placemarks without usable geometry are dropped, never moved to overflow
- Merged mode: every placemark, folderPath from ancestors
- Layered and merged modes agree on placemark folder paths
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from kml_layers.conversion import (
    assemble_layers,
    assemble_merged,
    convert_layers,
    convert_merged,
    first_descendant,
    load_index,
    parse_kml_bytes,
    placemark_to_feature,
)
from kml_layers.core.exceptions import NestingDepthError
from kml_layers.models.geometry import LineString, Point


def _point(name: str, lon: float = 1.0, lat: float = 2.0) -> str:
    return (
        f"<Placemark><name>{name}</name>"
        f"<Point><coordinates>{lon},{lat}</coordinates></Point></Placemark>"
    )


def _names(features: list) -> list[str]:
    return [f.properties.get("name", "") for f in features]


class TestPlacemarkToFeature:
    def test_feature_with_folder_path(self, kml_document: Callable[..., bytes]) -> None:
        root = parse_kml_bytes(kml_document(_point("P", 3, 4)))
        placemark = first_descendant(root, "Placemark")
        assert placemark is not None

        feature = placemark_to_feature(placemark, "A_B")
        assert feature is not None
        assert feature.geometry == Point((3.0, 4.0))
        assert feature.folder_path == "A_B"
        assert feature.properties == {"name": "P", "folderPath": "A_B"}

    def test_empty_folder_path_is_none(self, kml_document: Callable[..., bytes]) -> None:
        root = parse_kml_bytes(kml_document(_point("P")))
        placemark = first_descendant(root, "Placemark")
        assert placemark is not None

        feature = placemark_to_feature(placemark, "")
        assert feature is not None
        assert feature.folder_path is None
        assert "folderPath" not in feature.properties

    def test_no_geometry(self, kml_document: Callable[..., bytes]) -> None:
        root = parse_kml_bytes(kml_document("<Placemark><name>bare</name></Placemark>"))
        placemark = first_descendant(root, "Placemark")
        assert placemark is not None
        assert placemark_to_feature(placemark) is None

    def test_empty_geometry(self, kml_document: Callable[..., bytes]) -> None:
        body = "<Placemark><LineString><coordinates>1,2</coordinates></LineString></Placemark>"
        placemark = first_descendant(parse_kml_bytes(kml_document(body)), "Placemark")
        assert placemark is not None
        assert placemark_to_feature(placemark) is None


class TestLayeredAssembly:
    def test_single_folder_without_overflow(self, kml_document: Callable[..., bytes]) -> None:
        body = (
            "<Document><name>X</name><Folder><name>A</name>"
            "<Placemark><Point><coordinates>1,2</coordinates></Point></Placemark>"
            "</Folder></Document>"
        )
        layers = convert_layers(kml_document(body))

        assert len(layers) == 1
        assert layers[0].name == "A"
        assert layers[0].features[0].geometry == Point((1.0, 2.0))
        assert layers[0].features[0].properties == {"folderPath": "A"}

    def test_folder_claims_direct_children_only(
        self, kml_document: Callable[..., bytes]
    ) -> None:
        body = (
            "<Document><Folder><name>A</name>"
            + _point("in A")
            + "<Folder><name>B</name>"
            + _point("in B")
            + "</Folder></Folder></Document>"
        )
        layers = convert_layers(kml_document(body))

        assert [layer.name for layer in layers] == ["A", "A_B"]
        assert _names(layers[0].features) == ["in A"]
        assert _names(layers[1].features) == ["in B"]

    def test_deep_placemark_with_empty_parent(
        self, kml_document: Callable[..., bytes]
    ) -> None:
        body = (
            "<Document><Folder><name>A</name><Folder><name>B</name>"
            + _point("deep")
            + "</Folder></Folder></Document>"
        )
        layers = convert_layers(kml_document(body))
        assert [layer.name for layer in layers] == ["A_B"]

    def test_overflow_is_last(self, kml_document: Callable[..., bytes]) -> None:
        body = (
            "<Document>"
            + _point("first root")
            + "<Folder><name>A</name>"
            + _point("in A")
            + "</Folder>"
            + _point("second root")
            + "</Document>"
        )
        layers = convert_layers(kml_document(body))

        assert [layer.name for layer in layers] == ["A", None]
        assert _names(layers[-1].features) == ["first root", "second root"]
        assert all(f.folder_path is None for f in layers[-1].features)
        assert all("folderPath" not in f.properties for f in layers[-1].features)

    def test_geometryless_folder_placemark_not_moved_to_overflow(
        self, kml_document: Callable[..., bytes]
    ) -> None:
        body = (
            "<Document><Folder><name>A</name>"
            "<Placemark><name>no geometry</name></Placemark>"
            "</Folder></Document>"
        )
        assert convert_layers(kml_document(body)) == []

    def test_empty_folders_omitted(self, kml_document: Callable[..., bytes]) -> None:
        body = (
            "<Document><Folder><name>Empty</name></Folder>"
            "<Folder><name>Full</name>" + _point("x") + "</Folder></Document>"
        )
        layers = convert_layers(kml_document(body))
        assert [layer.name for layer in layers] == ["Full"]

    def test_sibling_folders_with_same_name_stay_separate(
        self, kml_document: Callable[..., bytes]
    ) -> None:
        body = (
            "<Document>"
            "<Folder><name>A</name>" + _point("one") + "</Folder>"
            "<Folder><name>A</name>" + _point("two") + "</Folder>"
            "</Document>"
        )
        layers = convert_layers(kml_document(body))
        assert [layer.name for layer in layers] == ["A", "A"]
        assert [_names(layer.features) for layer in layers] == [["one"], ["two"]]

    def test_placemarks_without_document(self, kml_document: Callable[..., bytes]) -> None:
        layers = convert_layers(kml_document(_point("bare root")))
        assert len(layers) == 1
        assert layers[0].name is None

    def test_placemark_as_document_root(self) -> None:
        content = _point("alone", 1, 2).encode()
        layers = convert_layers(content)
        assert [layer.name for layer in layers] == [None]
        assert layers[0].features[0].geometry == Point((1.0, 2.0))

        merged = convert_merged(content)
        assert _names(merged.features) == ["alone"]
        assert merged.features[0].folder_path is None

    def test_every_feature_in_exactly_one_layer(self, layered_kml: Path) -> None:
        index = load_index(layered_kml.read_bytes())
        layers = assemble_layers(index)

        names = [n for layer in layers for n in _names(layer.features)]
        assert sorted(names) == sorted(
            ["Depot", "Main line 1", "Main line 2", "Reservoir A", "Valve"]
        )
        assert len(names) == len(set(names))

    def test_layered_sample(self, layered_kml: Path) -> None:
        layers = convert_layers(layered_kml.read_bytes())

        assert [layer.name for layer in layers] == [
            "Mains",
            "Mains_North",
            "Reservoirs",
            "unnamed",
            None,
        ]
        main_line = layers[0].features[0]
        assert isinstance(main_line.geometry, LineString)
        assert main_line.properties == {
            "name": "Main line 1",
            "folderPath": "Mains",
            "diameter_mm": "600",
            "material": "ductile iron",
        }
        assert layers[2].features[0].properties["capacity_m3"] == "12000"

    def test_nesting_cap(self, kml_document: Callable[..., bytes]) -> None:
        body = "<Document>" + "<Folder>" * 3 + _point("p") + "</Folder>" * 3 + "</Document>"
        assert len(convert_layers(kml_document(body), max_depth=3)) == 1
        with pytest.raises(NestingDepthError):
            convert_layers(kml_document(body), max_depth=2)


class TestMergedAssembly:
    def test_all_placemarks_in_document_order(self, layered_kml: Path) -> None:
        merged = convert_merged(layered_kml.read_bytes())

        assert merged.name is None
        assert _names(merged.features) == [
            "Depot",
            "Main line 1",
            "Main line 2",
            "Reservoir A",
            "Valve",
        ]

    def test_folder_paths(self, layered_kml: Path) -> None:
        merged = convert_merged(layered_kml.read_bytes())
        paths = [f.properties.get("folderPath") for f in merged.features]
        assert paths == [None, "Mains", "Mains_North", "Reservoirs", "unnamed"]

    def test_geometryless_placemarks_dropped(self, degenerate_kml: Path) -> None:
        merged = convert_merged(degenerate_kml.read_bytes())
        assert _names(merged.features) == ["Junk tuples"]

    def test_empty_document(self, empty_kml: Path) -> None:
        assert len(convert_merged(empty_kml.read_bytes())) == 0


class TestModeAgreement:
    """Both derivations of a placemark's folder path give the same answer."""

    def test_layered_and_merged_paths_match(self, layered_kml: Path) -> None:
        index = load_index(layered_kml.read_bytes())
        layered = {
            f.properties["name"]: f.folder_path
            for layer in assemble_layers(index)
            for f in layer.features
        }
        merged = {f.properties["name"]: f.folder_path for f in assemble_merged(index).features}
        assert layered == merged

    def test_same_feature_count(self, geometries_kml: Path) -> None:
        kml_bytes = geometries_kml.read_bytes()
        layered_total = sum(len(layer) for layer in convert_layers(kml_bytes))
        assert layered_total == len(convert_merged(kml_bytes)) == 5
