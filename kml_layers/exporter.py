"""KML → GeoJSON exporter.

Public entry points:
- ``export_layers(kml_bytes, base_prefix=None)`` — zip with one GeoJSON
  per folder
- ``export_merged_geojson(kml_bytes)`` — single GeoJSON of every placemark
- ``export_file(input_path, output_path)`` — path-based, the output mode
  follows the output extension:

  - ``.geojson`` → merged GeoJSON
  - ``.zip`` → layered archive
  - anything else → layered archive, ``.zip`` appended

The output file is written only after the conversion succeeded. A crash
during the final write itself can still leave a truncated file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from kml_layers.conversion import assemble_layers, assemble_merged, load_index, read_kml_bytes
from kml_layers.conversion._elements import direct_child, text
from kml_layers.core.config import ExportConfig
from kml_layers.core.constants import GEOJSON_SUFFIX, ZIP_SUFFIX
from kml_layers.core.exceptions import OutputError
from kml_layers.output.naming import resolve_base_prefix
from kml_layers.output.packaging import build_archive, layer_entries, serialize_collection

logger = logging.getLogger("kml_layers.exporter")


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Outcome of ``export_file``.

    Attributes:
        path: The file actually written.
        merged: Whether merged GeoJSON (rather than a layered zip) was written.
        layer_count: Number of GeoJSON documents written (``1`` when merged).
    """

    path: Path
    merged: bool
    layer_count: int


class KmlLayersExporter:
    """Converts KML documents to layered or merged GeoJSON output.

    Attributes:
        config: Export configuration (defaults to ``ExportConfig()``).
    """

    def __init__(self, config: ExportConfig | None = None) -> None:
        self.config = config or ExportConfig()

    # ------------------------------------------------------------------
    # Bytes API
    # ------------------------------------------------------------------

    def export_layers(self, kml_bytes: bytes, base_prefix: str | None = None) -> bytes:
        """Convert KML into a zip of per-folder GeoJSON files.

        Entry names are ``<prefix>__<folder-path>.geojson`` plus
        ``<prefix>__root.geojson`` for placemarks outside any folder.
        The prefix is ``base_prefix`` when given and non-blank, else the
        ``<Document>``'s name, else ``config.default_base_prefix``.

        Raises:
            InputError: If ``kml_bytes`` is empty.
            KmlParseError: If ``kml_bytes`` is not well-formed XML, or
                nesting exceeds ``config.max_depth``.
        """
        return build_archive(
            self.layered_entries(kml_bytes, base_prefix), compress=self.config.compress
        )

    def layered_entries(
        self, kml_bytes: bytes, base_prefix: str | None = None
    ) -> list[tuple[str, bytes]]:
        """Build the ``(entry name, GeoJSON bytes)`` pairs of a layered export."""
        index = load_index(kml_bytes)
        document = index.document()
        document_name = text(direct_child(document, "name")) if document is not None else None
        prefix = resolve_base_prefix(base_prefix, document_name, self.config.default_base_prefix)

        layers = assemble_layers(index, max_depth=self.config.max_depth)
        entries = layer_entries(layers, prefix, indent=self.config.json_indent)
        logger.info("Built %d layer entries with prefix %s", len(entries), prefix)
        return entries

    def export_merged_geojson(self, kml_bytes: bytes) -> bytes:
        """Convert KML into one GeoJSON FeatureCollection of every placemark.

        Raises:
            InputError: If ``kml_bytes`` is empty.
            KmlParseError: If ``kml_bytes`` is not well-formed XML, or
                nesting exceeds ``config.max_depth``.
        """
        index = load_index(kml_bytes)
        merged = assemble_merged(index, max_depth=self.config.max_depth)
        return serialize_collection(merged, indent=self.config.json_indent)

    # ------------------------------------------------------------------
    # Path API
    # ------------------------------------------------------------------

    def export_file(
        self,
        input_path: Path | str,
        output_path: Path | str,
        *,
        base_prefix: str | None = None,
    ) -> ExportResult:
        """Convert a KML file and write the result, choosing the mode by extension.

        Args:
            input_path: KML file to read.
            output_path: Destination. ``.geojson`` selects merged output;
                anything else selects a layered zip (``.zip`` appended
                when missing). Parent directories are created.
            base_prefix: Entry name prefix override for layered output.

        Raises:
            InputError: If the input file is missing, unreadable or empty.
            KmlParseError: If the input is not well-formed XML.
            OutputError: If the output cannot be written.
        """
        source = Path(input_path)
        kml_bytes = read_kml_bytes(source)

        target = Path(output_path)
        lowered = target.name.lower()
        merged = lowered.endswith(GEOJSON_SUFFIX)
        if merged:
            payload = self.export_merged_geojson(kml_bytes)
            layer_count = 1
        else:
            if not lowered.endswith(ZIP_SUFFIX):
                target = target.with_name(target.name + ZIP_SUFFIX)
            entries = self.layered_entries(kml_bytes, base_prefix)
            payload = build_archive(entries, compress=self.config.compress)
            layer_count = len(entries)

        write_output(target, payload)
        logger.info("Wrote %s (%d bytes) from %s", target, len(payload), source.name)
        return ExportResult(path=target, merged=merged, layer_count=layer_count)


def write_output(target: Path, payload: bytes) -> None:
    """Write ``payload`` to ``target``, creating parent directories.

    Raises:
        OutputError: If the directory or file cannot be written.
    """
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
    except OSError as exc:
        msg = f"Cannot write output {target}: {exc}"
        raise OutputError(msg) from exc
