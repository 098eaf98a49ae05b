"""Command-line entry point: ``kml-layers INPUT OUTPUT``.

The output extension picks the mode: ``.geojson`` writes one merged
GeoJSON, anything else writes a zip with one GeoJSON per KML folder
(``.zip`` is appended when missing).

Exit status is ``0`` on success, ``1`` on a conversion failure (with a
one-line ``error:`` message on stderr) and ``2`` on bad arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from kml_layers import __version__
from kml_layers.core.config import ExportConfig
from kml_layers.core.exceptions import ConversionError
from kml_layers.exporter import KmlLayersExporter

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("kml_layers.cli")

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kml-layers",
        description="Convert KML to GeoJSON, one file per folder or merged.",
    )
    parser.add_argument("input", help="KML file to convert")
    parser.add_argument(
        "output",
        help="output path: *.geojson for a merged file, otherwise a zip of per-folder files",
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="entry name prefix inside the zip (default: the document name)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress (-v) or debug detail (-vv)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=_LOG_LEVELS[min(args.verbose, len(_LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        exporter = KmlLayersExporter(ExportConfig.from_env())
        result = exporter.export_file(args.input, args.output, base_prefix=args.prefix)
    except ConversionError as exc:
        logger.debug("Conversion failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"input : {args.input}")
    print(f"output: {result.path}")
    print(f"layers: {result.layer_count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
