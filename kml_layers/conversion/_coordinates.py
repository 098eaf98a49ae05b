"""KML coordinate text parsing.

KML writes coordinates as ``lon,lat[,alt]`` tuples separated by any run
of whitespace. Real files contain stray commas, blank altitudes and the
odd non-numeric token, so parsing never fails as a whole:

- a tuple with fewer than two components is skipped;
- a tuple whose longitude or latitude does not parse is skipped;
- a blank or unparsable altitude yields a 2-D position.

Non-finite values (``nan``, ``inf``) count as unparsable. Parsing uses
``float()``, which is locale-independent (the decimal point is ``.``).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kml_layers.models.geometry import Position


def _to_float(token: str) -> float | None:
    token = token.strip()
    if not token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_coordinates(text: str | None) -> list[Position]:
    """Parse KML coordinate text into ``(lon, lat[, alt])`` tuples, in input order."""
    if not text:
        return []
    positions: list[Position] = []
    for token in text.split():
        parts = token.split(",")
        if len(parts) < 2:
            continue
        lon = _to_float(parts[0])
        lat = _to_float(parts[1])
        if lon is None or lat is None:
            continue
        alt = _to_float(parts[2]) if len(parts) >= 3 else None
        positions.append((lon, lat) if alt is None else (lon, lat, alt))
    return positions


def parse_track_coord(text: str | None) -> Position | None:
    """Parse one ``gx:coord`` record (``lon lat [alt]``) to a ``(lon, lat)`` tuple.

    Altitude is not read. Returns ``None`` for records with fewer than
    two components or an unparsable longitude/latitude.
    """
    if not text:
        return None
    parts = text.split()
    if len(parts) < 2:
        return None
    lon = _to_float(parts[0])
    lat = _to_float(parts[1])
    if lon is None or lat is None:
        return None
    return (lon, lat)


def format_coordinates(positions: Iterable[Position]) -> str:
    """Serialise positions back to KML coordinate text.

    Uses ``repr`` float formatting, so ``parse_coordinates`` recovers
    the exact same values.
    """
    return " ".join(",".join(repr(float(v)) for v in position) for position in positions)
