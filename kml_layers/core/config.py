"""Exporter configuration loaded from environment variables.

All configuration values have sensible defaults, so ``ExportConfig()``
is usable as-is. ``from_env()`` raises ``ConfigValidationError`` if any
value is out of its valid range, catching bad configuration before a
conversion starts.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from kml_layers.core.constants import (
    DEFAULT_BASE_PREFIX,
    DEFAULT_JSON_INDENT,
    DEFAULT_MAX_DEPTH,
)
from kml_layers.core.exceptions import ConversionError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(ConversionError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Immutable exporter configuration.

    Attributes:
        default_base_prefix: Archive entry prefix used when the document
            has no ``<name>`` and no override is given.
        json_indent: Indentation of the pretty-printed GeoJSON text.
        max_depth: Maximum Folder / MultiGeometry nesting depth.
        compress: Whether archive entries are deflated (else stored).
    """

    default_base_prefix: str = DEFAULT_BASE_PREFIX
    json_indent: int = DEFAULT_JSON_INDENT
    max_depth: int = DEFAULT_MAX_DEPTH
    compress: bool = True

    @classmethod
    def from_env(cls) -> ExportConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range, not an
                integer where one is expected, or a boolean flag is not
                recognised.
        """
        config = cls(
            default_base_prefix=os.getenv("KML_LAYERS_DEFAULT_PREFIX", DEFAULT_BASE_PREFIX),
            json_indent=_parse_int(
                "KML_LAYERS_JSON_INDENT",
                os.getenv("KML_LAYERS_JSON_INDENT", str(DEFAULT_JSON_INDENT)),
            ),
            max_depth=_parse_int(
                "KML_LAYERS_MAX_DEPTH", os.getenv("KML_LAYERS_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))
            ),
            compress=_parse_bool(
                "KML_LAYERS_ZIP_COMPRESS", os.getenv("KML_LAYERS_ZIP_COMPRESS", "true")
            ),
        )
        _validate(config)
        return config


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigValidationError(key, raw, "must be an integer") from None


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def _validate(config: ExportConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.default_base_prefix.strip():
        raise ConfigValidationError(
            "KML_LAYERS_DEFAULT_PREFIX",
            config.default_base_prefix,
            "must not be empty",
        )

    if config.json_indent < 0:
        raise ConfigValidationError(
            "KML_LAYERS_JSON_INDENT",
            config.json_indent,
            "must be >= 0",
        )

    if config.max_depth < 1:
        raise ConfigValidationError(
            "KML_LAYERS_MAX_DEPTH",
            config.max_depth,
            "must be >= 1",
        )
