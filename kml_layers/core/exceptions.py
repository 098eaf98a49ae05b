"""Conversion exception taxonomy.

Provides a shared base exception hierarchy for the conversion engine,
the output packager and the CLI. Every domain exception inherits from
``ConversionError`` and carries structured context fields so library
callers and the CLI report failures consistently.

Taxonomy categories
-------------------
- ``InputError``       — the input could not be read (missing, empty).
- ``KmlParseError``    — the input is not parseable markup.
- ``OutputError``      — the result could not be written.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for all conversion-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Conversion stage where the error occurred
            (e.g. ``"load"``, ``"package"``).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(self, message: str = "", *, stage: str = "", code: str = "") -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, InputError):
            return "input"
        if isinstance(self, KmlParseError):
            return "parse"
        if isinstance(self, OutputError):
            return "output"
        return "conversion"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category classes
# ---------------------------------------------------------------------------


class InputError(ConversionError):
    """Raised when the input path or byte sequence is unusable."""

    default_stage = "load"
    default_code = "INPUT_INVALID"


class KmlParseError(ConversionError):
    """Raised when the input cannot be parsed as KML markup."""

    default_stage = "load"
    default_code = "KML_PARSE_FAILED"


class NestingDepthError(KmlParseError):
    """Raised when Folder or MultiGeometry nesting exceeds the configured cap."""

    default_stage = "convert"
    default_code = "KML_NESTING_TOO_DEEP"


class OutputError(ConversionError):
    """Raised when the converted output cannot be written."""

    default_stage = "package"
    default_code = "OUTPUT_WRITE_FAILED"
