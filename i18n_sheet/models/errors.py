from __future__ import annotations

"""Error kinds raised by the conversion engine.

Every error is terminal to the single conversion call that raised it; the
CLI presents ``str(error)`` verbatim.
"""

__all__ = [
    "ConversionError",
    "ParseError",
    "ExtractionError",
    "StructureError",
    "ConflictError",
    "TabularImportError",
    "SourceFormatError",
]


class ConversionError(Exception):
    """Base exception for conversion failures."""


class ParseError(ConversionError):
    """Raised when source text is not syntactically valid."""


class ExtractionError(ConversionError):
    """Raised when valid source contains no usable object literal."""


class StructureError(ConversionError):
    """Raised when a sheet or its key column cannot be discovered."""


class ConflictError(ConversionError):
    """Raised when a key is both a leaf and a dotted prefix of another key.

    Attributes:
        key: The key being processed when the conflict was found
        other_key: The key it conflicts with
        language: Language column name, when raised during an import
    """

    def __init__(self, message: str, key: str, other_key: str, language: str | None = None) -> None:
        super().__init__(message)
        self.key = key
        self.other_key = other_key
        self.language = language


class TabularImportError(ConversionError):
    """Raised when a grid lacks a header row plus at least one data row."""


class SourceFormatError(ConversionError):
    """Raised for unsupported source files or non-object documents."""
