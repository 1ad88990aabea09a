"""Source document parsers (JSON and JavaScript/TypeScript object literals)."""

from .json_source import parse_json_source
from .object_literal import LanguageVariant, extract_object_literal, variant_for_filename

__all__ = [
    "LanguageVariant",
    "extract_object_literal",
    "parse_json_source",
    "variant_for_filename",
]
