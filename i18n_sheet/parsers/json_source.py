from __future__ import annotations

import json

from ..models.errors import ParseError, SourceFormatError
from ..models.value_tree import Mapping, from_plain

"""Structured-data (JSON) translation documents.

The top level must be an object; anything else is rejected before the tree
reaches the path codec.
"""

__all__ = [
    "parse_json_source",
]


def parse_json_source(text: str, filename: str = "<source>") -> Mapping:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Failed to parse {filename}: Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e
    if not isinstance(data, dict):
        raise SourceFormatError(f"Invalid JSON structure in {filename}. Expected an object.")
    tree = from_plain(data)
    assert isinstance(tree, Mapping)
    return tree
