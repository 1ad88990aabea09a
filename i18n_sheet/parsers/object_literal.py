from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import PurePath

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ..models.errors import ExtractionError, ParseError
from ..models.value_tree import Mapping, Placeholder, Scalar, Sequence, ValueTree

"""Object-literal extraction from JavaScript / TypeScript translation files.

Source text is parsed with tree-sitter, then a visitor walks the syntax tree
in document order looking for the first of:

    const vi = { ... }            (any variable declarator, exported or not)
    export const vi = { ... }
    export default { ... }

The matched object literal is converted to a Mapping. Expressions that cannot
be evaluated statically become Placeholder leaves, so extraction never fails
on syntactically valid input once a candidate is found.
"""

__all__ = [
    "LanguageVariant",
    "variant_for_filename",
    "parse_source",
    "extract_object_literal",
]

logger = logging.getLogger(__name__)

EXPECTED_PATTERN_HINT = "Expected format: const variableName = { ... }"


class LanguageVariant(Enum):
    """Grammar selection; only affects which syntax is accepted."""
    TYPED = "typed"  # TypeScript
    UNTYPED = "untyped"  # JavaScript (+ JSX)


_TYPED_SUFFIXES = {".ts", ".mts", ".cts"}
_UNTYPED_SUFFIXES = {".js", ".mjs", ".cjs", ".jsx"}

_LANGUAGES: dict[LanguageVariant, Language] = {}


def _language(variant: LanguageVariant) -> Language:
    if variant not in _LANGUAGES:
        if variant is LanguageVariant.TYPED:
            _LANGUAGES[variant] = Language(tree_sitter_typescript.language_typescript())
        else:
            _LANGUAGES[variant] = Language(tree_sitter_javascript.language())
    return _LANGUAGES[variant]


def variant_for_filename(filename: str) -> LanguageVariant:
    """Pick the grammar variant from a file suffix (.ts family -> typed)."""
    suffix = PurePath(filename).suffix.lower()
    if suffix in _TYPED_SUFFIXES:
        return LanguageVariant.TYPED
    if suffix in _UNTYPED_SUFFIXES:
        return LanguageVariant.UNTYPED
    raise ValueError(f"not a JavaScript/TypeScript file: {filename}")


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return None


def parse_source(source_text: str, variant: LanguageVariant, filename: str = "<source>") -> Node:
    """Parse source text and return the root node.

    Raises:
        ParseError: If the parser reports any syntax error; the message
            carries the 1-based line/column of the first error node.
    """
    parser = Parser(_language(variant))
    tree = parser.parse(source_text.encode("utf-8"))
    root = tree.root_node
    error = _first_error(root)
    if error is not None:
        line, column = error.start_point[0] + 1, error.start_point[1] + 1
        if error.is_missing:
            detail = f"missing '{error.type}'"
        else:
            snippet = _text(error).strip().splitlines()
            detail = f"unexpected '{snippet[0][:40]}'" if snippet else "unexpected end of input"
        raise ParseError(
            f"Failed to parse {filename}: Invalid syntax at line {line}, column {column}: {detail}"
        )
    return root


# --- literal decoding -------------------------------------------------------

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def _text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def _decode_escape(seq: str) -> str:
    """Decode one JS escape sequence (including the leading backslash)."""
    body = seq[1:]
    if not body:
        return ""
    head = body[0]
    if head in _SIMPLE_ESCAPES and len(body) == 1:
        return _SIMPLE_ESCAPES[head]
    if re.fullmatch(r"[0-7]{1,3}", body):  # legacy octal (\101 -> "A")
        return chr(int(body, 8))
    if head == "x" and len(body) == 3:
        return chr(int(body[1:], 16))
    if head == "u":
        digits = body[2:-1] if body.startswith("u{") else body[1:]
        return chr(int(digits, 16))
    if head in "\r\n\u2028\u2029":
        return ""  # line continuation
    return body


def _join_code_units(parts: list[str]) -> str:
    # "\\uD83D\\uDE00" のようなサロゲートペアを 1 文字に結合
    return "".join(parts).encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def _string_value(node: Node) -> str:
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "escape_sequence":
            parts.append(_decode_escape(_text(child)))
        elif child.type in ("string_fragment", "html_character_reference"):
            parts.append(_text(child))
    return _join_code_units(parts)


_NUMBER_PREFIX = re.compile(r"^0[xXoObB]")


def _number_value(text: str) -> int | float:
    cleaned = text.replace("_", "")
    if cleaned.endswith("n"):  # BigInt
        cleaned = cleaned[:-1]
    if _NUMBER_PREFIX.match(cleaned):
        return int(cleaned, 0)
    if re.fullmatch(r"0[0-7]+", cleaned):  # legacy octal
        return int(cleaned, 8)
    if re.fullmatch(r"\d+", cleaned):
        return int(cleaned, 10)
    return float(cleaned)


def _unwrap(node: Node) -> Node:
    # ( {...} ) / {...} as const / {...} satisfies T
    while node.type in ("parenthesized_expression", "as_expression", "satisfies_expression"):
        inner = node.named_children[0] if node.named_children else None
        if inner is None:
            break
        node = inner
    return node


# --- conversion ---------------------------------------------------------------

def _property_key(key: Node) -> str | None:
    if key.type == "property_identifier":
        return _text(key)
    if key.type == "string":
        return _string_value(key)
    return None


def _object_to_mapping(node: Node) -> Mapping:
    entries: dict[str, ValueTree] = {}
    for prop in node.named_children:
        if prop.type == "pair":
            key_node = prop.child_by_field_name("key")
            value_node = prop.child_by_field_name("value")
            if key_node is None or value_node is None:
                continue
            key = _property_key(key_node)
            if key is None:
                logger.debug("skip unsupported property key kind: %s", key_node.type)
                continue
            entries[key] = _convert_value(value_node)
        elif prop.type == "shorthand_property_identifier":
            entries[_text(prop)] = Placeholder("identifier")
        # spread_element / method_definition / comment: skipped
    return Mapping(entries)


def _array_to_sequence(node: Node) -> Sequence:
    items: list[ValueTree] = []
    pending = False
    for child in node.children:
        if child.type == ",":
            if not pending:
                items.append(Scalar(None))  # elided element
            pending = False
        elif child.is_named and child.type != "comment":
            items.append(_convert_value(child))
            pending = True
    return Sequence(tuple(items))


def _template_value(node: Node) -> ValueTree:
    if any(c.type == "template_substitution" for c in node.named_children):
        return Placeholder(node.type)
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "escape_sequence":
            parts.append(_decode_escape(_text(child)))
        elif child.type == "string_fragment":
            parts.append(_text(child))
    if not node.named_children:
        # 古い grammar では断片ノードが出ないため生テキストから取り出す
        return Scalar(_text(node)[1:-1])
    return Scalar(_join_code_units(parts))


def _convert_value(node: Node) -> ValueTree:
    node = _unwrap(node)
    kind = node.type
    if kind == "string":
        return Scalar(_string_value(node))
    if kind == "number":
        return Scalar(_number_value(_text(node)))
    if kind == "true":
        return Scalar(True)
    if kind == "false":
        return Scalar(False)
    if kind == "null":
        return Scalar(None)
    if kind == "object":
        return _object_to_mapping(node)
    if kind == "array":
        return _array_to_sequence(node)
    if kind == "template_string":
        return _template_value(node)
    if kind == "unary_expression":
        operand = node.child_by_field_name("argument")
        operator = node.child_by_field_name("operator")
        if operand is not None and operator is not None and operand.type == "number":
            sign = _text(operator)
            if sign in ("-", "+"):
                value = _number_value(_text(operand))
                return Scalar(-value if sign == "-" else value)
    return Placeholder(kind)


# --- candidate search -----------------------------------------------------------

class _CandidateVisitor:
    """Pre-order search for the first non-empty object literal binding.

    Each visit returns the extracted Mapping or None; the first non-None
    result ends the walk.
    """

    def visit(self, node: Node) -> Mapping | None:
        method = getattr(self, f"visit_{node.type}", None)
        if method is not None:
            found = method(node)
            if found is not None:
                return found
        return self.generic_visit(node)

    def generic_visit(self, node: Node) -> Mapping | None:
        for child in node.named_children:
            found = self.visit(child)
            if found is not None:
                return found
        return None

    def _candidate(self, value: Node | None) -> Mapping | None:
        if value is None:
            return None
        value = _unwrap(value)
        if value.type != "object":
            return None
        mapping = _object_to_mapping(value)
        return mapping if len(mapping) > 0 else None

    def visit_variable_declarator(self, node: Node) -> Mapping | None:
        return self._candidate(node.child_by_field_name("value"))

    def visit_export_statement(self, node: Node) -> Mapping | None:
        # export default { ... }; named exports reach visit_variable_declarator
        return self._candidate(node.child_by_field_name("value"))


def extract_object_literal(
    source_text: str, variant: LanguageVariant, filename: str = "<source>"
) -> Mapping:
    """Extract the first exported/declared object literal as a Mapping.

    Raises:
        ParseError: Source text has a syntax error
        ExtractionError: No declarator / default export holds a non-empty object
    """
    root = parse_source(source_text, variant, filename)
    found = _CandidateVisitor().visit(root)
    if found is None:
        raise ExtractionError(f"No translation object found in {filename}. {EXPECTED_PATTERN_HINT}")
    logger.debug("extracted %d top-level keys from %s", len(found), filename)
    return found
