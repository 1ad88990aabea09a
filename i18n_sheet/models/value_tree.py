from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Union

"""ValueTree model: one translation document as a tagged tree.

A document is built from four node kinds:

- Scalar: string / number / boolean / null leaf
- Sequence: ordered list of nodes (treated as an opaque leaf when flattened)
- Mapping: insertion-ordered str -> node
- Placeholder: stand-in for a source expression the extractor cannot evaluate

Consumers dispatch on the node class; there is no untyped dict/list tree
flowing between modules.
"""

__all__ = [
    "Scalar",
    "Sequence",
    "Mapping",
    "Placeholder",
    "ValueTree",
    "display",
    "from_plain",
    "to_plain",
]


@dataclass(frozen=True)
class Scalar:
    value: str | int | float | bool | None


@dataclass(frozen=True)
class Sequence:
    items: tuple[ValueTree, ...] = ()


@dataclass(frozen=True)
class Mapping:
    entries: dict[str, ValueTree] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        return list(self.entries.keys())


@dataclass(frozen=True)
class Placeholder:
    """Unsupported expression kept as a tagged leaf (e.g. ``[call_expression]``)."""
    node_kind: str

    @property
    def text(self) -> str:
        return f"[{self.node_kind}]"


ValueTree = Union[Scalar, Sequence, Mapping, Placeholder]


def _display_number(value: int | float) -> str:
    if isinstance(value, float):
        if value != value:  # NaN
            return "NaN"
        if value in (float("inf"), float("-inf")):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return _js_float(value)
    return str(value)


def _js_float(value: float) -> str:
    """Render like JS ``String(number)``: exponent only below 1e-6 or from 1e21."""
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -7 < power < 21:
        # 1e-05 -> 0.00001
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def _display_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _display_number(value)
    return str(value)


def display(node: ValueTree) -> str:
    """Normalize a leaf node to its display string.

    Sequences render their elements joined with ``,``; null elements render
    empty and nested mappings render as compact JSON.
    """
    if isinstance(node, Scalar):
        return _display_scalar(node.value)
    if isinstance(node, Placeholder):
        return node.text
    if isinstance(node, Sequence):
        parts: list[str] = []
        for item in node.items:
            if isinstance(item, Scalar) and item.value is None:
                parts.append("")
            elif isinstance(item, Mapping):
                parts.append(json.dumps(to_plain(item), ensure_ascii=False, separators=(",", ":")))
            else:
                parts.append(display(item))
        return ",".join(parts)
    if isinstance(node, Mapping):
        return json.dumps(to_plain(node), ensure_ascii=False, separators=(",", ":"))
    raise TypeError(f"unsupported value tree node: {type(node).__name__}")


def from_plain(value: Any) -> ValueTree:
    """Build a ValueTree from JSON-decoded Python values."""
    if isinstance(value, dict):
        return Mapping({str(k): from_plain(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return Sequence(tuple(from_plain(v) for v in value))
    if value is None or isinstance(value, (str, int, float, bool)):
        return Scalar(value)
    raise TypeError(f"cannot convert {type(value).__name__} to a value tree")


def to_plain(node: ValueTree) -> Any:
    """Convert a ValueTree back to plain dict/list/scalar values (JSON ready)."""
    if isinstance(node, Mapping):
        return {k: to_plain(v) for k, v in node.entries.items()}
    if isinstance(node, Sequence):
        return [to_plain(v) for v in node.items]
    if isinstance(node, Placeholder):
        return node.text
    if isinstance(node, Scalar):
        return node.value
    raise TypeError(f"unsupported value tree node: {type(node).__name__}")
