from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models.errors import ConflictError
from ..models.value_tree import Mapping, Scalar, ValueTree, display

"""Dotted-path codec: nested ValueTree <-> flat ``{"a.b": "value"}`` map.

Invariant of a FlatMap: no key is a strict dotted prefix of another key
(``a`` and ``a.b`` never coexist). unflatten enforces it per entry, and
check_prefix_conflicts runs the full pairwise scan used by the importer.
"""

__all__ = [
    "flatten",
    "unflatten",
    "find_prefix_conflict",
    "check_prefix_conflicts",
]

logger = logging.getLogger(__name__)

SEPARATOR = "."


def flatten(tree: Mapping, prefix: str = "") -> dict[str, str]:
    """Flatten a mapping into dotted-path leaves.

    Sequences and placeholders are stored as a single display string; empty
    nested mappings contribute no keys.
    """
    result: dict[str, str] = {}
    for key, value in tree.entries.items():
        path = f"{prefix}{SEPARATOR}{key}" if prefix else key
        if isinstance(value, Mapping):
            result.update(flatten(value, path))
        else:
            result[path] = display(value)
    return result


def _first_leaf_path(node: dict[str, object], path: str) -> str:
    # 既存のネスト済みキーを 1 つ特定してエラーメッセージに載せる
    for key, value in node.items():
        child = f"{path}{SEPARATOR}{key}"
        if isinstance(value, dict) and value:
            return _first_leaf_path(value, child)
        return child
    return path


def _to_tree(node: dict[str, object]) -> Mapping:
    entries: dict[str, ValueTree] = {}
    for key, value in node.items():
        if isinstance(value, dict):
            entries[key] = _to_tree(value)
        else:
            entries[key] = Scalar(value)  # type: ignore[arg-type]
    return Mapping(entries)


def unflatten(flat: dict[str, str]) -> Mapping:
    """Rebuild a nested Mapping from dotted-path keys.

    Raises:
        ConflictError: On the first entry (in entry order) whose path collides
            with a leaf stored at one of its prefixes, or whose path is
            already a container for longer keys.
    """
    root: dict[str, object] = {}
    for key, value in flat.items():
        segments = key.split(SEPARATOR)
        current = root
        for i, segment in enumerate(segments[:-1]):
            existing = current.get(segment)
            if existing is not None and not isinstance(existing, dict):
                prefix = SEPARATOR.join(segments[: i + 1])
                raise ConflictError(
                    f'Key conflict: Cannot create nested path "{key}" because "{prefix}" '
                    f"already exists as a value (not an object). You cannot have both "
                    f'"{prefix}" and "{key}" as keys.',
                    key=key,
                    other_key=prefix,
                )
            if existing is None:
                existing = {}
                current[segment] = existing
            current = existing  # type: ignore[assignment]

        final = segments[-1]
        if isinstance(current.get(final), dict):
            nested = _first_leaf_path(current[final], key)  # type: ignore[arg-type]
            raise ConflictError(
                f'Key conflict: Cannot set "{key}" as a value because it already exists '
                f'as an object with nested properties (e.g. "{nested}").',
                key=key,
                other_key=nested,
            )
        current[final] = value
    return _to_tree(root)


def _is_dotted_prefix(prefix: str, key: str) -> bool:
    return key.startswith(prefix + SEPARATOR)


def find_prefix_conflict(keys: Iterable[str]) -> tuple[str, str] | None:
    """Return the first pair (in entry order) where one key nests under the other."""
    ordered = list(keys)
    for i in range(len(ordered)):
        for j in range(i + 1, len(ordered)):
            a, b = ordered[i], ordered[j]
            if _is_dotted_prefix(a, b) or _is_dotted_prefix(b, a):
                return a, b
    return None


def check_prefix_conflicts(flat: dict[str, str], language: str | None = None) -> None:
    """Run the pairwise prefix scan over ``flat`` and raise on the first conflict."""
    pair = find_prefix_conflict(flat.keys())
    if pair is None:
        return
    a, b = pair
    where = f' in language "{language}"' if language is not None else ""
    logger.debug("prefix conflict%s: %s <-> %s", where, a, b)
    raise ConflictError(
        f'Key conflict detected{where}: Keys "{a}" and "{b}" conflict because one is a '
        f'nested path of the other. You cannot have both "a" and "a.b" as keys in the same file.',
        key=a,
        other_key=b,
        language=language,
    )
