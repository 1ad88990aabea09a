from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from ..models.errors import TabularImportError
from ..models.tabular import TabularGrid, TranslationFile
from ..models.value_tree import to_plain
from .path_codec import check_prefix_conflicts, unflatten

"""Import a translation grid back into one JSON document per language.

Per requested language:
1. match the header case-insensitively (unmatched -> skipped with a WARN);
   a column already converted under another spelling is skipped too
2. collect ``key -> value`` from every data row with a non-blank key
   (later rows overwrite earlier ones)
3. run the pairwise prefix-conflict scan, then unflatten
4. serialize as 2-space indented JSON in first-seen key order

The call is all-or-nothing: a conflict in any language raises before any
result is returned.
"""

__all__ = [
    "JSON_INDENT",
    "collect_language_column",
    "import_languages",
    "render_json",
]

logger = logging.getLogger(__name__)

JSON_INDENT = 2


def _cell(row: list[str], index: int) -> str:
    if index < 0 or index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else str(value).strip()


def _find_header(headers: list[str], language: str) -> int:
    wanted = language.upper()
    for index, header in enumerate(headers):
        if header.upper() == wanted:
            return index
    return -1


def collect_language_column(grid: TabularGrid, key_column_index: int, language_index: int) -> dict[str, str]:
    """Build the flat key map of one language column (last write wins)."""
    flat: dict[str, str] = {}
    for row in grid[1:]:
        key = _cell(row, key_column_index)
        if not key:
            continue
        flat[key] = _cell(row, language_index)
    return flat


def render_json(tree_plain: object) -> str:
    return json.dumps(tree_plain, indent=JSON_INDENT, ensure_ascii=False)


def import_languages(
    grid: TabularGrid, key_column_index: int, languages: Iterable[str]
) -> list[TranslationFile]:
    """Convert the selected language columns of ``grid`` into JSON documents.

    Args:
        grid: Sheet rows, row 0 is the header
        key_column_index: Index of the KEY column (see detect_columns)
        languages: Requested language names, matched case-insensitively

    Returns:
        One TranslationFile per matched language, in request order

    Raises:
        TabularImportError: The grid has no data row
        ConflictError: A language column holds both ``a`` and ``a.b``
    """
    if len(grid) < 2:
        raise TabularImportError("Excel file must have headers and at least one row")

    headers = [_cell(grid[0], i) for i in range(len(grid[0]))]
    results: list[TranslationFile] = []
    produced: set[int] = set()
    for language in languages:
        language_index = _find_header(headers, language)
        if language_index == -1:
            logger.warning(f'Language column "{language}" not found, skipping')
            continue
        if language_index in produced:
            # "VI" と "vi" は同じ列・同じ vi.json になる
            logger.warning(f'Language column "{language}" already converted, skipping')
            continue
        produced.add(language_index)

        flat = collect_language_column(grid, key_column_index, language_index)
        check_prefix_conflicts(flat, language=language)
        tree = unflatten(flat)
        results.append(
            TranslationFile(
                language=language,
                filename=f"{language.lower()}.json",
                content=render_json(to_plain(tree)),
                tree=tree,
            )
        )
        logger.debug("language=%s keys=%d", language, len(flat))
    return results
