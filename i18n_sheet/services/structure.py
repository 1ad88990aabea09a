from __future__ import annotations

import logging
from collections.abc import Mapping as WorkbookMapping

from ..models.errors import StructureError
from ..models.tabular import KEY_HEADER, ColumnDescriptor, SheetDescriptor, SheetStructure, TabularGrid

"""Spreadsheet structure discovery.

Given a workbook (sheet name -> grid, in source order) this module lists the
sheets and, for one sheet, locates the KEY column and the language columns
from the header row (row 0).
"""

__all__ = [
    "list_sheets",
    "describe_columns",
    "detect_columns",
]

logger = logging.getLogger(__name__)

Workbook = WorkbookMapping[str, TabularGrid]


def list_sheets(workbook: Workbook) -> list[SheetDescriptor]:
    """Return one descriptor per sheet, in source order."""
    return [SheetDescriptor(name=name, index=i) for i, name in enumerate(workbook)]


def _header_text(cell: object) -> str:
    return "" if cell is None else str(cell).strip()


def _placeholder_name(index: int) -> str:
    return f"Column {index + 1}"


def describe_columns(header: list[str], key_column_index: int = -1) -> list[ColumnDescriptor]:
    """Describe every header cell; blank cells get a positional placeholder name."""
    columns: list[ColumnDescriptor] = []
    for index, cell in enumerate(header):
        name = _header_text(cell)
        columns.append(
            ColumnDescriptor(
                index=index,
                name=name or _placeholder_name(index),
                is_key=index == key_column_index,
                is_placeholder=not name,
            )
        )
    return columns


def _find_key_column(header: list[str]) -> int:
    for index, cell in enumerate(header):
        if _header_text(cell).upper() == KEY_HEADER:
            return index
    return -1


def detect_columns(workbook: Workbook, sheet_name: str) -> SheetStructure:
    """Locate the KEY column and language columns of ``sheet_name``.

    Raises:
        StructureError: The sheet does not exist, has no rows, or no header
            cell equals ``KEY`` (case-insensitive)
    """
    if sheet_name not in workbook:
        raise StructureError(f'Sheet "{sheet_name}" not found in Excel file')
    grid = workbook[sheet_name]
    if not grid:
        raise StructureError(f'Sheet "{sheet_name}" is empty')

    header = list(grid[0])
    key_index = _find_key_column(header)
    if key_index == -1:
        available = ", ".join(f'"{_header_text(c)}"' for c in header if _header_text(c))
        raise StructureError(
            f'Sheet "{sheet_name}": No column named "{KEY_HEADER}" found. '
            f"Available columns: {available or 'none'}"
        )

    columns = describe_columns(header, key_index)
    languages = [c for c in columns if not c.is_key and not c.is_placeholder]
    logger.debug(
        "sheet=%s key_column=%d languages=%s", sheet_name, key_index, [c.name for c in languages]
    )
    return SheetStructure(key_column_index=key_index, language_columns=languages)
