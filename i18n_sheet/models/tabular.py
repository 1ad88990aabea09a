from __future__ import annotations

from dataclasses import dataclass, field

from .value_tree import Mapping

"""Tabular domain models for translation <-> spreadsheet conversion.

A grid is a plain ``list[list[str]]`` (row 0 = header). The descriptors below
carry what structure detection discovers about one sheet, and the dataset /
file models carry conversion results across the boundary.
"""

__all__ = [
    "TabularGrid",
    "KEY_HEADER",
    "SheetDescriptor",
    "ColumnDescriptor",
    "SheetStructure",
    "FileDataset",
    "TranslationFile",
]

TabularGrid = list[list[str]]

# 予約ヘッダ (大文字小文字を区別しない)
KEY_HEADER = "KEY"


@dataclass(frozen=True)
class SheetDescriptor:
    name: str  # unique within a workbook
    index: int  # zero-based position


@dataclass(frozen=True)
class ColumnDescriptor:
    """One header cell after structure detection.

    Blank header cells get a positional ``Column <n>`` name and are flagged
    as placeholders so they never become language columns.
    """
    index: int
    name: str
    is_key: bool = False
    is_placeholder: bool = False


@dataclass(frozen=True)
class SheetStructure:
    key_column_index: int
    language_columns: list[ColumnDescriptor] = field(default_factory=list)

    @property
    def language_names(self) -> list[str]:
        return [c.name for c in self.language_columns]


@dataclass(frozen=True)
class FileDataset:
    """Flattened rows of one source file, in document order."""
    filename: str
    rows: list[tuple[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class TranslationFile:
    """One language document produced by an import."""
    language: str
    filename: str  # <language lower>.json
    content: str  # JSON text, 2-space indent
    tree: Mapping

    @property
    def key_count(self) -> int:
        return len(self.tree)
