from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the translation <-> spreadsheet converter.

These are filled by ``i18n_sheet.config.loader.load_config`` after schema
validation; every field has a default so a missing default config file still
yields a usable ConvertConfig.
"""

DEFAULT_OUTPUT_FILENAME = "Multi-Language.xlsx"
DEFAULT_SHEET_NAME = "Translations"
DEFAULT_KEY_COLUMN_WIDTH = 40
DEFAULT_VALUE_COLUMN_WIDTH = 60


@dataclass(frozen=True)
class ColumnWidths:
    """Workbook column widths in characters (Key / Value columns)."""
    key: int = DEFAULT_KEY_COLUMN_WIDTH
    value: int = DEFAULT_VALUE_COLUMN_WIDTH

    def as_list(self) -> list[int]:
        return [self.key, self.value]


@dataclass(frozen=True)
class ConvertConfig:
    """Root configuration object for a conversion run."""
    output_filename: str = DEFAULT_OUTPUT_FILENAME  # to-excel の既定出力ファイル名
    sheet_name: str = DEFAULT_SHEET_NAME  # exported sheet name
    output_directory: str = "."  # from-excel の既定出力先
    column_widths: ColumnWidths = ColumnWidths()
