from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd
from openpyxl.utils import get_column_letter

from ..models.tabular import TabularGrid

"""Workbook writer: grid of strings -> single-sheet .xlsx file.

Every cell is written as text, including values starting with "=". Blank rows
in the grid stay blank in the sheet; column widths are applied
through the underlying openpyxl worksheet.
"""


def grid_to_dataframe(grid: TabularGrid) -> pd.DataFrame:
    width = max((len(r) for r in grid), default=0)
    padded = [list(r) + [None] * (width - len(r)) for r in grid]
    return pd.DataFrame(padded)


def write_workbook(
    grid: TabularGrid,
    path: Path,
    sheet_name: str,
    column_widths: Sequence[int] | None = None,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    df = grid_to_dataframe(grid)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        worksheet = writer.sheets[sheet_name]
        for row in worksheet.iter_rows():
            for cell in row:
                # openpyxl は "=" 始まりの文字列を数式として保存するため文字列型に戻す
                if isinstance(cell.value, str) and cell.value.startswith("="):
                    cell.data_type = "s"
        for i, width in enumerate(column_widths or []):
            worksheet.column_dimensions[get_column_letter(i + 1)].width = width
    return path
