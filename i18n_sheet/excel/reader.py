from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.errors import ConversionError
from ..models.tabular import TabularGrid

"""Workbook reader: Excel file -> ``{sheet name: grid of strings}``.

Sheets are read raw (``header=None``); header interpretation belongs to the
structure detector. Cells are normalized to display strings so the grid is a
plain ``list[list[str]]``:

- NaN / None -> ""
- integral floats (Excel stores 1 as 1.0) -> "1"
- trailing blank cells of a row are dropped
"""


class WorkbookReadError(ConversionError):
    """Raised when the file cannot be opened as a spreadsheet."""


def cell_to_str(val: Any) -> str:
    if val is None:
        return ""
    if isinstance(val, str):
        return val
    if isinstance(val, bool):
        return "TRUE" if val else "FALSE"
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    try:
        if pd.isna(val):
            return ""
    except (TypeError, ValueError):
        pass
    if hasattr(val, "isoformat"):
        return val.isoformat()
    return str(val)


def dataframe_to_grid(df: pd.DataFrame) -> TabularGrid:
    grid: TabularGrid = []
    for raw in df.itertuples(index=False, name=None):
        row = [cell_to_str(v) for v in raw]
        while row and row[-1] == "":
            row.pop()
        grid.append(row)
    # 末尾の空行は除去 (途中の空行は区切り行として保持)
    while grid and not grid[-1]:
        grid.pop()
    return grid


def read_excel_file(path: Path) -> dict[str, pd.DataFrame]:
    """Read an Excel file returning raw DataFrames keyed by sheet name (source order)."""
    dfs: dict[str, pd.DataFrame] = {}
    try:
        xls = pd.ExcelFile(path)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise WorkbookReadError(f"Failed to read Excel file {path}: {e}") from e
    with xls:
        for name in xls.sheet_names:
            # ヘッダなしで生読み, 文字列 "NA" 等を NaN にしない
            df = xls.parse(name, header=None, keep_default_na=False, na_values=[])
            dfs[str(name)] = df
    return dfs


def read_workbook(path: Path) -> dict[str, TabularGrid]:
    """Read every sheet of ``path`` as a grid of strings."""
    return {name: dataframe_to_grid(df) for name, df in read_excel_file(path).items()}
