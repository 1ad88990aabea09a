# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "locales").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("I18N_SHEET_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """output_filename: Multi-Language.xlsx
sheet_name: Translations
output_directory: ./out
column_widths:
  key: 30
  value: 50
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "convert.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_workbook():
    """Write ``{sheet: rows}`` to an .xlsx file without a pandas header row."""
    def _make(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        with pd.ExcelWriter(path) as writer:
            for sheet, rows in sheets.items():
                df = pd.DataFrame(rows)
                df.to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _make


@pytest.fixture()
def locale_files(temp_workdir: Path) -> list[Path]:
    vi = temp_workdir / "locales" / "vi.ts"
    vi.write_text(
        "const vi = { save: 'Lưu', error: { unknown: 'Lỗi' } };\nexport default vi;\n",
        encoding="utf-8",
    )
    en = temp_workdir / "locales" / "en.json"
    en.write_text('{"cancel": "Cancel", "menu": {"open": "Open", "count": 3}}', encoding="utf-8")
    return [vi, en]
