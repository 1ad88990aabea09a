from __future__ import annotations

import json
from pathlib import Path

import pytest

from i18n_sheet.excel.reader import read_workbook
from i18n_sheet.models.config_models import ConvertConfig
from i18n_sheet.models.errors import ConflictError, ExtractionError, SourceFormatError, StructureError
from i18n_sheet.models.value_tree import to_plain
from i18n_sheet.services.orchestrator import (
    ProcessingError,
    convert_from_excel,
    convert_to_excel,
    expand_inputs,
    inspect_workbook,
    load_source_file,
    scan_source_files,
)


def test_load_source_file_dispatches_on_suffix(locale_files: list[Path]):
    vi, en = locale_files
    assert to_plain(load_source_file(vi)) == {"save": "Lưu", "error": {"unknown": "Lỗi"}}
    assert to_plain(load_source_file(en)) == {"cancel": "Cancel", "menu": {"open": "Open", "count": 3}}


def test_load_source_file_accepts_bom(temp_workdir: Path):
    p = temp_workdir / "bom.json"
    p.write_bytes(b"\xef\xbb\xbf" + '{"a": "b"}'.encode("utf-8"))
    assert to_plain(load_source_file(p)) == {"a": "b"}


def test_load_source_file_rejects_unknown_suffix(temp_workdir: Path):
    p = temp_workdir / "notes.txt"
    p.write_text("a=b", encoding="utf-8")
    with pytest.raises(SourceFormatError) as e:
        load_source_file(p)
    assert "Unsupported file type: notes.txt" in str(e.value)


def test_load_source_file_propagates_extraction_error(temp_workdir: Path):
    p = temp_workdir / "empty.js"
    p.write_text("export const x = 1;", encoding="utf-8")
    with pytest.raises(ExtractionError):
        load_source_file(p)


def test_scan_source_files_filters_and_sorts(temp_workdir: Path, locale_files: list[Path]):
    (temp_workdir / "locales" / "readme.md").write_text("x", encoding="utf-8")
    (temp_workdir / "locales" / "sub").mkdir()
    found = scan_source_files(temp_workdir / "locales")
    assert [p.name for p in found] == ["en.json", "vi.ts"]


def test_scan_source_files_missing_directory(temp_workdir: Path):
    with pytest.raises(ProcessingError):
        scan_source_files(temp_workdir / "nope")


def test_expand_inputs(temp_workdir: Path, locale_files: list[Path]):
    vi, en = locale_files
    assert expand_inputs([vi]) == [vi]
    assert expand_inputs([temp_workdir / "locales"]) == [en, vi]
    with pytest.raises(ProcessingError):
        expand_inputs([temp_workdir / "missing.json"])


def test_convert_to_excel_writes_grid(temp_workdir: Path, locale_files: list[Path]):
    out = temp_workdir / "out" / "Multi-Language.xlsx"
    result = convert_to_excel(locale_files, out, ConvertConfig())
    assert result.direction == "to-excel"
    assert result.files == 2
    assert result.keys == 5
    assert result.outputs == [out]

    grid = read_workbook(out)["Translations"]
    rows = [r for r in grid if r]
    assert rows == [
        ["Key", "Value"],
        ["save", "Lưu"],
        ["error.unknown", "Lỗi"],
        ["cancel", "Cancel"],
        ["menu.open", "Open"],
        ["menu.count", "3"],
    ]


def test_convert_to_excel_is_all_or_nothing(temp_workdir: Path, locale_files: list[Path]):
    bad = temp_workdir / "locales" / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    out = temp_workdir / "out" / "never.xlsx"
    with pytest.raises(SourceFormatError):
        convert_to_excel([*locale_files, bad], out, ConvertConfig())
    assert not out.exists()


def test_convert_to_excel_requires_inputs(temp_workdir: Path):
    with pytest.raises(ProcessingError):
        convert_to_excel([], temp_workdir / "x.xlsx", ConvertConfig())


def test_convert_from_excel_default_sheet_and_languages(temp_workdir: Path, make_workbook):
    wb = make_workbook(
        temp_workdir / "t.xlsx",
        {
            "Main": [["KEY", "VI", "EN"], ["save", "Lưu", "Save"], ["error.unknown", "Lỗi", "Error"]],
            "Other": [["nothing"]],
        },
    )
    out_dir = temp_workdir / "out"
    result = convert_from_excel(wb, out_dir)
    assert result.languages == ["VI", "EN"]
    assert result.keys == 4
    assert sorted(p.name for p in result.outputs) == ["en.json", "vi.json"]
    vi = json.loads((out_dir / "vi.json").read_text(encoding="utf-8"))
    assert vi == {"save": "Lưu", "error": {"unknown": "Lỗi"}}


def test_convert_from_excel_selected_sheet_and_missing_language(temp_workdir: Path, make_workbook):
    wb = make_workbook(
        temp_workdir / "t.xlsx",
        {"A": [["x"]], "B": [["Key", "JA"], ["hello", "こんにちは"]]},
    )
    result = convert_from_excel(wb, temp_workdir / "out", sheet_name="B", languages=["ja", "ko"])
    assert result.languages == ["ja"]
    assert (temp_workdir / "out" / "ja.json").exists()
    assert not (temp_workdir / "out" / "ko.json").exists()


def test_convert_from_excel_conflict_writes_nothing(temp_workdir: Path, make_workbook):
    wb = make_workbook(
        temp_workdir / "t.xlsx",
        {"S": [["KEY", "VI"], ["a", "1"], ["a.b", "2"]]},
    )
    out_dir = temp_workdir / "fresh"
    with pytest.raises(ConflictError):
        convert_from_excel(wb, out_dir)
    assert not out_dir.exists()


def test_convert_from_excel_missing_key_column(temp_workdir: Path, make_workbook):
    wb = make_workbook(temp_workdir / "t.xlsx", {"S": [["Id", "VI"], ["a", "1"]]})
    with pytest.raises(StructureError) as e:
        convert_from_excel(wb, temp_workdir / "out")
    assert 'Available columns: "Id", "VI"' in str(e.value)


def test_inspect_workbook_reports_columns_and_errors(temp_workdir: Path, make_workbook):
    wb = make_workbook(
        temp_workdir / "t.xlsx",
        {"Good": [["VI", "KEY", None, "EN"], ["x", "k", None, "y"]], "Bad": [["only"]]},
    )
    report = inspect_workbook(wb)
    assert [s.name for s, _ in report] == ["Good", "Bad"]
    good_columns = report[0][1]
    assert [(c.name, c.is_key, c.is_placeholder) for c in good_columns] == [
        ("VI", False, False),
        ("KEY", True, False),
        ("Column 3", False, True),
        ("EN", False, False),
    ]
    assert isinstance(report[1][1], StructureError)
