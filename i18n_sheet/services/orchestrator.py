from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import read_workbook
from ..excel.writer import write_workbook
from ..models.config_models import ConvertConfig
from ..models.conversion_result import ConversionResult
from ..models.errors import SourceFormatError, StructureError
from ..models.tabular import ColumnDescriptor, FileDataset, SheetDescriptor, TranslationFile
from ..models.value_tree import Mapping
from ..parsers.json_source import parse_json_source
from ..parsers.object_literal import extract_object_literal, variant_for_filename
from .exporter import dataset_from_tree, export_grid
from .importer import import_languages
from .progress import ProgressTracker
from .structure import describe_columns, detect_columns, list_sheets

"""Service orchestration for file-level conversions.

to-excel:   source files (.json / .ts / .js) -> one two-column workbook
from-excel: workbook sheet -> one ``<language>.json`` per language column

Each call is all-or-nothing: outputs are written only after every input has
been parsed and every language has been converted.
"""

__all__ = [
    "ProcessingError",
    "SOURCE_SUFFIXES",
    "build_datasets",
    "convert_from_excel",
    "convert_to_excel",
    "expand_inputs",
    "inspect_workbook",
    "load_source_file",
    "scan_source_files",
]

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}
SCRIPT_SUFFIXES = {".ts", ".mts", ".cts", ".js", ".mjs", ".cjs", ".jsx"}
SOURCE_SUFFIXES = JSON_SUFFIXES | SCRIPT_SUFFIXES


class ProcessingError(Exception):
    """Fatal errors outside the conversion engine (missing inputs, I/O)."""


def _read_text(path: Path) -> str:
    try:
        # utf-8-sig: 先頭 BOM を許容
        return path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ProcessingError(f"Error reading file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SourceFormatError(f"Failed to read {path.name}: not valid UTF-8 text") from e


def load_source_file(path: Path) -> Mapping:
    """Parse one translation source file into a Mapping.

    Raises:
        SourceFormatError: Unsupported suffix or non-object JSON document
        ParseError / ExtractionError: From the underlying parser
    """
    suffix = path.suffix.lower()
    if suffix not in SOURCE_SUFFIXES:
        raise SourceFormatError(
            f"Unsupported file type: {path.name}. Only {', '.join(sorted(SOURCE_SUFFIXES))} are supported."
        )
    text = _read_text(path)
    if suffix in JSON_SUFFIXES:
        return parse_json_source(text, path.name)
    return extract_object_literal(text, variant_for_filename(path.name), path.name)


def scan_source_files(directory: Path) -> list[Path]:
    """Scan directory for translation source files (non-recursive, sorted)."""
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SOURCE_SUFFIXES)
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def expand_inputs(inputs: Iterable[Path]) -> list[Path]:
    """Expand directories into their source files; keep explicit files as given."""
    paths: list[Path] = []
    for p in inputs:
        if p.is_dir():
            paths.extend(scan_source_files(p))
        elif p.exists():
            paths.append(p)
        else:
            raise ProcessingError(f"File not found: {p}")
    return paths


def build_datasets(paths: list[Path]) -> list[FileDataset]:
    datasets: list[FileDataset] = []
    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            tree = load_source_file(path)
            dataset = dataset_from_tree(path.name, tree)
            datasets.append(dataset)
            logger.info(f"Processed {path.name}: {len(dataset)} keys")
            progress.finish_file(keys=len(dataset))
    return datasets


def convert_to_excel(paths: list[Path], output_path: Path, config: ConvertConfig) -> ConversionResult:
    """Convert translation sources into a single workbook."""
    start_time = datetime.now(UTC)
    if not paths:
        raise ProcessingError("No translation files to convert")

    datasets = build_datasets(paths)
    grid = export_grid(datasets)
    try:
        write_workbook(grid, output_path, config.sheet_name, config.column_widths.as_list())
    except OSError as e:
        raise ProcessingError(f"Error writing workbook {output_path}: {e}") from e
    logger.info(f"Wrote {output_path}")

    end_time = datetime.now(UTC)
    return ConversionResult(
        direction="to-excel",
        files=len(datasets),
        keys=sum(len(d) for d in datasets),
        languages=[],
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        outputs=[output_path],
    )


def inspect_workbook(
    path: Path,
) -> list[tuple[SheetDescriptor, list[ColumnDescriptor] | StructureError]]:
    """Describe every sheet: its columns, or the structure error it raises."""
    workbook = read_workbook(path)
    report: list[tuple[SheetDescriptor, list[ColumnDescriptor] | StructureError]] = []
    for sheet in list_sheets(workbook):
        try:
            structure = detect_columns(workbook, sheet.name)
        except StructureError as e:
            report.append((sheet, e))
            continue
        header = workbook[sheet.name][0]
        report.append((sheet, describe_columns(header, structure.key_column_index)))
    return report


def _write_translation_files(files: list[TranslationFile], output_dir: Path) -> list[Path]:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for f in files:
            target = output_dir / f.filename
            target.write_text(f.content, encoding="utf-8")
            written.append(target)
        return written
    except OSError as e:
        raise ProcessingError(f"Error writing output to {output_dir}: {e}") from e


def convert_from_excel(
    path: Path,
    output_dir: Path,
    sheet_name: str | None = None,
    languages: list[str] | None = None,
) -> ConversionResult:
    """Convert one workbook sheet into per-language JSON files.

    Args:
        path: Workbook to read
        output_dir: Directory receiving ``<language>.json`` files
        sheet_name: Sheet to convert (None = first sheet)
        languages: Language columns to export (None = every detected column)
    """
    start_time = datetime.now(UTC)
    workbook = read_workbook(path)
    sheets = list_sheets(workbook)
    if not sheets:
        raise StructureError(f"No sheets found in {path.name}")
    name = sheet_name if sheet_name is not None else sheets[0].name

    structure = detect_columns(workbook, name)
    selected = languages if languages else structure.language_names
    logger.info(f"Sheet {name}: key column {structure.key_column_index + 1}, languages {selected}")

    files = import_languages(workbook[name], structure.key_column_index, selected)
    outputs = _write_translation_files(files, output_dir)
    for f, target in zip(files, outputs, strict=True):
        logger.info(f"Wrote {target} ({f.language})")

    end_time = datetime.now(UTC)
    return ConversionResult(
        direction="from-excel",
        files=len(files),
        keys=sum(_count_leaves(f.tree) for f in files),
        languages=[f.language for f in files],
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        outputs=outputs,
    )


def _count_leaves(tree: Mapping) -> int:
    return sum(_count_leaves(v) if isinstance(v, Mapping) else 1 for v in tree.entries.values())

