from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from i18n_sheet.config.loader import ConfigError, load_config, resolve_config_path
from i18n_sheet.logging.init import enable_debug, log_summary, setup_logging
from i18n_sheet.models.config_models import ConvertConfig
from i18n_sheet.models.errors import ConversionError, StructureError
from i18n_sheet.services.orchestrator import (
    ProcessingError,
    convert_from_excel,
    convert_to_excel,
    expand_inputs,
    inspect_workbook,
)
from i18n_sheet.services.summary import render_summary_line

"""CLI entrypoint.

Commands:
- to-excel PATH...          translation files / directories -> workbook
- sheets WORKBOOK           list sheets with their detected columns
- from-excel WORKBOOK       sheet -> one <language>.json per language column
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_CONVERSION_ERROR = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env (e.g. I18N_SHEET_CONFIG) without overriding the real environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="i18n-sheet", description="Translation files <-> Excel converter")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", help="Path to YAML config (default: config/convert.yml)")
    sub = p.add_subparsers(dest="command", required=True)

    to_excel = sub.add_parser("to-excel", help="Convert .json/.ts/.js files into one workbook")
    to_excel.add_argument("inputs", nargs="+", help="Translation files or directories")
    to_excel.add_argument("-o", "--output", help="Output workbook path")

    sheets = sub.add_parser("sheets", help="List sheets and detected columns")
    sheets.add_argument("workbook")

    from_excel = sub.add_parser("from-excel", help="Convert a workbook sheet into JSON files")
    from_excel.add_argument("workbook")
    from_excel.add_argument("--sheet", help="Sheet name (default: first sheet)")
    from_excel.add_argument(
        "--lang", action="append", dest="languages", help="Language column to export (repeatable)"
    )
    from_excel.add_argument("-o", "--output-dir", help="Directory for generated JSON files")
    return p.parse_args(argv)


def _run_sheets(workbook: Path) -> int:
    logger = setup_logging()
    for sheet, columns in inspect_workbook(workbook):
        if isinstance(columns, StructureError):
            logger.warning(f"sheet[{sheet.index}] {sheet.name}: {columns}")
            continue
        key = next(c for c in columns if c.is_key)
        languages = [c.name for c in columns if not c.is_key and not c.is_placeholder]
        logger.info(
            f"sheet[{sheet.index}] {sheet.name}: key={key.name} (column {key.index + 1}) "
            f"languages={', '.join(languages) or 'none'}"
        )
    return EXIT_SUCCESS


def _run_command(args: argparse.Namespace, cfg: ConvertConfig) -> int:
    if args.command == "sheets":
        return _run_sheets(Path(args.workbook))

    if args.command == "to-excel":
        paths = expand_inputs(Path(p) for p in args.inputs)
        output = Path(args.output) if args.output else Path(cfg.output_directory) / cfg.output_filename
        result = convert_to_excel(paths, output, cfg)
    else:
        output_dir = Path(args.output_dir) if args.output_dir else Path(cfg.output_directory)
        result = convert_from_excel(
            Path(args.workbook), output_dir, sheet_name=args.sheet, languages=args.languages
        )
    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # 空リスト [] が渡された場合に sys.argv が混入しないよう None のときのみ参照
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = _parse_args(argv)
    except SystemExit as e:
        # argparse は引数エラーで 2 を返すが, 2 は変換エラー用に予約済み
        return EXIT_SUCCESS if e.code in (0, None) else EXIT_FATAL
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    config_path, required = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path, required=required)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        return _run_command(args, cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    except ConversionError as e:
        logger.error(str(e))
        return EXIT_CONVERSION_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
