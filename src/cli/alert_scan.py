# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command-line entry point for the alert key scanner."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from aks.analyzer import AnalyzerError
from aks.analyzers.typescript import DEFAULT_EXTENSIONS
from aks.config import ScanConfig
from aks.extractor import DEFAULT_WINDOW_LINES
from aks.model import AnalysisRecord, AnalysisReport
from aks.pipeline import run_scan
from aks.report_builder import DEFAULT_TOP_KEYS
from aks.report_writer import ReportWriteError
from aks.suggestion import DEFAULT_SUGGEST_THRESHOLD

logger = logging.getLogger(__name__)

DEFAULT_ROOT_PATH = "src"
DEFAULT_TRANSLATIONS_PATH = "src/assets/i18n/en.json"
DEFAULT_OUTPUT_DIR = "."

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "line": 1,
    "translation_key": 4,
    "alert_container": 2,
    "alert_type": 2,
    "status": 1,
}


class ValidationError(RuntimeError):
    """Represent user input validation failure."""


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        prog="aks",
        description="Find stream/setAlert translation keys and check them against a locale file.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=DEFAULT_ROOT_PATH,
        help="Source root to scan.",
    )
    parser.add_argument(
        "--translations",
        default=DEFAULT_TRANSLATIONS_PATH,
        help="JSON localization file to check keys against.",
    )
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="Directory receiving the JSON and CSV reports.",
    )
    parser.add_argument(
        "--window-lines",
        type=int,
        default=DEFAULT_WINDOW_LINES,
        help="Lines below a stream call searched for the setAlert call.",
    )
    parser.add_argument(
        "--suggest-threshold",
        type=float,
        default=DEFAULT_SUGGEST_THRESHOLD,
        help="Similarity threshold for suggesting keys for missing translations.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP_KEYS,
        help="Number of most used keys listed in the summary.",
    )
    parser.add_argument(
        "--extension",
        action="append",
        dest="extensions",
        help="Source file suffix to scan; repeatable. Defaults to .ts and .tsx.",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Skip the per-file pattern tables."
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the scan command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = _build_config(args)
    except ValidationError as exc:
        logger.warning(f"Validation failed (error={exc})")
        stderr.write(f"{exc}\n")
        return 2

    try:
        outcome = run_scan(config)
    except ReportWriteError as exc:
        logger.warning(f"Report writing failed (output_dir={config.output_dir} error={exc})")
        stderr.write(f"Failed to write report: {exc}\n")
        return 2

    _write_errors(errors=outcome.report.errors, stderr=stderr)
    if not outcome.translations_loaded:
        stderr.write(
            f"Translations not loaded, all keys reported missing: {config.translations_path}\n"
        )
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    if not args.quiet:
        _write_tables(report=outcome.report, console=console)
    _write_summary(report=outcome.report, console=console)
    for path in outcome.written_paths:
        console.print(f"report={path}", markup=False, highlight=False, soft_wrap=True)
    return 0


def _build_config(args: argparse.Namespace) -> ScanConfig:
    """Validate parsed arguments and gather them into a scan configuration.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Scan configuration.

    Raises:
        ValidationError: If the root is missing or a numeric option is invalid.
    """
    root_path = Path(args.root)
    if not root_path.exists():
        raise ValidationError(f"Path does not exist: {root_path}")
    if not root_path.is_dir():
        raise ValidationError(f"Path must be a directory: {root_path}")
    if args.window_lines <= 0:
        raise ValidationError("window-lines must be > 0")
    if args.suggest_threshold < 0.0 or args.suggest_threshold > 1.0:
        raise ValidationError("suggest-threshold must be between 0.0 and 1.0")
    if args.top < 0:
        raise ValidationError("top must be >= 0")
    extensions = tuple(
        ext if ext.startswith(".") else f".{ext}" for ext in args.extensions or ()
    )
    return ScanConfig(
        root_path=root_path,
        translations_path=Path(args.translations),
        output_dir=Path(args.output_dir),
        window_lines=args.window_lines,
        suggest_threshold=args.suggest_threshold,
        top_keys=args.top,
        extensions=extensions or DEFAULT_EXTENSIONS,
    )


def _write_errors(errors: list[AnalyzerError], stderr: TextIO) -> None:
    for error in errors:
        stderr.write(f"analyzer_error: {error}\n")


def _write_tables(report: AnalysisReport, console: Console) -> None:
    """Write the patterns of each file as a table.

    Args:
        report: Built report.
        console: Target console.
    """
    records_by_file: dict[str, list[AnalysisRecord]] = {}
    for record in report.records:
        records_by_file.setdefault(record.file_path, []).append(record)

    for file_path in sorted(records_by_file):
        console.rule(file_path, style=Style(color="cyan"), characters="-")
        table = Table(show_header=True, show_lines=False, expand=True)
        table.add_column(
            "line", ratio=TABLE_COLUMN_RATIOS["line"], justify="right", overflow="fold"
        )
        for column in ("translation_key", "alert_container", "alert_type", "status"):
            table.add_column(column, ratio=TABLE_COLUMN_RATIOS[column], overflow="fold")
        for record in records_by_file[file_path]:
            table.add_row(
                str(record.line_number),
                record.translation_key,
                record.alert_container,
                record.alert_type,
                "matched" if record.has_translation else "missing",
            )
        console.print(table)


def _write_summary(report: AnalysisReport, console: Console) -> None:
    metadata = report.metadata
    summary = report.summary
    console.rule("summary", style=Style(color="cyan"), characters="=")
    lines = [
        f"total_patterns={metadata.total_patterns}",
        f"files_with_patterns={metadata.files_with_patterns}/{metadata.total_files}",
        f"unique_translation_keys={metadata.unique_translation_keys}",
        f"unique_alert_containers={metadata.unique_alert_containers}",
        f"unique_alert_types={metadata.unique_alert_types}",
        f"matched_keys={summary.matched_key_count} missing_keys={summary.missing_key_count}",
    ]
    if summary.top_keys:
        lines.append("top_translation_keys:")
        lines.extend(f"  {usage.usage_count}x {usage.key}" for usage in summary.top_keys)
    if summary.missing_keys:
        lines.append("missing_translation_keys:")
        for usage in summary.missing_keys:
            hint = f" (did you mean {usage.suggested_key}?)" if usage.suggested_key else ""
            lines.append(f"  {usage.key} used={usage.usage_count}{hint}")
    for line in lines:
        console.print(line, markup=False, highlight=False, soft_wrap=True)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
