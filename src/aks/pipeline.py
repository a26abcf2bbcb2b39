# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Scan pipeline: discover, extract, join with translations, write reports."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from aks.analyzers import TypeScriptAnalyzer
from aks.config import ScanConfig
from aks.dictionary import TranslationLoadError, load_translations
from aks.extractor import PatternExtractor
from aks.model import AnalysisReport, ReportInput
from aks.report_builder import ReportAggregator
from aks.report_writer import ReportWriteError, ReportWriter, report_file_stem
from aks.suggestion import KeySuggester
from aks.writers import CsvReportWriter, JsonReportWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    """Represent the result of one completed scan run."""

    report: AnalysisReport
    written_paths: list[Path]
    translations_loaded: bool


def run_scan(config: ScanConfig, now: datetime | None = None) -> ScanOutcome:
    """Run one scan and write its reports.

    The root path is expected to exist; callers validate it first.

    Args:
        config: Scan configuration.
        now: Run timestamp; defaults to the current UTC time.

    Returns:
        The built report and the written report paths.

    Raises:
        ReportWriteError: If a report file cannot be written.
    """
    generated_at = now or datetime.now(tz=timezone.utc)
    extractor = PatternExtractor(window_lines=config.window_lines)
    analyzer = TypeScriptAnalyzer(extractor=extractor, extensions=config.extensions)
    result = analyzer.analyze(config.root_path)
    logger.info(
        f"Scan completed (path={config.root_path} files={result.files_scanned} "
        f"files_with_patterns={len(result.documents)} errors={len(result.errors)})"
    )

    translations_loaded = True
    try:
        translations = load_translations(config.translations_path)
    except TranslationLoadError as exc:
        logger.warning(
            f"Proceeding with empty translation dictionary (path={config.translations_path} error={exc})"
        )
        translations = {}
        translations_loaded = False

    aggregator = ReportAggregator(
        suggester=KeySuggester(threshold=config.suggest_threshold),
        top_limit=config.top_keys,
    )
    report = aggregator.build(
        documents=result.documents,
        translations=translations,
        report_input=ReportInput(
            extracted_at=generated_at.isoformat(),
            search_path=str(config.root_path),
            translations_path=str(config.translations_path),
            files_scanned=result.files_scanned,
            window_lines=config.window_lines,
            errors=result.errors,
        ),
    )

    written_paths = write_reports(
        report=report,
        writers=[JsonReportWriter(), CsvReportWriter()],
        output_dir=config.output_dir,
        stem=report_file_stem(generated_at),
    )
    return ScanOutcome(
        report=report,
        written_paths=written_paths,
        translations_loaded=translations_loaded,
    )


def write_reports(
    report: AnalysisReport, writers: list[ReportWriter], output_dir: Path, stem: str
) -> list[Path]:
    """Write one report per writer, all or none.

    Every writer targets a ``.tmp`` sibling first; the files are renamed to
    their final names only after all writers succeeded.

    Args:
        report: Report to write.
        writers: Report writers sharing the file stem.
        output_dir: Directory receiving the reports.
        stem: File name without suffix.

    Returns:
        Final report paths in writer order.

    Raises:
        ReportWriteError: If any report cannot be written or renamed. Temporary
            files are removed first.
    """
    pending: list[tuple[Path, Path]] = []
    try:
        for writer in writers:
            final_path = output_dir / f"{stem}{writer.suffix}"
            tmp_path = final_path.with_suffix(f"{final_path.suffix}.tmp")
            pending.append((tmp_path, final_path))
            writer.write(report, tmp_path)
        for tmp_path, final_path in pending:
            tmp_path.replace(final_path)
    except (ReportWriteError, OSError) as exc:
        logger.warning(f"Discarding partial reports (output_dir={output_dir} error={exc})")
        for tmp_path, _ in pending:
            _discard(tmp_path)
        if isinstance(exc, ReportWriteError):
            raise
        raise ReportWriteError(str(exc)) from exc
    return [final_path for _, final_path in pending]


def _discard(path: Path) -> None:
    try:
        if path.is_file():
            path.unlink()
    except OSError as exc:
        logger.warning(f"Failed to remove temporary report (path={path} error={exc})")
