# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Flat CSV report writer."""

import csv
import logging
import re
from pathlib import Path

from aks.model import AnalysisRecord, AnalysisReport
from aks.report_writer import ReportWriteError

logger = logging.getLogger(__name__)

MISSING_VALUE = "[MISSING]"
CSV_COLUMNS: tuple[str, ...] = (
    "translation_key",
    "translation_value",
    "alert_container",
    "alert_type",
    "file_path",
    "line_number",
    "status",
    "usage_count",
)

_NEWLINES_RE = re.compile(r"[\r\n]+")


class CsvReportWriter:
    """Write one CSV row per analysis record.

    String cells are always quoted with embedded quotes doubled; numeric cells
    are left bare.
    """

    suffix = ".csv"

    def write(self, report: AnalysisReport, output_path: Path) -> Path:
        """Write the report rows to ``output_path``.

        Args:
            report: Report whose records are written.
            output_path: Target file path.

        Returns:
            The written path.

        Raises:
            ReportWriteError: If directory creation or file writing fails.
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("w", encoding="utf-8", newline="") as handle:
                writer = csv.writer(
                    handle, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n"
                )
                writer.writerow(CSV_COLUMNS)
                for record in report.records:
                    writer.writerow(csv_row(record))
        except OSError as exc:
            logger.warning(
                f"Failed to write CSV report (output_path={output_path} error={exc})"
            )
            raise ReportWriteError(str(exc)) from exc
        logger.info(
            f"CSV report written (output_path={output_path} rows={len(report.records)})"
        )
        return output_path


def csv_row(record: AnalysisRecord) -> list[str | int]:
    """Build the CSV cells of one record."""
    value = record.translation_value if record.has_translation else None
    return [
        _cell(record.translation_key),
        _cell(value if value is not None else MISSING_VALUE),
        _cell(record.alert_container),
        _cell(record.alert_type),
        _cell(record.file_path),
        record.line_number,
        "MATCHED" if record.has_translation else "MISSING",
        record.usage_count,
    ]


def _cell(text: str) -> str:
    return _NEWLINES_RE.sub(" ", text)
