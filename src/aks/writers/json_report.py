# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""JSON report writer."""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from aks.model import AnalysisReport
from aks.report_writer import ReportWriteError

logger = logging.getLogger(__name__)


class JsonReportWriter:
    """Write the full analysis report as indented JSON."""

    suffix = ".json"

    def write(self, report: AnalysisReport, output_path: Path) -> Path:
        """Write the report to ``output_path``.

        Args:
            report: Report to serialize.
            output_path: Target file path.

        Returns:
            The written path.

        Raises:
            ReportWriteError: If directory creation or file writing fails.
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(
                json.dumps(report_payload(report), indent=2, sort_keys=True, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.warning(
                f"Failed to write JSON report (output_path={output_path} error={exc})"
            )
            raise ReportWriteError(str(exc)) from exc
        logger.info(f"JSON report written (output_path={output_path})")
        return output_path


def report_payload(report: AnalysisReport) -> dict[str, Any]:
    """Convert a report into JSON-serializable primitives."""
    return {
        "metadata": asdict(report.metadata),
        "records": [asdict(record) for record in report.records],
        "summary": asdict(report.summary),
        "errors": [asdict(error) for error in report.errors],
    }
