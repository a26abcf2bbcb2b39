# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Report writer contracts."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from aks.model import AnalysisReport

logger = logging.getLogger(__name__)

REPORT_FILE_PREFIX = "alert-patterns"


class ReportWriteError(RuntimeError):
    """Represent a fatal report writing failure."""


class ReportWriter(Protocol):
    """Define the contract for writing one report file."""

    suffix: str

    def write(self, report: AnalysisReport, output_path: Path) -> Path:
        """Write the report and return the written path.

        Raises:
            ReportWriteError: If the file cannot be written.
        """


def report_file_stem(generated_at: datetime) -> str:
    """Build the shared report file stem, e.g. ``alert-patterns-2026-10-18-0930``."""
    return f"{REPORT_FILE_PREFIX}-{generated_at.strftime('%Y-%m-%d-%H%M')}"
