# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Report file writers for the alert key scanner."""

from aks.writers.csv_report import CsvReportWriter
from aks.writers.json_report import JsonReportWriter

__all__ = ["CsvReportWriter", "JsonReportWriter"]
