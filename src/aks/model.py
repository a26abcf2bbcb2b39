# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for analysis reports."""

from dataclasses import dataclass

from aks.analyzer import AnalyzerError


@dataclass(frozen=True)
class AnalysisRecord:
    """Represent one call-site pattern joined with its dictionary lookup.

    Attributes:
        translation_key: Key passed to ``stream``.
        alert_container: Container literal passed to ``setAlert``.
        alert_type: Alert type token passed to ``setAlert``.
        file_path: Project-relative source file path.
        line_number: Line of the ``stream`` call in comment-stripped text.
        raw_snippet: Whitespace-collapsed source of both calls.
        has_translation: Whether the key exists in the dictionary.
        translation_value: Dictionary value; ``None`` when missing.
        usage_count: Number of records in the run sharing this key.
        suggested_key: Closest dictionary key for a missing key.
    """

    translation_key: str
    alert_container: str
    alert_type: str
    file_path: str
    line_number: int
    raw_snippet: str
    has_translation: bool
    translation_value: str | None
    usage_count: int
    suggested_key: str | None = None


@dataclass(frozen=True)
class KeyUsage:
    """Represent how often and where one translation key is used."""

    key: str
    usage_count: int
    files: list[str]
    translation_value: str | None
    suggested_key: str | None = None


@dataclass(frozen=True)
class ReportInput:
    """Describe run values recorded in report metadata.

    Attributes:
        extracted_at: ISO-8601 UTC timestamp of the run.
        search_path: Root directory that was scanned.
        translations_path: Localization file consulted.
        files_scanned: Number of source files read.
        window_lines: Lookahead window used by the extractor.
        errors: Recoverable analyzer errors.
    """

    extracted_at: str
    search_path: str
    translations_path: str
    files_scanned: int
    window_lines: int
    errors: list[AnalyzerError]


@dataclass(frozen=True)
class ReportMetadata:
    """Represent run metadata and headline counts."""

    extracted_at: str
    search_path: str
    translations_path: str
    window_lines: int
    total_files: int
    files_with_patterns: int
    total_patterns: int
    unique_translation_keys: int
    unique_alert_containers: int
    unique_alert_types: int
    dictionary_size: int
    error_count: int


@dataclass(frozen=True)
class ReportSummary:
    """Represent aggregated key, container and type statistics."""

    matched_key_count: int
    missing_key_count: int
    matched_record_count: int
    missing_record_count: int
    matched_keys: list[KeyUsage]
    missing_keys: list[KeyUsage]
    top_keys: list[KeyUsage]
    translation_keys: list[str]
    alert_containers: list[str]
    alert_types: list[str]


@dataclass(frozen=True)
class AnalysisReport:
    """Represent one complete scan report."""

    metadata: ReportMetadata
    records: list[AnalysisRecord]
    summary: ReportSummary
    errors: list[AnalyzerError]
