# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Aggregate extracted patterns and dictionary lookups into a report."""

import logging
from collections import Counter

from aks.analyzer import DocumentPatterns
from aks.model import (
    AnalysisRecord,
    AnalysisReport,
    KeyUsage,
    ReportInput,
    ReportMetadata,
    ReportSummary,
)
from aks.suggestion import KeySuggester

logger = logging.getLogger(__name__)

DEFAULT_TOP_KEYS = 10


class ReportAggregator:
    """Join call-site patterns with translations and compute statistics."""

    def __init__(
        self, suggester: KeySuggester | None = None, top_limit: int = DEFAULT_TOP_KEYS
    ) -> None:
        """Initialize aggregator.

        Args:
            suggester: Optional closest-key suggester for missing keys.
            top_limit: Number of most used keys kept in the summary.

        Raises:
            ValueError: If ``top_limit`` is negative.
        """
        if top_limit < 0:
            raise ValueError("top_limit must be >= 0.")
        self._suggester = suggester
        self._top_limit = top_limit

    def build(
        self,
        documents: list[DocumentPatterns],
        translations: dict[str, str],
        report_input: ReportInput,
    ) -> AnalysisReport:
        """Build the analysis report.

        Args:
            documents: Patterns per file in scan order.
            translations: Flattened translation dictionary.
            report_input: Run values for report metadata.

        Returns:
            Report with records in file then line order.
        """
        usage = Counter(
            pattern.translation_key
            for document in documents
            for pattern in document.patterns
        )
        files_by_key: dict[str, set[str]] = {}
        for document in documents:
            for pattern in document.patterns:
                files_by_key.setdefault(pattern.translation_key, set()).add(
                    document.file_path
                )

        suggestions: dict[str, str | None] = {}
        if self._suggester is not None:
            for key in sorted(usage):
                if key not in translations:
                    suggestions[key] = self._suggester.suggest(key, translations)

        records: list[AnalysisRecord] = []
        for document in documents:
            for pattern in document.patterns:
                key = pattern.translation_key
                records.append(
                    AnalysisRecord(
                        translation_key=key,
                        alert_container=pattern.alert_container,
                        alert_type=pattern.alert_type,
                        file_path=document.file_path,
                        line_number=pattern.line_number,
                        raw_snippet=pattern.raw_snippet,
                        has_translation=key in translations,
                        translation_value=translations.get(key),
                        usage_count=usage[key],
                        suggested_key=suggestions.get(key),
                    )
                )

        key_usages = {
            key: KeyUsage(
                key=key,
                usage_count=count,
                files=sorted(files_by_key[key]),
                translation_value=translations.get(key),
                suggested_key=suggestions.get(key),
            )
            for key, count in usage.items()
        }
        matched_keys = [key_usages[key] for key in sorted(key_usages) if key in translations]
        missing_keys = [
            key_usages[key] for key in sorted(key_usages) if key not in translations
        ]
        ranked = sorted(key_usages.values(), key=lambda item: (-item.usage_count, item.key))
        alert_containers = sorted({record.alert_container for record in records})
        alert_types = sorted({record.alert_type for record in records})
        matched_record_count = sum(1 for record in records if record.has_translation)

        summary = ReportSummary(
            matched_key_count=len(matched_keys),
            missing_key_count=len(missing_keys),
            matched_record_count=matched_record_count,
            missing_record_count=len(records) - matched_record_count,
            matched_keys=matched_keys,
            missing_keys=missing_keys,
            top_keys=ranked[: self._top_limit],
            translation_keys=sorted(key_usages),
            alert_containers=alert_containers,
            alert_types=alert_types,
        )
        metadata = ReportMetadata(
            extracted_at=report_input.extracted_at,
            search_path=report_input.search_path,
            translations_path=report_input.translations_path,
            window_lines=report_input.window_lines,
            total_files=report_input.files_scanned,
            files_with_patterns=sum(1 for document in documents if document.patterns),
            total_patterns=len(records),
            unique_translation_keys=len(key_usages),
            unique_alert_containers=len(alert_containers),
            unique_alert_types=len(alert_types),
            dictionary_size=len(translations),
            error_count=len(report_input.errors),
        )
        if missing_keys:
            logger.warning(
                f"Translation keys missing from dictionary (count={len(missing_keys)})"
            )
        return AnalysisReport(
            metadata=metadata,
            records=records,
            summary=summary,
            errors=list(report_input.errors),
        )
