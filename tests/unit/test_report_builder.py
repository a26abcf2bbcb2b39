# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import pytest

from aks.analyzer import AnalyzerError, CallSitePattern, DocumentPatterns
from aks.model import ReportInput
from aks.report_builder import ReportAggregator
from aks.suggestion import KeySuggester


def _pattern(
    key: str,
    line: int,
    container: str = "page-alert",
    alert_type: str = "AlertType.ERROR",
) -> CallSitePattern:
    return CallSitePattern(
        translation_key=key,
        alert_container=container,
        alert_type=alert_type,
        line_number=line,
        raw_snippet=f".stream('{key}')",
    )


def _report_input(errors: list[AnalyzerError] | None = None) -> ReportInput:
    return ReportInput(
        extracted_at="2026-10-18T09:30:00+00:00",
        search_path="src",
        translations_path="src/assets/i18n/en.json",
        files_scanned=4,
        window_lines=20,
        errors=errors or [],
    )


def _documents() -> list[DocumentPatterns]:
    return [
        DocumentPatterns(
            file_path="app/a.ts",
            patterns=(
                _pattern("errors.save", 3),
                _pattern("errors.load", 9, container="banner"),
            ),
        ),
        DocumentPatterns(
            file_path="app/b.ts",
            patterns=(
                _pattern("errors.save", 5, alert_type="AlertType.WARNING"),
                _pattern("errors.sav", 12),
            ),
        ),
    ]


def test_rep_001_records_join_patterns_with_dictionary() -> None:
    translations = {"errors.save": "Save failed", "errors.load": "Load failed"}

    report = ReportAggregator().build(
        documents=_documents(), translations=translations, report_input=_report_input()
    )

    assert [(r.file_path, r.line_number) for r in report.records] == [
        ("app/a.ts", 3),
        ("app/a.ts", 9),
        ("app/b.ts", 5),
        ("app/b.ts", 12),
    ]
    first = report.records[0]
    assert first.has_translation is True
    assert first.translation_value == "Save failed"
    assert first.usage_count == 2
    missing = report.records[3]
    assert missing.translation_key == "errors.sav"
    assert missing.has_translation is False
    assert missing.translation_value is None
    assert missing.usage_count == 1


def test_rep_002_summary_groups_keys_and_vocabularies() -> None:
    translations = {"errors.save": "Save failed", "errors.load": "Load failed"}

    report = ReportAggregator().build(
        documents=_documents(), translations=translations, report_input=_report_input()
    )

    summary = report.summary
    assert summary.matched_key_count == 2
    assert summary.missing_key_count == 1
    assert summary.matched_record_count == 3
    assert summary.missing_record_count == 1
    assert [u.key for u in summary.matched_keys] == ["errors.load", "errors.save"]
    assert summary.matched_keys[1].files == ["app/a.ts", "app/b.ts"]
    assert summary.matched_keys[1].usage_count == 2
    assert [u.key for u in summary.missing_keys] == ["errors.sav"]
    assert summary.missing_keys[0].files == ["app/b.ts"]
    assert [u.key for u in summary.top_keys] == ["errors.save", "errors.load", "errors.sav"]
    assert summary.alert_containers == ["banner", "page-alert"]
    assert summary.alert_types == ["AlertType.ERROR", "AlertType.WARNING"]
    assert summary.translation_keys == ["errors.load", "errors.sav", "errors.save"]


def test_rep_003_metadata_counts() -> None:
    errors = [AnalyzerError(file_path="broken.ts", message="decode error")]

    report = ReportAggregator().build(
        documents=_documents(), translations={}, report_input=_report_input(errors)
    )

    metadata = report.metadata
    assert metadata.total_files == 4
    assert metadata.files_with_patterns == 2
    assert metadata.total_patterns == 4
    assert metadata.unique_translation_keys == 3
    assert metadata.unique_alert_containers == 2
    assert metadata.unique_alert_types == 2
    assert metadata.dictionary_size == 0
    assert metadata.error_count == 1
    assert report.errors == errors
    assert all(not record.has_translation for record in report.records)


def test_rep_004_missing_keys_get_suggestions() -> None:
    translations = {"errors.save": "Save failed", "errors.load": "Load failed"}

    report = ReportAggregator(suggester=KeySuggester(threshold=0.8)).build(
        documents=_documents(), translations=translations, report_input=_report_input()
    )

    assert report.summary.missing_keys[0].suggested_key == "errors.save"
    assert report.records[3].suggested_key == "errors.save"
    assert report.records[0].suggested_key is None


def test_rep_005_top_keys_limit_and_empty_input() -> None:
    report = ReportAggregator(top_limit=1).build(
        documents=_documents(), translations={}, report_input=_report_input()
    )
    assert [u.key for u in report.summary.top_keys] == ["errors.save"]

    empty = ReportAggregator().build(documents=[], translations={}, report_input=_report_input())
    assert empty.records == []
    assert empty.summary.top_keys == []
    assert empty.metadata.total_patterns == 0


def test_rep_006_negative_top_limit_is_rejected() -> None:
    with pytest.raises(ValueError):
        ReportAggregator(top_limit=-1)
