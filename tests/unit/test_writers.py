# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from aks.analyzer import CallSitePattern, DocumentPatterns
from aks.model import AnalysisReport, ReportInput
from aks.report_builder import ReportAggregator
from aks.report_writer import ReportWriteError, report_file_stem
from aks.writers import CsvReportWriter, JsonReportWriter


def _report(translations: dict[str, str]) -> AnalysisReport:
    documents = [
        DocumentPatterns(
            file_path="app/a.ts",
            patterns=(
                CallSitePattern(
                    translation_key="quote.key",
                    alert_container="page-alert",
                    alert_type="AlertType.ERROR",
                    line_number=4,
                    raw_snippet=".stream('quote.key')",
                ),
                CallSitePattern(
                    translation_key="missing.key",
                    alert_container="banner",
                    alert_type="AlertType.INFO",
                    line_number=10,
                    raw_snippet=".stream('missing.key')",
                ),
            ),
        )
    ]
    return ReportAggregator().build(
        documents=documents,
        translations=translations,
        report_input=ReportInput(
            extracted_at="2026-10-18T09:30:00+00:00",
            search_path="src",
            translations_path="en.json",
            files_scanned=1,
            window_lines=20,
            errors=[],
        ),
    )


def test_out_001_csv_quotes_strings_and_doubles_embedded_quotes(tmp_path: Path) -> None:
    report = _report({"quote.key": 'He said "hi"\nthen left'})
    output = tmp_path / "out" / "report.csv"

    written = CsvReportWriter().write(report, output)

    assert written == output
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == (
        '"translation_key","translation_value","alert_container","alert_type",'
        '"file_path","line_number","status","usage_count"'
    )
    assert lines[1] == (
        '"quote.key","He said ""hi"" then left","page-alert","AlertType.ERROR",'
        '"app/a.ts",4,"MATCHED",1'
    )
    assert lines[2] == (
        '"missing.key","[MISSING]","banner","AlertType.INFO","app/a.ts",10,"MISSING",1'
    )
    assert len(lines) == 3


def test_out_002_json_report_contains_metadata_records_and_summary(tmp_path: Path) -> None:
    report = _report({"quote.key": "Café fermé"})
    output = tmp_path / "report.json"

    JsonReportWriter().write(report, output)

    text = output.read_text(encoding="utf-8")
    assert "Café fermé" in text
    payload = json.loads(text)
    assert set(payload) == {"metadata", "records", "summary", "errors"}
    assert payload["metadata"]["total_patterns"] == 2
    assert payload["metadata"]["search_path"] == "src"
    assert payload["records"][1]["translation_value"] is None
    assert payload["records"][1]["has_translation"] is False
    assert payload["summary"]["missing_keys"][0]["key"] == "missing.key"
    assert payload["summary"]["matched_keys"][0]["files"] == ["app/a.ts"]
    assert payload["summary"]["alert_types"] == ["AlertType.ERROR", "AlertType.INFO"]


def test_out_003_write_failure_raises_report_write_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    report = _report({})

    with pytest.raises(ReportWriteError):
        JsonReportWriter().write(report, blocker / "report.json")
    with pytest.raises(ReportWriteError):
        CsvReportWriter().write(report, blocker / "report.csv")


def test_out_004_report_file_stem_uses_date_and_minute() -> None:
    generated_at = datetime(2026, 10, 18, 9, 5, 59, tzinfo=timezone.utc)

    assert report_file_stem(generated_at) == "alert-patterns-2026-10-18-0905"
