# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from datetime import datetime, timezone
from pathlib import Path

import pytest

from aks.analyzers.typescript import DEFAULT_EXTENSIONS
from aks.config import ScanConfig
from aks.pipeline import run_scan
from aks.report_writer import ReportWriteError, report_file_stem

RUN_AT = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


def _config(tmp_path: Path, write_file) -> ScanConfig:
    root = tmp_path / "src"
    write_file(
        root / "page.ts",
        "this.t.stream('errors.save').subscribe(m => this.s.setAlert(m, 1, 'box', 2, T.E));\n",
    )
    translations = write_file(tmp_path / "en.json", '{"errors": {"save": "Saved"}}')
    return ScanConfig(
        root_path=root,
        translations_path=translations,
        output_dir=tmp_path / "reports",
        window_lines=20,
        suggest_threshold=0.8,
        top_keys=10,
        extensions=DEFAULT_EXTENSIONS,
    )


def test_pipe_001_run_scan_writes_both_reports_under_one_stem(
    tmp_path: Path, write_file
) -> None:
    config = _config(tmp_path, write_file)

    outcome = run_scan(config, now=RUN_AT)

    stem = report_file_stem(RUN_AT)
    assert outcome.written_paths == [
        config.output_dir / f"{stem}.json",
        config.output_dir / f"{stem}.csv",
    ]
    assert sorted(path.name for path in config.output_dir.iterdir()) == [
        f"{stem}.csv",
        f"{stem}.json",
    ]
    assert outcome.translations_loaded


def test_pipe_002_failed_csv_write_leaves_no_json_report_behind(
    tmp_path: Path, write_file
) -> None:
    config = _config(tmp_path, write_file)
    stem = report_file_stem(RUN_AT)
    blocker = config.output_dir / f"{stem}.csv.tmp"
    blocker.mkdir(parents=True)

    with pytest.raises(ReportWriteError):
        run_scan(config, now=RUN_AT)

    assert [path.name for path in config.output_dir.iterdir()] == [blocker.name]
