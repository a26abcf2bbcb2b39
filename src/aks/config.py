# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Scan run configuration."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ScanConfig:
    """Describe all values needed to run one scan.

    Attributes:
        root_path: Source root to scan recursively.
        translations_path: JSON localization file.
        output_dir: Directory receiving the JSON and CSV reports.
        window_lines: Lines below a ``stream`` call searched for ``setAlert``.
        suggest_threshold: Similarity threshold for missing-key suggestions.
        top_keys: Number of most used keys listed in the summary.
        extensions: Source file suffixes to scan.
    """

    root_path: Path
    translations_path: Path
    output_dir: Path
    window_lines: int
    suggest_threshold: float
    top_keys: int
    extensions: tuple[str, ...]
