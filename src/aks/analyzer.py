# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Analyzer interfaces and DTOs for call-site extraction."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class SourceDocument:
    """Represent one source file handed to the extractor.

    Attributes:
        path: Project-relative POSIX path of the file.
        text: Raw file content.
    """

    path: str
    text: str


@dataclass(frozen=True)
class CallSitePattern:
    """Represent one recognized ``stream(...)`` / ``setAlert(...)`` pair.

    Attributes:
        translation_key: First string-literal argument of the ``stream`` call.
        alert_container: Third argument of ``setAlert`` (string literal content).
        alert_type: Fifth argument of ``setAlert`` as a raw token.
        line_number: Line of the ``stream`` call in comment-stripped text (1-based).
        raw_snippet: Whitespace-collapsed text spanning both calls.
    """

    translation_key: str
    alert_container: str
    alert_type: str
    line_number: int
    raw_snippet: str


@dataclass(frozen=True)
class DocumentPatterns:
    """Represent the ordered patterns found in one source file."""

    file_path: str
    patterns: tuple[CallSitePattern, ...]


@dataclass(frozen=True)
class AnalyzerError:
    """Represent an analyzer error for one file or directory."""

    file_path: str
    message: str


@dataclass(frozen=True)
class AnalyzeResult:
    """Represent the outcome of scanning one project root.

    Attributes:
        documents: Files that produced at least one pattern, in scan order.
        errors: Recoverable per-path failures.
        files_scanned: Number of source files read successfully.
    """

    documents: list[DocumentPatterns]
    errors: list[AnalyzerError]
    files_scanned: int


class Analyzer(Protocol):
    """Source tree analyzer contract."""

    def analyze(self, root_path: Path) -> AnalyzeResult:
        """Analyze a project root and return per-file patterns and errors."""
