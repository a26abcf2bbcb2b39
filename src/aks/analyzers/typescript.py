# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""TypeScript source tree analyzer."""

import logging
from pathlib import Path

from aks.analyzer import AnalyzeResult, AnalyzerError, DocumentPatterns, SourceDocument
from aks.extractor import PatternExtractor
from aks.ignore import IgnoreMatcher

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx")
DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset({"node_modules", ".git", "dist", "build"})


class TypeScriptAnalyzer:
    """Scan TypeScript files beneath a root for alert call-site patterns."""

    def __init__(
        self,
        extractor: PatternExtractor,
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
        exclude_dirs: frozenset[str] = DEFAULT_EXCLUDE_DIRS,
    ) -> None:
        """Initialize analyzer.

        Args:
            extractor: Pattern extractor applied to every file.
            extensions: File suffixes to scan.
            exclude_dirs: Directory names never descended into.
        """
        self._extractor = extractor
        self._extensions = extensions
        self._exclude_dirs = exclude_dirs

    def analyze(self, root_path: Path) -> AnalyzeResult:
        """Analyze source files beneath the provided root path.

        Unreadable files and unlistable directories are logged, recorded as
        errors and skipped.

        Args:
            root_path: Root directory to analyze.

        Returns:
            Patterns per file, recoverable analyzer errors and the count of
            files read.
        """
        errors: list[AnalyzerError] = []
        matcher = self._build_matcher(root_path=root_path, errors=errors)
        files = self._discover_files(root_path=root_path, matcher=matcher, errors=errors)
        logger.info(f"Discovered source files (root={root_path} count={len(files)})")

        documents: list[DocumentPatterns] = []
        files_scanned = 0
        for file_path in files:
            relative_path = file_path.relative_to(root_path).as_posix()
            try:
                text = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning(
                    f"Skipping file due to read failure (file_path={relative_path} error={exc})"
                )
                errors.append(AnalyzerError(file_path=relative_path, message=str(exc)))
                continue
            files_scanned += 1
            document = self.extract_document(
                SourceDocument(path=relative_path, text=text)
            )
            if document.patterns:
                documents.append(document)

        return AnalyzeResult(documents=documents, errors=errors, files_scanned=files_scanned)

    def extract_document(self, document: SourceDocument) -> DocumentPatterns:
        """Extract the patterns of one in-memory source document."""
        patterns = self._extractor.extract(document.text)
        return DocumentPatterns(file_path=document.path, patterns=tuple(patterns))

    def _build_matcher(
        self, root_path: Path, errors: list[AnalyzerError]
    ) -> IgnoreMatcher:
        try:
            return IgnoreMatcher.from_project_root(
                input_root=root_path, exclude_dirs=self._exclude_dirs
            )
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                f"Failed to read .gitignore files; scanning without them (root={root_path} error={exc})"
            )
            errors.append(AnalyzerError(file_path=".gitignore", message=str(exc)))
            return IgnoreMatcher.empty()

    def _discover_files(
        self,
        root_path: Path,
        matcher: IgnoreMatcher,
        errors: list[AnalyzerError],
    ) -> list[Path]:
        """Walk the tree breadth-first and collect files with scanned suffixes.

        Args:
            root_path: Root directory.
            matcher: Gitignore matcher for the tree.
            errors: Collector for unlistable directories.

        Returns:
            Matching files sorted by path.
        """
        found: list[Path] = []
        queue: list[Path] = [root_path]
        while queue:
            current = queue.pop(0)
            try:
                children = sorted(current.iterdir(), key=lambda item: item.name)
            except OSError as exc:
                relative_current = current.relative_to(root_path).as_posix()
                logger.warning(
                    f"Skipping directory due to listing failure (path={relative_current} error={exc})"
                )
                errors.append(AnalyzerError(file_path=relative_current, message=str(exc)))
                continue

            for child in children:
                relative_child = child.relative_to(root_path).as_posix()
                if child.is_dir():
                    if child.is_symlink() or child.name in self._exclude_dirs:
                        continue
                    if matcher.matches(relative_path=relative_child, is_dir=True):
                        continue
                    queue.append(child)
                    continue
                if not child.name.endswith(self._extensions):
                    continue
                if matcher.matches(relative_path=relative_child, is_dir=False):
                    continue
                found.append(child)
        return sorted(found)
