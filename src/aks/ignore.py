# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Match scanned paths against ``.gitignore`` rules found in the source tree."""

import logging
import os
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)


class IgnoreMatcher:
    """Match project paths against .gitignore patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        """Initialize matcher.

        Args:
            spec: Compiled gitignore matcher.
        """
        self._spec = spec

    @classmethod
    def empty(cls) -> "IgnoreMatcher":
        """Build a matcher that ignores nothing."""
        return cls(spec=pathspec.GitIgnoreSpec.from_lines([]))

    @classmethod
    def from_project_root(
        cls, input_root: Path, exclude_dirs: frozenset[str] = frozenset()
    ) -> "IgnoreMatcher":
        """Build matcher from root and nested .gitignore files.

        Args:
            input_root: Project root.
            exclude_dirs: Directory names whose .gitignore files are not read.

        Returns:
            Configured ignore matcher.

        Raises:
            OSError: If .gitignore files cannot be read.
            UnicodeDecodeError: If .gitignore files contain invalid UTF-8.
        """
        patterns: list[str] = []
        for ignore_path in _find_gitignore_files(input_root, exclude_dirs):
            relative_parent = ignore_path.parent.relative_to(input_root)
            base = relative_parent.as_posix()
            if base == ".":
                base = ""
            lines = ignore_path.read_text(encoding="utf-8").splitlines()
            for line in lines:
                patterns.append(_translate_gitignore_line(line=line, base=base))
        logger.debug(
            f"Loaded gitignore patterns (root={input_root} count={len(patterns)})"
        )
        spec = pathspec.GitIgnoreSpec.from_lines(patterns)
        return cls(spec=spec)

    def matches(self, relative_path: str, is_dir: bool) -> bool:
        """Check whether a path should be ignored.

        Args:
            relative_path: Project-relative POSIX path.
            is_dir: Whether the path is a directory.

        Returns:
            True when path should be ignored.
        """
        normalized = relative_path.replace(os.sep, "/").strip("/")
        if not normalized:
            return False
        if self._spec.match_file(normalized):
            return True
        if is_dir and self._spec.match_file(f"{normalized}/"):
            return True
        return False


def _translate_gitignore_line(line: str, base: str) -> str:
    """Translate one .gitignore line to a root-relative pattern.

    Args:
        line: Original .gitignore line.
        base: Parent directory relative to project root.

    Returns:
        Root-relative pattern line.
    """
    if not base or not line:
        return line
    if line.lstrip().startswith("#"):
        return line
    if line.startswith(r"\!") or line.startswith(r"\#"):
        return line
    is_negation = line.startswith("!")
    pattern = line[1:] if is_negation else line
    anchored = pattern.startswith("/")
    normalized_pattern = pattern[1:] if anchored else pattern
    if "/" not in normalized_pattern.rstrip("/") and not anchored:
        # unanchored names match at any depth below their .gitignore
        prefixed = f"{base}/**/{normalized_pattern}"
    else:
        prefixed = f"{base}/{normalized_pattern}" if normalized_pattern else base
    if anchored:
        prefixed = f"/{prefixed}"
    if is_negation:
        return f"!{prefixed}"
    return prefixed


def _find_gitignore_files(input_root: Path, exclude_dirs: frozenset[str]) -> list[Path]:
    """Collect .gitignore files without descending into excluded directories.

    Args:
        input_root: Project root.
        exclude_dirs: Directory names pruned from the walk.

    Returns:
        Sorted .gitignore paths.
    """
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(input_root):
        dirnames[:] = sorted(name for name in dirnames if name not in exclude_dirs)
        if ".gitignore" in filenames:
            found.append(Path(dirpath) / ".gitignore")
    return sorted(found)
