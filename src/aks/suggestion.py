# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Closest-key suggestions for translation keys missing from the dictionary."""

import logging
from collections.abc import Iterable

import Levenshtein

logger = logging.getLogger(__name__)

DEFAULT_SUGGEST_THRESHOLD = 0.8


class KeySuggester:
    """Suggest the nearest known key for a missing translation key."""

    def __init__(self, threshold: float = DEFAULT_SUGGEST_THRESHOLD) -> None:
        """Initialize suggester with fuzzy threshold.

        Args:
            threshold: Inclusive similarity threshold in [0.0, 1.0].

        Raises:
            ValueError: If threshold is outside [0.0, 1.0].
        """
        if threshold < 0.0 or threshold > 1.0:
            raise ValueError("threshold must be between 0.0 and 1.0.")
        self._threshold = threshold

    def suggest(self, key: str, known_keys: Iterable[str]) -> str | None:
        """Return the most similar known key, if similar enough.

        Args:
            key: Missing translation key.
            known_keys: Keys present in the dictionary.

        Returns:
            Best candidate at or above the threshold; ties resolve to the
            lexicographically smallest key. ``None`` when nothing qualifies.
        """
        best_key: str | None = None
        best_ratio = -1.0
        for candidate in sorted(known_keys):
            if candidate == key:
                continue
            ratio = float(Levenshtein.ratio(key, candidate))
            if ratio < self._threshold or ratio <= best_ratio:
                continue
            best_key = candidate
            best_ratio = ratio
        if best_key is not None:
            logger.debug(f"Suggested key (key={key} suggestion={best_key} ratio={best_ratio:.3f})")
        return best_key
