# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Localization dictionary loading and flattening."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TranslationLoadError(RuntimeError):
    """Represent a localization document that cannot be read or parsed."""


def flatten_translations(document: Any, prefix: str = "") -> dict[str, str]:
    """Flatten a nested key/value document into dot-joined keys.

    Nested objects are recursed into; arrays and scalars are leaves. Non-string
    leaves are rendered as JSON text.

    Args:
        document: Parsed localization document.
        prefix: Key path of ``document`` inside the whole tree.

    Returns:
        Mapping from dotted key path to leaf value. ``{}`` when ``document``
        is not an object.
    """
    if not isinstance(document, dict):
        return {}
    flattened: dict[str, str] = {}
    for key, value in document.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flattened.update(flatten_translations(value, full_key))
        elif isinstance(value, str):
            flattened[full_key] = value
        else:
            flattened[full_key] = json.dumps(value, ensure_ascii=False)
    return flattened


def load_translations(path: Path) -> dict[str, str]:
    """Load and flatten a JSON localization file.

    Args:
        path: Localization file path.

    Returns:
        Flattened translation dictionary.

    Raises:
        TranslationLoadError: If the file is missing, unreadable, not JSON or
            not a JSON object.
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TranslationLoadError(f"Cannot load translations from {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise TranslationLoadError(
            f"Localization document in {path} is not an object: {type(document).__name__}"
        )
    translations = flatten_translations(document)
    logger.info(f"Loaded translations (path={path} keys={len(translations)})")
    return translations
