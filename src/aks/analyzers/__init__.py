# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Analyzer package for the alert key scanner."""

from aks.analyzers.typescript import TypeScriptAnalyzer

__all__ = ["TypeScriptAnalyzer"]
