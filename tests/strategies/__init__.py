"""Hypothesis strategies for LangSwap property-based testing.

This package provides reusable strategies for generating test data
across multiple test modules.

- localization: Language keys, locale tags and preference lists

Usage:
    from tests.strategies import locale_tags, preference_lists
    from tests.strategies.localization import mixed_case
"""

from .localization import language_keys, locale_tags, mixed_case, preference_lists

__all__ = [
    "language_keys",
    "locale_tags",
    "mixed_case",
    "preference_lists",
]
