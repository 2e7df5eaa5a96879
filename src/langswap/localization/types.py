"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating LanguageSwitcher call sites.

Python 3.13+.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

__all__ = [
    "AliasBatch",
    "Document",
    "LanguageKey",
    "LocalePreferenceSource",
    "LocaleTag",
]

type LanguageKey = str
"""Registry key of a language (e.g., 'en', 'fa', 'de-formal'). Case-sensitive."""

type LocaleTag = str
"""Locale tag as reported by the environment (e.g., 'en-US', 'fa-IR')."""

type Document = Mapping[str, Any]
"""Decoded language document (JSON object)."""

type AliasBatch = Mapping[LanguageKey, Sequence[LocaleTag]]
"""Aliases to register, grouped by the key they resolve to."""

type LocalePreferenceSource = Callable[[], Sequence[LocaleTag]]
"""Zero-argument callable returning locale tags, most preferred first."""
