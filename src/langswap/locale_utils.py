"""Locale utilities for alias normalization and preference discovery.

Centralizes locale tag handling used throughout the codebase:
- Alias normalization (case-insensitive, exact-match lookups)
- POSIX to BCP-47 conversion for environment-provided locales
- Babel-backed display names and text direction

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from langswap.enums import Direction

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_display_name",
    "get_text_direction",
    "normalize_alias",
    "system_locale_preferences",
    "to_bcp47",
]

# Pseudo-locales that carry no language preference.
_PSEUDO_LOCALES = frozenset({"C", "POSIX", ""})


def normalize_alias(tag: str) -> str:
    """Normalize a locale tag for alias table lookups.

    Only case is folded. Separators are preserved, so "en-US" and "en_US"
    remain distinct aliases, and no prefix matching is implied.

    Args:
        tag: Locale tag as written by the caller (e.g., "EN-us")

    Returns:
        Lower-cased tag (e.g., "en-us")

    Example:
        >>> normalize_alias("EN-us")
        'en-us'
    """
    return tag.lower()


def to_bcp47(locale_code: str) -> str:
    """Convert a POSIX locale string to BCP-47 form.

    Strips the encoding suffix and modifier, then replaces underscores with
    hyphens so environment locales look like browser-reported tags.

    Args:
        locale_code: POSIX locale (e.g., "de_DE.UTF-8", "sr_RS@latin")

    Returns:
        BCP-47 tag (e.g., "de-DE", "sr-RS")

    Example:
        >>> to_bcp47("pt_BR.UTF-8")
        'pt-BR'
    """
    code = locale_code.split(".", 1)[0].split("@", 1)[0]
    return code.replace("_", "-")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(locale_code, sep="-" if "-" in locale_code else "_")


def get_display_name(locale_code: str, *, in_locale: str | None = None) -> str:
    """Return the CLDR display name of a locale.

    By default the name is given in the locale itself ("Deutsch" for "de"),
    which is what a language picker usually shows.

    Args:
        locale_code: Locale to describe
        in_locale: Locale to render the name in (defaults to locale_code)

    Returns:
        Display name, or locale_code unchanged if Babel does not know it

    Example:
        >>> get_display_name("de")
        'Deutsch'
        >>> get_display_name("de", in_locale="en")
        'German'
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(locale_code)
        target = get_babel_locale(in_locale) if in_locale else locale
    except (UnknownLocaleError, ValueError):
        return locale_code
    return locale.get_display_name(target) or locale_code


def get_text_direction(locale_code: str) -> Direction:
    """Return the script direction CLDR declares for a locale.

    Args:
        locale_code: Locale to inspect

    Returns:
        Direction.RTL for right-to-left scripts, Direction.LTR otherwise
        (including unknown locales)

    Example:
        >>> get_text_direction("fa")
        <Direction.RTL: 'rtl'>
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError):
        return Direction.LTR
    return Direction.RTL if locale.text_direction == "rtl" else Direction.LTR


def system_locale_preferences() -> list[str]:
    """Detect the ordered locale preferences of the current process.

    Detection order (most preferred first, duplicates removed):
    1. LANGUAGE environment variable (colon-separated priority list)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)
    5. Python locale.getlocale() (OS-level locale)

    Filters out "C" and "POSIX" pseudo-locales and normalizes every entry to
    BCP-47 form. Suitable as a LocalePreferenceSource.

    Returns:
        Ordered list of BCP-47 tags, possibly empty

    Example:
        >>> import os
        >>> os.environ['LANGUAGE'] = 'fa_IR:en_US'
        >>> system_locale_preferences()[:2]
        ['fa-IR', 'en-US']
    """
    import locale as locale_module  # noqa: PLC0415

    candidates: list[str] = []

    language = os.environ.get("LANGUAGE", "")
    candidates.extend(part for part in language.split(":") if part)

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value:
            candidates.append(value)

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale:
            candidates.append(system_locale)
    except ValueError:
        pass

    tags = (
        to_bcp47(candidate)
        for candidate in candidates
        if candidate.split(".", 1)[0] not in _PSEUDO_LOCALES
    )
    # dict.fromkeys() removes duplicates while maintaining preference order
    return list(dict.fromkeys(tag for tag in tags if tag))
