"""Enumerations for LangSwap type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so values read from a JSON
language document compare equal to the members directly.

Python 3.13+.
"""

from enum import StrEnum


class Direction(StrEnum):
    """Text direction declared by a language document.

    StrEnum provides automatic string conversion: str(Direction.RTL) == "rtl"
    """

    LTR = "ltr"
    """Left-to-right scripts (Latin, Cyrillic, ...)"""

    RTL = "rtl"
    """Right-to-left scripts (Arabic, Hebrew, Persian, ...)"""


class FontWeight(StrEnum):
    """Font weights accepted in a font role declaration."""

    W100 = "100"
    W200 = "200"
    W300 = "300"
    W400 = "400"
    W500 = "500"
    W600 = "600"
    W700 = "700"
    W800 = "800"
    W900 = "900"
    BOLD = "bold"
    NORMAL = "normal"
    LIGHTER = "lighter"


class FontStyle(StrEnum):
    """Font styles accepted in a font role declaration."""

    NORMAL = "normal"
    ITALIC = "italic"


class ActivationStatus(StrEnum):
    """Outcome of a single language activation.

    StrEnum provides automatic string conversion:
    str(ActivationStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Document fetched and swapped into the active state"""

    FAILED = "failed"
    """Transport failed; active state left untouched"""

    SUPERSEDED = "superseded"
    """Fetch completed after a newer activation was issued; response discarded"""


__all__ = [
    "ActivationStatus",
    "Direction",
    "FontStyle",
    "FontWeight",
]
