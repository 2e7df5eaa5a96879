"""Style projection of language direction and font metadata.

When enabled, the engine installs a StyleProjector as an ordinary change
handler. It reads the document's ``direction`` field and its ``fonts``
mapping and writes each as a named property to a StyleSink:

    --ls_dir                    ltr | rtl
    --ls_<role>_font-family     family
    --ls_<role>_font-style      normal | italic
    --ls_<role>_font-weight     100..900 | bold | normal | lighter

Document shape (top level, or nested under ``style_section``):

    {
        "direction": "rtl",
        "fonts": {
            "regular": {"family": "Vazirmatn", "weight": "400", "style": "normal"}
        }
    }

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from langswap.constants import (
    DOCUMENT_DIRECTION_FIELD,
    DOCUMENT_FONTS_FIELD,
    STYLE_DIRECTION_PROPERTY,
    STYLE_FONT_FAMILY_TEMPLATE,
    STYLE_FONT_STYLE_TEMPLATE,
    STYLE_FONT_WEIGHT_TEMPLATE,
)
from langswap.diagnostics import Diagnostic, DiagnosticCode, DocumentFormatError
from langswap.enums import Direction, FontStyle, FontWeight

if TYPE_CHECKING:
    from langswap.localization.types import Document

__all__ = [
    "FontSpec",
    "LanguageInfo",
    "RecordingStyleSink",
    "StyleProjector",
    "StyleSink",
]

logger = logging.getLogger(__name__)


class StyleSink(Protocol):
    """Protocol for the external style target (CSS root, Qt palette, ...)."""

    def set_property(self, name: str, value: str) -> None:
        """Set a named style property."""


class RecordingStyleSink:
    """In-memory StyleSink keeping the latest value of every property.

    Useful for hosts that apply properties in batches and for tests.
    """

    __slots__ = ("properties",)

    def __init__(self) -> None:
        self.properties: dict[str, str] = {}

    def set_property(self, name: str, value: str) -> None:
        self.properties[name] = value


def _format_error(code: DiagnosticCode, message: str) -> DocumentFormatError:
    return DocumentFormatError(Diagnostic(code=code, message=message))


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Font declaration for one named role."""

    family: str
    weight: FontWeight
    style: FontStyle

    @classmethod
    def from_mapping(cls, role: str, raw: object) -> FontSpec:
        """Validate a raw font declaration.

        Raises:
            DocumentFormatError: If a field is missing or not an accepted value
        """
        if not isinstance(raw, Mapping):
            raise _format_error(
                DiagnosticCode.INVALID_FONT,
                f"Font role '{role}' must be an object, got {type(raw).__name__}",
            )
        family = raw.get("family")
        if not isinstance(family, str):
            raise _format_error(
                DiagnosticCode.INVALID_FONT, f"Font role '{role}' has no family string"
            )
        try:
            weight = FontWeight(str(raw.get("weight")))
            style = FontStyle(str(raw.get("style")))
        except ValueError as e:
            raise _format_error(
                DiagnosticCode.INVALID_FONT, f"Font role '{role}': {e}"
            ) from e
        return cls(family, weight, style)


@dataclass(frozen=True, slots=True)
class LanguageInfo:
    """Typed view of a document's direction and font metadata."""

    direction: Direction
    fonts: Mapping[str, FontSpec]

    @classmethod
    def from_document(cls, document: Document, section: str | None = None) -> LanguageInfo:
        """Extract style metadata from a language document.

        Args:
            document: Decoded language document
            section: Key of the nested mapping holding the metadata
                (None reads it from the top level)

        Returns:
            Validated LanguageInfo

        Raises:
            DocumentFormatError: If the metadata is missing or malformed
        """
        info: Document = document
        if section is not None:
            nested = document.get(section)
            if not isinstance(nested, Mapping):
                raise _format_error(
                    DiagnosticCode.MISSING_SECTION,
                    f"Document has no '{section}' object with style metadata",
                )
            info = nested

        try:
            direction = Direction(info.get(DOCUMENT_DIRECTION_FIELD))
        except ValueError as e:
            raise _format_error(
                DiagnosticCode.INVALID_DIRECTION,
                f"direction must be 'ltr' or 'rtl', got {info.get(DOCUMENT_DIRECTION_FIELD)!r}",
            ) from e

        raw_fonts = info.get(DOCUMENT_FONTS_FIELD, {})
        if not isinstance(raw_fonts, Mapping):
            raise _format_error(
                DiagnosticCode.INVALID_FONT,
                f"fonts must be an object, got {type(raw_fonts).__name__}",
            )
        fonts = {role: FontSpec.from_mapping(role, raw) for role, raw in raw_fonts.items()}
        return cls(direction, fonts)

    def style_properties(self) -> dict[str, str]:
        """Return the style properties this metadata projects to, in write order."""
        properties = {STYLE_DIRECTION_PROPERTY: str(self.direction)}
        for role, font in self.fonts.items():
            properties[STYLE_FONT_FAMILY_TEMPLATE.format(role=role)] = font.family
            properties[STYLE_FONT_STYLE_TEMPLATE.format(role=role)] = str(font.style)
            properties[STYLE_FONT_WEIGHT_TEMPLATE.format(role=role)] = str(font.weight)
        return properties


class StyleProjector:
    """Change handler writing a document's style metadata to a sink.

    Malformed metadata raises DocumentFormatError before anything is
    written, so the sink never holds a half-applied language.
    """

    __slots__ = ("_section", "_sink")

    def __init__(self, sink: StyleSink, *, section: str | None = None) -> None:
        """Initialize projector.

        Args:
            sink: Target receiving set_property() calls
            section: Document key holding the metadata (None for top level)
        """
        self._sink = sink
        self._section = section

    def __call__(self, document: Document) -> None:
        properties = LanguageInfo.from_document(document, self._section).style_properties()
        for name, value in properties.items():
            self._sink.set_property(name, value)
        logger.debug("Projected %d style properties", len(properties))
