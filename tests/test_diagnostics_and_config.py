"""Tests for diagnostics, error types, configuration and ActiveState.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from langswap.diagnostics import (
    ConfigurationError,
    Diagnostic,
    DiagnosticCode,
    DocumentFormatError,
    LangSwapError,
    TransportError,
    UnknownLanguageError,
)
from langswap.localization import LanguageConfig
from langswap.runtime import EMPTY_STATE, ActiveState


class TestDiagnostic:
    """Diagnostic formatting."""

    def test_message_only(self) -> None:
        """A bare diagnostic formats as a single line."""
        diagnostic = Diagnostic(DiagnosticCode.UNKNOWN_LANGUAGE, "no 'xx'")

        assert diagnostic.format_error() == "error[UNKNOWN_LANGUAGE]: no 'xx'"
        assert str(diagnostic) == "no 'xx'"

    def test_location_and_hint(self) -> None:
        """Location and hint each add a line."""
        diagnostic = Diagnostic(
            DiagnosticCode.HTTP_STATUS,
            "HTTP 404 fetching language document",
            hint="Check base_location",
            location="https://x/de.json",
        )

        assert diagnostic.format_error().splitlines() == [
            "error[HTTP_STATUS]: HTTP 404 fetching language document",
            "  --> https://x/de.json",
            "  = help: Check base_location",
        ]

    def test_codes_unique(self) -> None:
        """Every code has a distinct value."""
        values = [code.value for code in DiagnosticCode]

        assert len(values) == len(set(values))

    @given(code=st.sampled_from(list(DiagnosticCode)), message=st.text(min_size=1, max_size=80))
    def test_first_line_names_code(self, code: DiagnosticCode, message: str) -> None:
        """format_error() always starts with the code name (property)."""
        formatted = Diagnostic(code, message).format_error()

        assert formatted.startswith(f"error[{code.name}]: ")


class TestErrors:
    """Exception hierarchy."""

    @pytest.mark.parametrize(
        "error_type",
        [ConfigurationError, UnknownLanguageError, TransportError, DocumentFormatError],
    )
    def test_hierarchy(self, error_type: type[LangSwapError]) -> None:
        """All errors derive from LangSwapError."""
        assert issubclass(error_type, LangSwapError)

    def test_plain_message(self) -> None:
        """A string message leaves diagnostic unset."""
        error = ConfigurationError("bad setup")

        assert error.diagnostic is None
        assert str(error) == "bad setup"

    def test_diagnostic_message(self) -> None:
        """A Diagnostic becomes the formatted message."""
        diagnostic = Diagnostic(DiagnosticCode.FETCH_FAILED, "timed out", location="u")
        error = TransportError(diagnostic, url="u")

        assert error.diagnostic is diagnostic
        assert error.url == "u"
        assert str(error) == diagnostic.format_error()


class TestLanguageConfig:
    """LanguageConfig validation."""

    def test_defaults(self) -> None:
        """The default configuration disables every optional feature."""
        config = LanguageConfig()

        assert config.base_location is None
        assert config.persistence_key is None
        assert config.aliases is None
        assert config.project_style is False
        assert config.style_section is None

    @pytest.mark.parametrize("field", ["base_location", "persistence_key", "style_section"])
    def test_empty_strings_rejected(self, field: str) -> None:
        """Empty strings are not a way to disable a feature."""
        with pytest.raises(ValueError, match=f"{field} must be non-empty"):
            LanguageConfig(**{field: ""})

    def test_with_persistence(self) -> None:
        """with_persistence() uses the default key."""
        config = LanguageConfig.with_persistence(base_location="locales")

        assert config.persistence_key == "ls-ln"
        assert config.base_location == "locales"

    def test_with_persistence_custom_key(self) -> None:
        """An explicit persistence_key replaces the default."""
        config = LanguageConfig.with_persistence(persistence_key="app-language")

        assert config.persistence_key == "app-language"

    def test_frozen(self) -> None:
        """Configuration cannot change after construction."""
        config = LanguageConfig()

        with pytest.raises(AttributeError):
            config.project_style = True  # type: ignore[misc]


class TestActiveState:
    """ActiveState invariants."""

    def test_empty_state(self) -> None:
        """EMPTY_STATE is not loaded."""
        assert not EMPTY_STATE.loaded
        assert EMPTY_STATE.current_key is None

    def test_loaded_state(self) -> None:
        """A key with a document is loaded."""
        assert ActiveState("en", {"direction": "ltr"}).loaded

    @pytest.mark.parametrize(
        ("key", "document"), [("en", None), (None, {"direction": "ltr"})]
    )
    def test_half_state_rejected(self, key: str | None, document: dict | None) -> None:
        """Key and document are set together or not at all."""
        with pytest.raises(ValueError):
            ActiveState(key, document)
