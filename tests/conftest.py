"""Pytest configuration for the LangSwap test suite.

Hypothesis runs under one of three profiles, chosen once at import time:
``HYPOTHESIS_PROFILE`` names one explicitly, a ``CI`` variable set to
``true`` selects the smaller derandomized ``ci`` run, and anything else
gets ``dev``. ``debug`` prints every generated example.

Shared fixtures build a LanguageSwitcher over in-memory collaborators so
individual tests only state what differs.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest
from hypothesis import Verbosity, settings

from langswap.localization import (
    FileSource,
    LanguageConfig,
    LanguageDescriptor,
    LanguageSwitcher,
    MemoryStore,
    MemoryTransport,
    UrlSource,
)
from langswap.runtime import RecordingStyleSink
from tests.helpers.fakes import DE_DOCUMENT, EN_DOCUMENT, FA_DOCUMENT

# Hypothesis profiles

settings.register_profile("dev", max_examples=150)
settings.register_profile("ci", max_examples=40, derandomize=True, print_blob=True)
settings.register_profile("debug", max_examples=25, verbosity=Verbosity.verbose)

_PROFILES = ("dev", "ci", "debug")


def _profile_name() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())

# Shared fixtures

BASE = "https://cdn.example.com/lang"

DOCUMENTS: dict[str, dict[str, Any]] = {
    f"{BASE}/en.json": EN_DOCUMENT,
    f"{BASE}/de.json": DE_DOCUMENT,
    "https://mirror.example.com/fa.json": FA_DOCUMENT,
}

LANGUAGES = [
    LanguageDescriptor("en", "English", FileSource("en.json")),
    LanguageDescriptor("de", "Deutsch", FileSource("de.json")),
    LanguageDescriptor("fa", "فارسی", UrlSource("https://mirror.example.com/fa.json")),
]

ALIASES = {
    "en": ["en", "en-US", "en-GB"],
    "de": ["de", "de-DE", "de-AT"],
    "fa": ["fa", "fa-IR"],
}


@pytest.fixture
def transport() -> MemoryTransport:
    """Transport serving the en/de/fa sample documents."""
    return MemoryTransport(DOCUMENTS)


@pytest.fixture
def store() -> MemoryStore:
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def sink() -> RecordingStyleSink:
    """Style sink recording every projected property."""
    return RecordingStyleSink()


@pytest.fixture
def make_switcher(
    transport: MemoryTransport,
    store: MemoryStore,
    sink: RecordingStyleSink,
) -> Callable[..., LanguageSwitcher]:
    """Factory building a registered switcher; keyword arguments override defaults.

    Config fields (persistence_key, project_style, ...) and collaborators
    (transport, store, locale_source, style_sink) may both be overridden.
    """

    def factory(**overrides: Any) -> LanguageSwitcher:
        config_fields = {
            "base_location": BASE,
            "persistence_key": "ls-ln",
            "aliases": ALIASES,
            "project_style": False,
        }
        for name in ("base_location", "persistence_key", "aliases", "project_style", "style_section"):
            if name in overrides:
                config_fields[name] = overrides.pop(name)
        collaborators: dict[str, Any] = {
            "store": store,
            "locale_source": lambda: [],
            "style_sink": sink,
            "languages": LANGUAGES,
        }
        collaborators.update(overrides)
        chosen_transport = collaborators.pop("transport", transport)
        return LanguageSwitcher(LanguageConfig(**config_fields), chosen_transport, **collaborators)

    return factory
