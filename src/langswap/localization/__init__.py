"""Language registration, resolution and loading.

Provides the full switching stack: type aliases, the registry, the
resolver, document loading infrastructure and the LanguageSwitcher engine.

Submodules:
    types        - PEP 695 type aliases (LanguageKey, LocaleTag, Document, ...)
    config       - LanguageConfig (immutable engine configuration)
    registry     - LanguageDescriptor, UrlSource, FileSource, LanguageRegistry
    resolver     - LanguageResolver (persisted > aliased locale > fallback)
    loading      - Transport/KeyValueStore protocols, ActivationResult, LanguageLoader
    transports   - MemoryTransport, FileTransport, HttpTransport
    stores       - MemoryStore, JsonFileStore
    orchestrator - LanguageSwitcher

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from langswap.enums import ActivationStatus
from langswap.localization.config import LanguageConfig
from langswap.localization.loading import (
    ActivationResult,
    KeyValueStore,
    LanguageLoader,
    Transport,
    source_location,
)
from langswap.localization.orchestrator import LanguageSwitcher
from langswap.localization.registry import (
    CatalogEntry,
    FileSource,
    LanguageDescriptor,
    LanguageRegistry,
    LanguageSource,
    UrlSource,
)
from langswap.localization.resolver import LanguageResolver
from langswap.localization.stores import JsonFileStore, MemoryStore
from langswap.localization.transports import FileTransport, HttpTransport, MemoryTransport
from langswap.localization.types import (
    AliasBatch,
    Document,
    LanguageKey,
    LocalePreferenceSource,
    LocaleTag,
)

__all__ = [
    # Main engine
    "LanguageSwitcher",
    "LanguageConfig",
    # Registration
    "LanguageDescriptor",
    "LanguageSource",
    "UrlSource",
    "FileSource",
    "CatalogEntry",
    "LanguageRegistry",
    # Resolution
    "LanguageResolver",
    # Loading
    "LanguageLoader",
    "ActivationResult",
    "ActivationStatus",
    "source_location",
    # Collaborator protocols and implementations
    "Transport",
    "MemoryTransport",
    "FileTransport",
    "HttpTransport",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    # Type aliases for user code type annotations
    "AliasBatch",
    "Document",
    "LanguageKey",
    "LocalePreferenceSource",
    "LocaleTag",
]
