"""LangSwap - language pack resolution and hot-swapping.

Resolves which language a client application should show, loads the
corresponding language document, swaps it into the active state atomically
and notifies observers. Direction and font metadata can be projected into
an external style target.

Public API:
    LanguageSwitcher - Engine: register, resolve, activate, subscribe, project
    LanguageConfig - Immutable engine configuration
    LanguageDescriptor, UrlSource, FileSource - Language registration records
    Scope - Explicit lifetime owner for scope-bound subscriptions
    system_locale_preferences - Locale preference source from the environment

Exceptions:
    LangSwapError - Base exception class
    ConfigurationError - Invalid setup (fatal at configuration time)
    UnknownLanguageError - Activation of an unregistered key
    TransportError - Document fetch failure (recovered by the loader)
    DocumentFormatError - Malformed style metadata

Submodules:
    langswap.localization - Registry, resolver, loader, transports, stores
    langswap.runtime - Active state, notification hub, cells, style projection
    langswap.diagnostics - Error types and diagnostic codes
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    ConfigurationError,
    DocumentFormatError,
    LangSwapError,
    TransportError,
    UnknownLanguageError,
)
from .enums import ActivationStatus, Direction
from .locale_utils import system_locale_preferences
from .localization import (
    FileSource,
    LanguageConfig,
    LanguageDescriptor,
    LanguageSwitcher,
    UrlSource,
)
from .runtime import Scope

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("langswap")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ActivationStatus",
    "ConfigurationError",
    "Direction",
    "DocumentFormatError",
    "FileSource",
    "LangSwapError",
    "LanguageConfig",
    "LanguageDescriptor",
    "LanguageSwitcher",
    "Scope",
    "TransportError",
    "UnknownLanguageError",
    "UrlSource",
    "__version__",
    "system_locale_preferences",
]
