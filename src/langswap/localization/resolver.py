"""Language resolution from persisted choice, locale preferences and fallback.

Precedence, first match wins:
    1. Persisted key (if enabled and it names a registered language)
    2. First locale preference with an exact, case-insensitive alias
    3. The fallback key, returned verbatim without validation

An unregistered fallback is not a resolver error; it surfaces as
UnknownLanguageError when the key is activated.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from langswap.localization.loading import KeyValueStore
    from langswap.localization.registry import LanguageRegistry
    from langswap.localization.types import LanguageKey, LocalePreferenceSource

__all__ = ["LanguageResolver"]

logger = logging.getLogger(__name__)


class LanguageResolver:
    """Picks exactly one language key for activation.

    The resolver only reads its collaborators: the registry, the store (at
    the configured persistence key) and the locale preference source, which
    is invoked once per resolve() call.

    Example:
        >>> resolver = LanguageResolver(registry, store=store,
        ...                             persistence_key="ls-ln",
        ...                             locale_source=lambda: ["fa-IR", "en-US"])
        >>> resolver.resolve("en")
        'fa'
    """

    __slots__ = ("_locale_source", "_persistence_key", "_registry", "_store")

    def __init__(
        self,
        registry: LanguageRegistry,
        *,
        store: KeyValueStore | None = None,
        persistence_key: str | None = None,
        locale_source: LocalePreferenceSource | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            registry: Registry holding descriptors and the alias table
            store: Persistent store holding the remembered choice
            persistence_key: Store key; persistence is disabled when None
            locale_source: Callable returning preferred locale tags
        """
        self._registry = registry
        self._store = store
        self._persistence_key = persistence_key
        self._locale_source = locale_source

    def persisted_key(self) -> LanguageKey | None:
        """Return the persisted key if it names a registered language."""
        if self._store is None or self._persistence_key is None:
            return None
        key = self._store.get(self._persistence_key)
        if key is None:
            return None
        if key not in self._registry:
            logger.debug("Ignoring persisted language '%s': not registered", key)
            return None
        return key

    def inferred_key(self) -> LanguageKey | None:
        """Return the key of the first locale preference that is aliased."""
        if self._locale_source is None:
            return None
        for tag in self._locale_source():
            key = self._registry.lookup_alias(tag)
            if key is not None:
                logger.debug("Locale preference '%s' resolved to '%s'", tag, key)
                return key
        return None

    def resolve(
        self,
        fallback_key: LanguageKey,
        *,
        try_persisted: bool = True,
        try_locale_list: bool = True,
    ) -> LanguageKey:
        """Pick the language key to activate.

        Args:
            fallback_key: Returned verbatim when nothing else matches
            try_persisted: Consult the persisted choice first
            try_locale_list: Consult the locale preference source

        Returns:
            Resolved language key
        """
        if try_persisted:
            key = self.persisted_key()
            if key is not None:
                return key

        if try_locale_list:
            key = self.inferred_key()
            if key is not None:
                return key

        return fallback_key
