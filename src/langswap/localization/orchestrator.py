"""Language switching engine.

Implements LanguageSwitcher, which wires the registry, resolver, loader,
notification hub and state projections together behind one object.

Key architectural decisions:
- Collaborators (transport, store, locale source, style sink) are explicit
  constructor parameters; nothing is looked up from an ambient container
- Immutable configuration (LanguageConfig) established at construction
- ActiveState is replaced as a whole, then change handlers are notified
- Style projection is an ordinary change handler installed first

Lifecycle:
    switcher = LanguageSwitcher(config, transport, store=store,
                                locale_source=system_locale_preferences)
    switcher.register([...])
    await switcher.set_preferred("en")      # resolve + activate

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langswap.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from langswap.localization.loading import LanguageLoader
from langswap.localization.registry import LanguageRegistry
from langswap.localization.resolver import LanguageResolver
from langswap.runtime.cells import DerivedCell, MutableCell
from langswap.runtime.hub import NotificationHub
from langswap.runtime.state import EMPTY_STATE, ActiveState
from langswap.runtime.style import StyleProjector

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from langswap.localization.config import LanguageConfig
    from langswap.localization.loading import ActivationResult, KeyValueStore, Transport
    from langswap.localization.registry import CatalogEntry, LanguageDescriptor
    from langswap.localization.types import (
        AliasBatch,
        Document,
        LanguageKey,
        LocalePreferenceSource,
    )
    from langswap.runtime.hub import ScopeLike, Subscription
    from langswap.runtime.style import StyleSink

__all__ = ["LanguageSwitcher"]

logger = logging.getLogger(__name__)


class LanguageSwitcher:
    """Resolves, loads and hot-swaps language documents.

    Example - Startup with persisted choice and environment inference:
        >>> config = LanguageConfig(
        ...     base_location="locales",
        ...     persistence_key="ls-ln",
        ...     aliases={"en": ["en", "en-us"], "fa": ["fa", "fa-ir"]},
        ... )
        >>> switcher = LanguageSwitcher(
        ...     config,
        ...     FileTransport("."),
        ...     store=JsonFileStore("settings.json"),
        ...     locale_source=system_locale_preferences,
        ... )
        >>> switcher.register([
        ...     LanguageDescriptor("en", "English", FileSource("en.json")),
        ...     LanguageDescriptor("fa", "فارسی", FileSource("fa.json")),
        ... ])
        >>> await switcher.set_preferred("en")

    Example - Reacting to changes:
        >>> title = switcher.get_section(lambda doc: doc["dict"]["title"])
        >>> with Scope() as scope:
        ...     switcher.subscribe(lambda doc: redraw(), scope=scope, run_now=True)

    Attributes:
        config: Immutable engine configuration
    """

    __slots__ = (
        "_changes",
        "_current_key",
        "_document",
        "_loaded",
        "_loader",
        "_registry",
        "_resolver",
        "_state",
        "config",
    )

    def __init__(
        self,
        config: LanguageConfig,
        transport: Transport,
        *,
        store: KeyValueStore | None = None,
        locale_source: LocalePreferenceSource | None = None,
        style_sink: StyleSink | None = None,
        languages: Iterable[LanguageDescriptor] | None = None,
    ) -> None:
        """Build the engine.

        Args:
            config: Immutable engine configuration
            transport: Document fetch capability
            store: Persistent store (required for persistence to take effect)
            locale_source: Callable returning preferred locale tags
            style_sink: Target for style projection (required if
                config.project_style is True)
            languages: Descriptors to register immediately

        Raises:
            ConfigurationError: If style projection is enabled without a sink,
                or a file-based language is given without base_location
        """
        self.config = config

        self._registry = LanguageRegistry(config.base_location)
        if languages is not None:
            self._registry.register(languages)
        if config.aliases:
            self._registry.register_aliases(config.aliases)

        self._state: MutableCell[ActiveState] = MutableCell(EMPTY_STATE)
        self._changes: NotificationHub[Document] = NotificationHub()

        self._resolver = LanguageResolver(
            self._registry,
            store=store,
            persistence_key=config.persistence_key,
            locale_source=locale_source,
        )
        self._loader = LanguageLoader(
            self._registry,
            transport,
            self._state,
            self._changes,
            store=store,
            persistence_key=config.persistence_key,
        )

        self._document: DerivedCell[ActiveState, Document | None] = DerivedCell(
            self._state, lambda state: state.current_document
        )
        self._loaded: DerivedCell[ActiveState, bool] = DerivedCell(
            self._state, lambda state: state.loaded
        )
        self._current_key: DerivedCell[ActiveState, LanguageKey | None] = DerivedCell(
            self._state, lambda state: state.current_key
        )

        if config.project_style:
            if style_sink is None:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.INVALID_CONFIGURATION,
                    message="project_style is enabled but no style_sink was provided",
                    hint="Pass style_sink=... or disable project_style",
                )
                raise ConfigurationError(diagnostic)
            self._changes.subscribe(StyleProjector(style_sink, section=config.style_section))
            logger.debug("Style projection installed")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, descriptors: Iterable[LanguageDescriptor]) -> None:
        """Register languages in display order.

        Raises:
            ConfigurationError: If a FileSource language is registered while
                no base_location is configured
        """
        self._registry.register(descriptors)

    def register_aliases(self, table: AliasBatch) -> None:
        """Register locale aliases (case-insensitive, last writer wins)."""
        self._registry.register_aliases(table)

    @property
    def registry(self) -> LanguageRegistry:
        """The language registry."""
        return self._registry

    def get_catalog(self) -> tuple[CatalogEntry, ...]:
        """Registered languages as ordered (key, display_name) entries."""
        return self._registry.catalog

    # ------------------------------------------------------------------
    # Resolution and activation
    # ------------------------------------------------------------------

    def resolve(
        self,
        fallback_key: LanguageKey,
        *,
        try_persisted: bool = True,
        try_locale_list: bool = True,
    ) -> LanguageKey:
        """Pick a language key: persisted, then aliased locale, then fallback."""
        return self._resolver.resolve(
            fallback_key, try_persisted=try_persisted, try_locale_list=try_locale_list
        )

    async def activate(self, key: LanguageKey) -> ActivationResult:
        """Load key's document and make it the active language.

        Raises:
            UnknownLanguageError: If key is not registered
        """
        return await self._loader.activate(key)

    async def set_preferred(
        self,
        fallback_key: LanguageKey,
        *,
        try_persisted: bool = True,
        try_locale_list: bool = True,
    ) -> ActivationResult:
        """Resolve the preferred language and activate it.

        Raises:
            UnknownLanguageError: If the resolved key is not registered
        """
        key = self.resolve(
            fallback_key, try_persisted=try_persisted, try_locale_list=try_locale_list
        )
        logger.debug("Preferred language resolved to '%s'", key)
        return await self.activate(key)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(
        self,
        handler: Callable[[Document], None],
        *,
        scope: ScopeLike | None = None,
        run_now: bool = False,
    ) -> Subscription[Document]:
        """Register a handler called with each newly activated document.

        Args:
            handler: Callable receiving the new document
            scope: Owner whose end disposes the subscription
            run_now: If a document is already loaded, call handler with it
                once before subscribing

        Returns:
            Subscription; dispose() it for manual cleanup
        """
        current = self._document.get if run_now else None
        return self._changes.subscribe(handler, scope=scope, current=current)

    def unsubscribe(self, handler: Callable[[Document], None]) -> bool:
        """Remove handler. Returns True if it was subscribed."""
        return self._changes.unsubscribe(handler)

    # ------------------------------------------------------------------
    # State projection
    # ------------------------------------------------------------------

    @property
    def state(self) -> ActiveState:
        """Current ActiveState snapshot."""
        return self._state.get()

    @property
    def loaded(self) -> DerivedCell[ActiveState, bool]:
        """Observable loaded flag."""
        return self._loaded

    def get_loaded(self) -> bool:
        """True once a document has been loaded."""
        return self._loaded.get()

    @property
    def document(self) -> DerivedCell[ActiveState, Document | None]:
        """Observable active document (None before the first load)."""
        return self._document

    @property
    def current_key(self) -> DerivedCell[ActiveState, LanguageKey | None]:
        """Observable key of the active language."""
        return self._current_key

    @property
    def current_language(self) -> CatalogEntry | None:
        """Catalog entry of the active language."""
        key = self._current_key.get()
        if key is None:
            return None
        descriptor = self._registry.get(key)
        return descriptor.catalog_entry if descriptor is not None else None

    @property
    def current_index(self) -> int:
        """Catalog position of the active language, or -1 before the first load."""
        key = self._current_key.get()
        return -1 if key is None else self._registry.index_of(key)

    def get_section[R](
        self,
        extractor: Callable[[Document], R],
        unsafe: bool = False,
        *,
        scope: ScopeLike | None = None,
    ) -> DerivedCell[ActiveState, R | None]:
        """Derive an observable view of the active document.

        Args:
            extractor: Function selecting a part of the document
            unsafe: Caller asserts a document is loaded. The extractor is
                then always invoked, even with None before the first load;
                avoiding that is the caller's responsibility.
            scope: Owner whose end detaches the section. Without one the
                section detaches once it is no longer referenced.

        Returns:
            Cell recomputed on every state change. With unsafe=False it holds
            None while nothing is loaded, without calling extractor.
        """
        if unsafe:
            return DerivedCell(
                self._state,
                lambda state: extractor(state.current_document),  # type: ignore[arg-type]
                scope=scope,
            )

        def safe(state: ActiveState) -> R | None:
            if state.current_document is None:
                return None
            return extractor(state.current_document)

        return DerivedCell(self._state, safe, scope=scope)
