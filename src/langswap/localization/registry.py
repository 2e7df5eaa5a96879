"""Language registry: descriptors, aliases and the display catalog.

The registry is populated at configuration time and only read afterwards.
Registration order is preserved for catalog display.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from langswap.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from langswap.locale_utils import get_display_name, normalize_alias

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from langswap.localization.types import AliasBatch, LanguageKey, LocaleTag

__all__ = [
    "CatalogEntry",
    "FileSource",
    "LanguageDescriptor",
    "LanguageRegistry",
    "LanguageSource",
    "UrlSource",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UrlSource:
    """Language document located at an absolute URL."""

    url: str


@dataclass(frozen=True, slots=True)
class FileSource:
    """Language document named relative to the configured base location."""

    file_name: str


type LanguageSource = UrlSource | FileSource


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """Key and display name of a registered language."""

    key: LanguageKey
    display_name: str


@dataclass(frozen=True, slots=True)
class LanguageDescriptor:
    """Registration record mapping a key to a document location.

    Attributes:
        key: Unique, case-sensitive language key
        display_name: Name shown in language pickers
        source: Exactly one of UrlSource or FileSource

    Example:
        >>> LanguageDescriptor("fa", "فارسی", FileSource("fa.json"))
        >>> LanguageDescriptor.from_locale("de", UrlSource("https://cdn/de.json"))
    """

    key: LanguageKey
    display_name: str
    source: LanguageSource

    def __post_init__(self) -> None:
        """Validate descriptor fields.

        Raises:
            ValueError: If key is empty or source is not a known source type
        """
        if not self.key:
            msg = "Language key cannot be empty"
            raise ValueError(msg)
        if not isinstance(self.source, (UrlSource, FileSource)):
            msg = (
                f"source must be UrlSource or FileSource, "
                f"got {type(self.source).__name__}"
            )
            raise ValueError(msg)

    @classmethod
    def from_locale(
        cls,
        key: LanguageKey,
        source: LanguageSource,
        *,
        in_locale: str | None = None,
    ) -> LanguageDescriptor:
        """Build a descriptor whose display name comes from CLDR.

        Args:
            key: Language key, also parsed as a locale code
            source: Document location
            in_locale: Render the name in this locale instead of the key's own

        Returns:
            New LanguageDescriptor
        """
        return cls(key, get_display_name(key, in_locale=in_locale), source)

    @property
    def catalog_entry(self) -> CatalogEntry:
        """Catalog projection of this descriptor."""
        return CatalogEntry(self.key, self.display_name)


class LanguageRegistry:
    """Ordered catalog of language descriptors plus the alias table.

    Duplicate keys: the later registration wins. The descriptor and display
    name are replaced in place, so the key keeps its first catalog position.

    Alias collisions: the last writer wins.

    Attributes:
        base_location: Base for resolving FileSource descriptors
    """

    __slots__ = ("_aliases", "_base_location", "_descriptors")

    def __init__(self, base_location: str | None = None) -> None:
        """Initialize an empty registry.

        Args:
            base_location: Base URL or directory for FileSource descriptors
        """
        self._base_location = base_location
        # dict preserves registration order for the catalog
        self._descriptors: dict[LanguageKey, LanguageDescriptor] = {}
        self._aliases: dict[LocaleTag, LanguageKey] = {}

    @property
    def base_location(self) -> str | None:
        """Base location configured for file-based sources."""
        return self._base_location

    def register(self, descriptors: Iterable[LanguageDescriptor]) -> None:
        """Append descriptors to the catalog.

        Descriptors preceding a failing one stay registered.

        Args:
            descriptors: Descriptors in display order

        Raises:
            ConfigurationError: If a FileSource descriptor is registered
                while no base location is configured
        """
        for descriptor in descriptors:
            if isinstance(descriptor.source, FileSource) and self._base_location is None:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.BASE_LOCATION_MISSING,
                    message=(
                        f"Language '{descriptor.key}' uses file "
                        f"'{descriptor.source.file_name}' but no base location is configured"
                    ),
                    hint="Set base_location in LanguageConfig before registering file-based languages",
                )
                raise ConfigurationError(diagnostic)

            if descriptor.key in self._descriptors:
                logger.warning(
                    "Language '%s' registered twice; later registration wins",
                    descriptor.key,
                )
            else:
                logger.debug("Registered language: %s", descriptor.key)
            self._descriptors[descriptor.key] = descriptor

    def register_aliases(self, table: AliasBatch) -> None:
        """Insert locale aliases, lower-casing every alias.

        Keys are not validated against the registry; an alias pointing at an
        unregistered key surfaces as UnknownLanguageError on activation.

        Args:
            table: Mapping of language key to the aliases that select it
        """
        for key, aliases in table.items():
            for alias in aliases:
                normalized = normalize_alias(alias)
                previous = self._aliases.get(normalized)
                if previous is not None and previous != key:
                    logger.debug(
                        "Alias '%s' reassigned from '%s' to '%s'", normalized, previous, key
                    )
                self._aliases[normalized] = key

    def get(self, key: LanguageKey) -> LanguageDescriptor | None:
        """Return the descriptor for key, or None if unregistered."""
        return self._descriptors.get(key)

    def lookup_alias(self, tag: LocaleTag) -> LanguageKey | None:
        """Resolve a locale tag through the alias table (case-insensitive, exact)."""
        return self._aliases.get(normalize_alias(tag))

    def index_of(self, key: LanguageKey) -> int:
        """Catalog position of key, or -1 if unregistered."""
        for index, registered in enumerate(self._descriptors):
            if registered == key:
                return index
        return -1

    @property
    def keys(self) -> tuple[LanguageKey, ...]:
        """Registered keys in registration order."""
        return tuple(self._descriptors)

    @property
    def aliases(self) -> dict[LocaleTag, LanguageKey]:
        """Copy of the alias table (normalized tag -> key)."""
        return dict(self._aliases)

    @property
    def catalog(self) -> tuple[CatalogEntry, ...]:
        """Ordered (key, display_name) pairs for catalog display."""
        return tuple(d.catalog_entry for d in self._descriptors.values())

    def __contains__(self, key: object) -> bool:
        return key in self._descriptors

    def __iter__(self) -> Iterator[LanguageDescriptor]:
        return iter(tuple(self._descriptors.values()))

    def __len__(self) -> int:
        return len(self._descriptors)
