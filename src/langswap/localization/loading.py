"""Language document loading and atomic state replacement.

Provides the collaborator protocols consumed by the loader, the activation
result record, and the loader itself.

Components:
    Transport        - Protocol: asynchronous fetch(url) -> Document
    KeyValueStore    - Protocol: get/set string store for the remembered choice
    ActivationResult - Immutable outcome of one activate() call
    LanguageLoader   - Persist, fetch, swap ActiveState, notify

Activation steps:
    1. Look up the descriptor (UnknownLanguageError if absent)
    2. Compute the source location
    3. Persist the key (before the fetch is awaited)
    4. Await the fetch
    5. On transport failure or a non-mapping result: log, leave state
       untouched, notify nobody
    6. On success: swap ActiveState, then notify change handlers

Overlapping activations:
    Every activation takes a sequence number. A response arriving after a
    newer activation was issued is discarded (SUPERSEDED), so the most
    recently requested language wins regardless of completion order.
    The stale fetch itself is not cancelled.

    The staleness check and the state swap, handler fan-out included, run
    under one commit lock, so an activation that passed the check cannot be
    overtaken by a newer one from another thread before its swap lands. Issuing
    sequence numbers uses a separate lock and never waits on handlers.

Python 3.13+.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from threading import Lock, RLock
from typing import TYPE_CHECKING, Protocol

from langswap.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    TransportError,
    UnknownLanguageError,
)
from langswap.enums import ActivationStatus
from langswap.localization.registry import FileSource, UrlSource
from langswap.runtime.state import ActiveState

if TYPE_CHECKING:
    from langswap.localization.registry import LanguageDescriptor, LanguageRegistry
    from langswap.localization.types import Document, LanguageKey
    from langswap.runtime.cells import MutableCell
    from langswap.runtime.hub import NotificationHub

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocols
    "Transport",
    "KeyValueStore",
    # Results
    "ActivationResult",
    # Loader
    "LanguageLoader",
    "source_location",
]

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Protocol for fetching language documents.

    Implementations raise TransportError on failure. OSError and ValueError
    (e.g., json.JSONDecodeError) are treated as transport failures too.

    Example:
        >>> class StaticTransport:
        ...     async def fetch(self, url: str) -> Mapping[str, Any]:
        ...         return {"direction": "ltr", "fonts": {}}
    """

    async def fetch(self, url: str) -> Document:
        """Fetch and decode the document at url.

        Raises:
            TransportError: If the document cannot be fetched or decoded
        """
        ...


class KeyValueStore(Protocol):
    """Protocol for the persistent string store (localStorage equivalent)."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        ...


@dataclass(frozen=True, slots=True)
class ActivationResult:
    """Result of a single activate() call.

    Attributes:
        key: Requested language key
        status: Outcome of the activation
        source_location: URL or path the document was fetched from
        sequence: Activation sequence number (monotonic per loader)
        error: Transport failure if status is FAILED, None otherwise
    """

    key: LanguageKey
    status: ActivationStatus
    source_location: str
    sequence: int
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the document was swapped into the active state."""
        return self.status == ActivationStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        """Check if the transport failed."""
        return self.status == ActivationStatus.FAILED

    @property
    def is_superseded(self) -> bool:
        """Check if a newer activation made this response stale."""
        return self.status == ActivationStatus.SUPERSEDED


def source_location(descriptor: LanguageDescriptor, base_location: str | None) -> str:
    """Compute the effective document location for a descriptor.

    Args:
        descriptor: Registered language descriptor
        base_location: Configured base location (required for FileSource)

    Returns:
        The URL verbatim, or base_location + "/" + file_name

    Example:
        >>> source_location(LanguageDescriptor("fa", "فارسی", FileSource("fa.json")),
        ...                 "https://cdn.example.com/lang/")
        'https://cdn.example.com/lang/fa.json'
    """
    match descriptor.source:
        case UrlSource(url=url):
            return url
        case FileSource(file_name=file_name):
            # Registry guarantees base_location for file sources
            base = (base_location or "").rstrip("/")
            return f"{base}/{file_name}"


class LanguageLoader:
    """Fetches language documents and swaps them into the active state.

    The loader is the only writer of the state cell. Readers observe it
    through cells and change handlers.
    """

    __slots__ = (
        "_base_location",
        "_changes",
        "_commit_lock",
        "_latest",
        "_lock",
        "_persistence_key",
        "_registry",
        "_sequence",
        "_state",
        "_store",
        "_transport",
    )

    def __init__(
        self,
        registry: LanguageRegistry,
        transport: Transport,
        state: MutableCell[ActiveState],
        changes: NotificationHub[Document],
        *,
        store: KeyValueStore | None = None,
        persistence_key: str | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            registry: Registry to look descriptors up in
            transport: Document fetch capability
            state: Cell holding the ActiveState; replaced on success
            changes: Hub notified with the new document after each swap
            store: Store receiving the activated key
            persistence_key: Store key; persistence is disabled when None
        """
        self._registry = registry
        self._base_location = registry.base_location
        self._transport = transport
        self._state = state
        self._changes = changes
        self._store = store
        self._persistence_key = persistence_key
        self._sequence = itertools.count(1)
        self._latest = 0
        self._lock = Lock()
        self._commit_lock = RLock()

    def _describe(self, key: LanguageKey) -> LanguageDescriptor:
        descriptor = self._registry.get(key)
        if descriptor is None:
            diagnostic = Diagnostic(
                code=DiagnosticCode.UNKNOWN_LANGUAGE,
                message=f"Language map does not contain key '{key}'",
                hint="Maybe you forgot to register this language?",
            )
            raise UnknownLanguageError(diagnostic, key=key)
        return descriptor

    async def activate(self, key: LanguageKey) -> ActivationResult:
        """Load the document for key and make it the active language.

        Transport failures are logged and reported in the result; they are
        never raised.

        Args:
            key: Registered language key

        Returns:
            ActivationResult describing the outcome

        Raises:
            UnknownLanguageError: If key is not registered
        """
        descriptor = self._describe(key)
        location = source_location(descriptor, self._base_location)

        if self._store is not None and self._persistence_key is not None:
            self._store.set(self._persistence_key, key)

        with self._lock:
            sequence = next(self._sequence)
            self._latest = sequence

        logger.debug("Fetching language '%s' from %s (#%d)", key, location, sequence)
        try:
            document = await self._transport.fetch(location)
            if not isinstance(document, Mapping):
                diagnostic = Diagnostic(
                    code=DiagnosticCode.DOCUMENT_DECODE_FAILED,
                    message=f"Transport returned {type(document).__name__}, expected a mapping",
                    location=location,
                )
                raise TransportError(diagnostic, url=location)
        except (TransportError, OSError, ValueError) as e:
            logger.error("Failed to load language '%s' from %s: %s", key, location, e)
            return ActivationResult(
                key=key,
                status=ActivationStatus.FAILED,
                source_location=location,
                sequence=sequence,
                error=e,
            )

        with self._commit_lock:
            with self._lock:
                latest = self._latest
            if sequence != latest:
                logger.debug(
                    "Discarding language '%s' (#%d): superseded by #%d", key, sequence, latest
                )
                return ActivationResult(
                    key=key,
                    status=ActivationStatus.SUPERSEDED,
                    source_location=location,
                    sequence=sequence,
                )

            self._state.set(ActiveState(current_key=key, current_document=document))
            logger.info("Activated language '%s' from %s", key, location)
            self._changes.notify(document)
        return ActivationResult(
            key=key,
            status=ActivationStatus.SUCCESS,
            source_location=location,
            sequence=sequence,
        )
