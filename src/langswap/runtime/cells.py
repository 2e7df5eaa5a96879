"""Observable cells exposing engine state to UI layers.

A cell holds a value and pushes every change to its listeners. Derived
cells wrap an extraction function over a source cell and recompute when
the source changes.

Cells are the seam where a host binds LangSwap
state into its own reactive primitive (Qt properties, a web framework's
signals, a TUI redraw loop).

Python 3.13+.
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from threading import RLock
from typing import TYPE_CHECKING

from langswap.runtime.hub import NotificationHub

if TYPE_CHECKING:
    from collections.abc import Callable

    from langswap.runtime.hub import ScopeLike, Subscription

__all__ = [
    "DerivedCell",
    "MutableCell",
    "ObservableCell",
]


class ObservableCell[T](ABC):
    """Read-only observable value.

    Read with get() or by calling the cell; observe with subscribe().
    """

    __slots__ = ("_changes",)

    def __init__(self) -> None:
        self._changes: NotificationHub[T] = NotificationHub()

    @abstractmethod
    def get(self) -> T:
        """Return the current value."""

    def __call__(self) -> T:
        return self.get()

    @property
    def value(self) -> T:
        """Current value (same as get())."""
        return self.get()

    def subscribe(
        self,
        callback: Callable[[T], None],
        *,
        scope: ScopeLike | None = None,
    ) -> Subscription[T]:
        """Observe value changes.

        Args:
            callback: Invoked with the new value after every change
            scope: Owner whose end disposes the subscription

        Returns:
            Subscription handle
        """
        return self._changes.subscribe(callback, scope=scope)


class MutableCell[T](ObservableCell[T]):
    """Cell whose value is replaced as a whole by its owner."""

    __slots__ = ("_lock", "_value")

    def __init__(self, initial: T) -> None:
        """Initialize cell.

        Args:
            initial: Starting value
        """
        super().__init__()
        self._value = initial
        self._lock = RLock()

    def get(self) -> T:
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify listeners.

        Listeners are notified on every set(), including when the new value
        equals the old one.
        """
        with self._lock:
            self._value = value
        self._changes.notify(value)


class _WeakListener[S]:
    """Source listener that does not keep its derived cell alive."""

    __slots__ = ("_cell",)

    def __init__(self, cell: DerivedCell[S, object]) -> None:
        self._cell = weakref.ref(cell)

    def __call__(self, value: S) -> None:
        cell = self._cell()
        if cell is not None:
            cell._on_source_change(value)  # noqa: SLF001


class DerivedCell[S, R](ObservableCell[R]):
    """Cell computed from a source cell by an extraction function.

    The value is computed lazily on first read and cached until the source
    changes. When the source changes and the derived cell has listeners, it
    recomputes immediately and notifies them.

    The source holds only a weak reference to the derived cell. A derived
    cell nobody references any more detaches from its source on collection;
    passing scope detaches it when the scope ends instead.

    Example:
        >>> document = MutableCell({"direction": "ltr"})
        >>> direction = DerivedCell(document, lambda d: d["direction"])
        >>> direction()
        'ltr'
    """

    __slots__ = (
        "__weakref__",
        "_cache",
        "_dirty",
        "_fn",
        "_lock",
        "_source",
        "_source_subscription",
    )

    def __init__(
        self,
        source: ObservableCell[S],
        fn: Callable[[S], R],
        *,
        scope: ScopeLike | None = None,
    ) -> None:
        """Initialize derived cell.

        Args:
            source: Cell the value is derived from
            fn: Extraction function applied to the source value
            scope: Owner whose end detaches the cell from its source
        """
        super().__init__()
        self._fn = fn
        self._lock = RLock()
        self._dirty = True
        self._cache: R | None = None
        self._source = source
        self._source_subscription = source.subscribe(_WeakListener(self), scope=scope)
        weakref.finalize(self, self._source_subscription.dispose)

    @property
    def attached(self) -> bool:
        """True while source changes still reach this cell."""
        return self._source_subscription.active

    def _on_source_change(self, value: S) -> None:
        with self._lock:
            self._dirty = True
            has_listeners = len(self._changes) > 0
            if has_listeners:
                result = self._fn(value)
                self._cache = result
                self._dirty = False
        if has_listeners:
            self._changes.notify(result)

    def get(self) -> R:
        with self._lock:
            if self._dirty:
                self._cache = self._fn(self._source.get())
                self._dirty = False
            return self._cache  # type: ignore[return-value]

    def dispose(self) -> None:
        """Detach from the source; the cached value stays readable."""
        self._source_subscription.dispose()
