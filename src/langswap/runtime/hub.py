"""Change notification hub with scope-bound and manual cleanup.

Components:
    Disposable       - Protocol for anything with an idempotent dispose()
    Scope            - Owner context that runs cleanup callbacks exactly once on end()
    Subscription     - Handle returned by NotificationHub.subscribe()
    NotificationHub  - Insertion-ordered handler set with snapshot fan-out

Ordering:
    Handlers are invoked in insertion order. Re-subscribing a handler that is
    already registered replaces its entry but keeps its original position.

Snapshot semantics:
    notify() copies the handler list before invoking anything. Handlers added
    during a pass are not called in that pass. Handlers disposed during a pass
    are skipped if their turn has not come yet.

Thread Safety:
    The handler table is guarded by an RLock. Handlers are always invoked
    outside the lock, so they may subscribe or dispose freely.

Python 3.13+.
"""

from __future__ import annotations

import itertools
import logging
from threading import RLock
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "Disposable",
    "NotificationHub",
    "Scope",
    "ScopeLike",
    "Subscription",
]

logger = logging.getLogger(__name__)


class Disposable(Protocol):
    """Protocol for releasable registrations.

    dispose() must be idempotent: calling it more than once has no further
    effect.
    """

    def dispose(self) -> None:
        """Release the registration."""


class ScopeLike(Protocol):
    """Protocol for owning contexts that announce their end.

    Any object offering on_end() can bound a subscription's lifetime:
    a UI widget wrapper, a request context, a test fixture.
    """

    def on_end(self, callback: Callable[[], None]) -> Disposable:
        """Register callback to run exactly once when the scope ends.

        Returns:
            Disposable that unregisters the callback
        """


class _ScopeRegistration:
    """Disposable that removes one callback from a Scope."""

    __slots__ = ("_scope", "_token")

    def __init__(self, scope: Scope, token: int) -> None:
        self._scope = scope
        self._token = token

    def dispose(self) -> None:
        self._scope._discard(self._token)


class _Disposed:
    """Disposable with nothing left to release."""

    __slots__ = ()

    def dispose(self) -> None:
        pass


class Scope:
    """Explicit lifetime owner for cleanup callbacks.

    Callbacks run exactly once, in registration order, when end() is called.
    A callback registered after the scope ended runs immediately.

    Example:
        >>> with Scope() as scope:
        ...     switcher.subscribe(render, scope=scope)
        ...     await switcher.activate("fa")
        # render is unsubscribed here
    """

    __slots__ = ("_callbacks", "_ended", "_lock", "_tokens")

    def __init__(self) -> None:
        """Initialize an open scope."""
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._tokens = itertools.count()
        self._ended = False
        self._lock = RLock()

    @property
    def ended(self) -> bool:
        """True once end() has been called."""
        return self._ended

    def on_end(self, callback: Callable[[], None]) -> Disposable:
        """Register a callback to run when the scope ends.

        Args:
            callback: Zero-argument cleanup callable

        Returns:
            Disposable that unregisters the callback before the scope ends
        """
        with self._lock:
            if not self._ended:
                token = next(self._tokens)
                self._callbacks[token] = callback
                return _ScopeRegistration(self, token)
        callback()
        return _Disposed()

    def _discard(self, token: int) -> None:
        with self._lock:
            self._callbacks.pop(token, None)

    def end(self) -> None:
        """End the scope, running every pending callback once.

        A failing callback is logged and does not prevent the others from
        running. Calling end() again has no effect.
        """
        with self._lock:
            if self._ended:
                return
            self._ended = True
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()

        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Scope cleanup callback %r failed", callback)

    def __enter__(self) -> Scope:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.end()


class Subscription[T]:
    """Handle for one registered change handler.

    Disposing removes the handler from the hub and detaches it from its
    scope. Disposal is idempotent and never removes a newer registration of
    the same handler.
    """

    __slots__ = ("_active", "_handler", "_hub", "_scope_registration")

    def __init__(self, hub: NotificationHub[T], handler: Callable[[T], None]) -> None:
        self._hub = hub
        self._handler = handler
        self._active = True
        self._scope_registration: Disposable | None = None

    @property
    def handler(self) -> Callable[[T], None]:
        """The subscribed handler."""
        return self._handler

    @property
    def active(self) -> bool:
        """False once disposed, ended by scope, or replaced by re-subscription."""
        return self._active

    def _deactivate(self) -> None:
        self._active = False
        registration, self._scope_registration = self._scope_registration, None
        if registration is not None:
            registration.dispose()

    def dispose(self) -> None:
        """Unsubscribe the handler. Safe to call repeatedly."""
        if not self._active:
            return
        self._hub._remove(self)

    def __repr__(self) -> str:
        state = "active" if self._active else "disposed"
        return f"Subscription({self._handler!r}, {state})"


class NotificationHub[T]:
    """Insertion-ordered set of change handlers.

    Handlers are keyed by identity (hash/equality of the callable). Each
    notify() passes the new value to every handler registered when the pass
    started and still active when its turn comes.

    A handler that raises is logged with its traceback; the remaining
    handlers are still invoked.

    Example:
        >>> hub: NotificationHub[dict] = NotificationHub()
        >>> sub = hub.subscribe(print)
        >>> hub.notify({"direction": "ltr"})
        {'direction': 'ltr'}
        >>> sub.dispose()
    """

    __slots__ = ("_lock", "_subscriptions")

    def __init__(self) -> None:
        """Initialize an empty hub."""
        self._subscriptions: dict[Callable[[T], None], Subscription[T]] = {}
        self._lock = RLock()

    def subscribe(
        self,
        handler: Callable[[T], None],
        *,
        scope: ScopeLike | None = None,
        current: Callable[[], T | None] | None = None,
    ) -> Subscription[T]:
        """Register a handler.

        Args:
            handler: Callable receiving each notified value
            scope: Owner whose end automatically disposes the subscription
            current: If given and it returns a value, the handler is invoked
                once with that value before being added to the set

        Returns:
            Subscription handle
        """
        if current is not None:
            value = current()
            if value is not None:
                handler(value)

        subscription = Subscription(self, handler)
        with self._lock:
            replaced = self._subscriptions.get(handler)
            if replaced is not None:
                # dict assignment to an existing key keeps its position
                replaced._deactivate()
            self._subscriptions[handler] = subscription

        if scope is not None:
            subscription._scope_registration = scope.on_end(subscription.dispose)

        logger.debug("Subscribed handler %r", handler)
        return subscription

    def _remove(self, subscription: Subscription[T]) -> None:
        with self._lock:
            if self._subscriptions.get(subscription.handler) is subscription:
                del self._subscriptions[subscription.handler]
        subscription._deactivate()
        logger.debug("Unsubscribed handler %r", subscription.handler)

    def notify(self, value: T) -> None:
        """Invoke every registered handler with value, in insertion order.

        Args:
            value: New value passed to each handler
        """
        with self._lock:
            snapshot = tuple(self._subscriptions.values())

        for subscription in snapshot:
            if not subscription.active:
                continue
            try:
                subscription.handler(value)
            except Exception:
                logger.exception("Change handler %r failed", subscription.handler)

    def unsubscribe(self, handler: Callable[[T], None]) -> bool:
        """Dispose the subscription registered for handler.

        Returns:
            True if handler was subscribed
        """
        with self._lock:
            subscription = self._subscriptions.get(handler)
        if subscription is None:
            return False
        subscription.dispose()
        return True

    def clear(self) -> None:
        """Dispose every subscription."""
        with self._lock:
            subscriptions = tuple(self._subscriptions.values())
        for subscription in subscriptions:
            subscription.dispose()

    def __contains__(self, handler: object) -> bool:
        with self._lock:
            return handler in self._subscriptions

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)
