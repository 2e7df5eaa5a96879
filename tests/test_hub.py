"""Tests for NotificationHub, Subscription and Scope.

Covers insertion order, identity keying, snapshot semantics, disposal
during a notification pass, scope-bound cleanup and handler failures.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest

from langswap.runtime import NotificationHub, Scope


class TestOrdering:
    """Handlers run in insertion order."""

    def test_insertion_order(self) -> None:
        """notify() calls handlers in the order they subscribed."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []
        hub.subscribe(lambda v: calls.append(f"a:{v}"))
        hub.subscribe(lambda v: calls.append(f"b:{v}"))

        hub.notify("x")

        assert calls == ["a:x", "b:x"]

    def test_resubscribe_replaces_and_keeps_position(self) -> None:
        """The same handler twice is one entry at its original position."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []

        def first(v: str) -> None:
            calls.append("first")

        def second(v: str) -> None:
            calls.append("second")

        hub.subscribe(first)
        hub.subscribe(second)
        hub.subscribe(first)

        hub.notify("x")

        assert calls == ["first", "second"]
        assert len(hub) == 2

    def test_stale_subscription_does_not_remove_newer(self) -> None:
        """Disposing a replaced subscription leaves the new one in place."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []

        def handler(v: str) -> None:
            calls.append(v)

        old = hub.subscribe(handler)
        new = hub.subscribe(handler)
        old.dispose()
        hub.notify("x")

        assert not old.active
        assert new.active
        assert calls == ["x"]


class TestSnapshotSemantics:
    """Changes to the handler set during a pass."""

    def test_handler_added_during_pass_not_called(self) -> None:
        """A handler subscribed mid-pass waits for the next notify()."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []

        def late(v: str) -> None:
            calls.append(f"late:{v}")

        def adder(v: str) -> None:
            calls.append(f"adder:{v}")
            hub.subscribe(late)

        hub.subscribe(adder)
        hub.notify("1")
        hub.notify("2")

        assert calls == ["adder:1", "adder:2", "late:2"]

    def test_handler_disposed_during_pass_not_called(self) -> None:
        """A handler disposed by an earlier handler is skipped in that pass."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []
        victim_sub = None

        def killer(v: str) -> None:
            calls.append("killer")
            assert victim_sub is not None
            victim_sub.dispose()

        def victim(v: str) -> None:
            calls.append("victim")

        hub.subscribe(killer)
        victim_sub = hub.subscribe(victim)
        hub.notify("x")
        hub.notify("y")

        assert calls == ["killer", "killer"]

    def test_handler_may_dispose_itself(self) -> None:
        """Self-disposal inside a handler is allowed."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []
        holder: list = []

        def once(v: str) -> None:
            calls.append(v)
            holder[0].dispose()

        holder.append(hub.subscribe(once))
        hub.notify("a")
        hub.notify("b")

        assert calls == ["a"]


class TestDisposal:
    """Manual cleanup."""

    def test_dispose_is_idempotent(self) -> None:
        """dispose() twice is harmless."""
        hub: NotificationHub[str] = NotificationHub()
        sub = hub.subscribe(print)

        sub.dispose()
        sub.dispose()

        assert print not in hub
        assert len(hub) == 0

    def test_unsubscribe_by_handler(self) -> None:
        """unsubscribe() removes by handler identity."""
        hub: NotificationHub[str] = NotificationHub()
        sub = hub.subscribe(print)

        assert hub.unsubscribe(print) is True
        assert hub.unsubscribe(print) is False
        assert not sub.active

    def test_clear(self) -> None:
        """clear() disposes every subscription."""
        hub: NotificationHub[str] = NotificationHub()
        subs = [hub.subscribe(lambda v: None) for _ in range(3)]

        hub.clear()

        assert len(hub) == 0
        assert not any(s.active for s in subs)


class TestCurrentValue:
    """subscribe(current=...) immediate invocation."""

    def test_current_value_invoked_once_before_insertion(self) -> None:
        """The handler sees the current value once, then later notifications."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []

        hub.subscribe(calls.append, current=lambda: "now")
        hub.notify("later")

        assert calls == ["now", "later"]

    def test_no_current_value_no_call(self) -> None:
        """A None current value skips the immediate call."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []

        hub.subscribe(calls.append, current=lambda: None)

        assert calls == []


class TestScope:
    """Scope lifetime and scope-bound subscriptions."""

    def test_scope_end_disposes_subscription(self) -> None:
        """Ending the scope removes the handler."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []
        scope = Scope()
        sub = hub.subscribe(calls.append, scope=scope)

        scope.end()
        hub.notify("x")

        assert calls == []
        assert not sub.active
        assert scope.ended

    def test_context_manager_ends_scope(self) -> None:
        """Leaving a with-block ends the scope."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []

        with Scope() as scope:
            hub.subscribe(calls.append, scope=scope)
            hub.notify("inside")
        hub.notify("outside")

        assert calls == ["inside"]

    def test_manual_dispose_detaches_from_scope(self) -> None:
        """Disposing first means the scope has nothing left to run."""
        hub: NotificationHub[str] = NotificationHub()
        scope = Scope()
        sub = hub.subscribe(print, scope=scope)

        sub.dispose()
        assert scope._callbacks == {}
        scope.end()

        assert not sub.active

    def test_callbacks_run_once_in_order(self) -> None:
        """end() runs callbacks once, in registration order."""
        scope = Scope()
        calls: list[int] = []
        scope.on_end(lambda: calls.append(1))
        scope.on_end(lambda: calls.append(2))

        scope.end()
        scope.end()

        assert calls == [1, 2]

    def test_registration_after_end_runs_immediately(self) -> None:
        """on_end() on an ended scope runs the callback right away."""
        scope = Scope()
        scope.end()
        calls: list[int] = []

        scope.on_end(lambda: calls.append(1))

        assert calls == [1]

    def test_subscribe_with_ended_scope_is_disposed(self) -> None:
        """A subscription bound to an ended scope never receives values."""
        hub: NotificationHub[str] = NotificationHub()
        scope = Scope()
        scope.end()
        calls: list[str] = []

        sub = hub.subscribe(calls.append, scope=scope)
        hub.notify("x")

        assert calls == []
        assert not sub.active

    def test_registration_dispose(self) -> None:
        """The Disposable returned by on_end() unregisters the callback."""
        scope = Scope()
        calls: list[int] = []
        registration = scope.on_end(lambda: calls.append(1))

        registration.dispose()
        scope.end()

        assert calls == []

    def test_failing_callback_does_not_block_others(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A raising cleanup is logged; later callbacks still run."""
        scope = Scope()
        calls: list[int] = []

        def boom() -> None:
            raise RuntimeError("boom")

        scope.on_end(boom)
        scope.on_end(lambda: calls.append(2))

        with caplog.at_level(logging.ERROR, logger="langswap.runtime.hub"):
            scope.end()

        assert calls == [2]
        assert "cleanup callback" in caplog.text


class TestHandlerFailures:
    """A failing handler does not break fan-out."""

    def test_failure_logged_and_fan_out_continues(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Later handlers still receive the value."""
        hub: NotificationHub[str] = NotificationHub()
        calls: list[str] = []

        def broken(v: str) -> None:
            raise ValueError("broken handler")

        hub.subscribe(broken)
        hub.subscribe(calls.append)

        with caplog.at_level(logging.ERROR, logger="langswap.runtime.hub"):
            hub.notify("x")

        assert calls == ["x"]
        assert "broken handler" in caplog.text
