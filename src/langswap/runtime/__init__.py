"""Runtime layer: active state, change notification and projections.

Exports:
    ActiveState: Immutable snapshot of the active language
    NotificationHub: Ordered change handler set
    Scope: Explicit lifetime owner for cleanup callbacks
    Subscription: Handle returned by subscribe()
    ObservableCell, MutableCell, DerivedCell: Observable values
    StyleProjector, StyleSink, RecordingStyleSink: Style projection
    LanguageInfo, FontSpec: Typed style metadata

Python 3.13+.
"""

from .cells import DerivedCell, MutableCell, ObservableCell
from .hub import Disposable, NotificationHub, Scope, ScopeLike, Subscription
from .state import EMPTY_STATE, ActiveState
from .style import FontSpec, LanguageInfo, RecordingStyleSink, StyleProjector, StyleSink

__all__ = [
    "EMPTY_STATE",
    "ActiveState",
    "DerivedCell",
    "Disposable",
    "FontSpec",
    "LanguageInfo",
    "MutableCell",
    "NotificationHub",
    "ObservableCell",
    "RecordingStyleSink",
    "Scope",
    "ScopeLike",
    "StyleProjector",
    "StyleSink",
    "Subscription",
]
