"""Active language state.

ActiveState is immutable; the loader replaces the whole object on every
successful activation, so current_key and current_document always change
together.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from langswap.localization.types import Document, LanguageKey

__all__ = ["EMPTY_STATE", "ActiveState"]


@dataclass(frozen=True, slots=True)
class ActiveState:
    """Snapshot of the active language.

    Attributes:
        current_key: Key of the active language (None before the first load)
        current_document: Document of the active language (None before the first load)
    """

    current_key: LanguageKey | None = None
    current_document: Document | None = None

    def __post_init__(self) -> None:
        """Validate that key and document are set together.

        Raises:
            ValueError: If exactly one of current_key and current_document is None
        """
        if (self.current_key is None) != (self.current_document is None):
            msg = "current_key and current_document must be set together"
            raise ValueError(msg)

    @property
    def loaded(self) -> bool:
        """True once a document has been loaded."""
        return self.current_document is not None


EMPTY_STATE = ActiveState()
