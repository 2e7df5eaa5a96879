"""Engine configuration for LanguageSwitcher.

Provides a single frozen dataclass that encapsulates everything decided at
build time. The configuration is immutable once the engine is constructed.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from langswap.constants import DEFAULT_PERSISTENCE_KEY

if TYPE_CHECKING:
    from langswap.localization.types import AliasBatch

__all__ = ["LanguageConfig"]


@dataclass(frozen=True, slots=True)
class LanguageConfig:
    """Immutable configuration for LanguageSwitcher.

    All fields have defaults; ``LanguageConfig()`` is a usable configuration
    with URL-only sources, no persistence, no aliases and no style
    projection.

    Attributes:
        base_location: Base URL or directory that FileSource names are
            appended to. Required before registering file-based languages.
        persistence_key: Store key remembering the chosen language. None
            disables persistence.
        aliases: Locale aliases registered at construction, grouped by key.
        project_style: Install the style projector as the first change handler.
        style_section: Document key holding ``direction`` and ``fonts``.
            None reads them from the document's top level.

    Example:
        >>> config = LanguageConfig(
        ...     base_location="https://cdn.example.com/lang",
        ...     persistence_key=DEFAULT_PERSISTENCE_KEY,
        ...     aliases={"en": ["en", "en-US", "en-GB"], "fa": ["fa", "fa-IR"]},
        ...     project_style=True,
        ... )
    """

    base_location: str | None = None
    persistence_key: str | None = None
    aliases: AliasBatch | None = field(default=None, hash=False)
    project_style: bool = False
    style_section: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If base_location, persistence_key or style_section
                is an empty string
        """
        if self.base_location == "":
            msg = "base_location must be non-empty or None"
            raise ValueError(msg)
        if self.persistence_key == "":
            msg = "persistence_key must be non-empty or None"
            raise ValueError(msg)
        if self.style_section == "":
            msg = "style_section must be non-empty or None"
            raise ValueError(msg)

    @classmethod
    def with_persistence(cls, **kwargs: object) -> LanguageConfig:
        """Build a configuration persisting under DEFAULT_PERSISTENCE_KEY.

        An explicit persistence_key keyword overrides the default.
        """
        kwargs.setdefault("persistence_key", DEFAULT_PERSISTENCE_KEY)
        return cls(**kwargs)  # type: ignore[arg-type]
