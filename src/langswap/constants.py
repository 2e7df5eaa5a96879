"""Shared constants for LangSwap.

This module provides centralized configuration constants used across the
localization and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Persistence: Default storage key for the remembered language choice
- Style projection: Property names written to the style sink
- Transport limits: Bounds applied by the bundled transports

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Persistence
    "DEFAULT_PERSISTENCE_KEY",
    # Style projection
    "STYLE_PROPERTY_PREFIX",
    "STYLE_DIRECTION_PROPERTY",
    "STYLE_FONT_FAMILY_TEMPLATE",
    "STYLE_FONT_STYLE_TEMPLATE",
    "STYLE_FONT_WEIGHT_TEMPLATE",
    # Document layout
    "DOCUMENT_DIRECTION_FIELD",
    "DOCUMENT_FONTS_FIELD",
    # Transport limits
    "DEFAULT_HTTP_TIMEOUT",
    "MAX_DOCUMENT_SIZE",
]

# ============================================================================
# PERSISTENCE
# ============================================================================

# Store key used when persistence is enabled without an explicit key.
DEFAULT_PERSISTENCE_KEY: str = "ls-ln"

# ============================================================================
# STYLE PROJECTION
# ============================================================================

# Every projected property shares this prefix so hosts can namespace them
# (CSS custom properties, Qt stylesheet variables, etc.).
STYLE_PROPERTY_PREFIX: str = "--ls_"

STYLE_DIRECTION_PROPERTY: str = f"{STYLE_PROPERTY_PREFIX}dir"

# Format strings - use .format(role=...)
STYLE_FONT_FAMILY_TEMPLATE: str = STYLE_PROPERTY_PREFIX + "{role}_font-family"
STYLE_FONT_STYLE_TEMPLATE: str = STYLE_PROPERTY_PREFIX + "{role}_font-style"
STYLE_FONT_WEIGHT_TEMPLATE: str = STYLE_PROPERTY_PREFIX + "{role}_font-weight"

# ============================================================================
# DOCUMENT LAYOUT
# ============================================================================

DOCUMENT_DIRECTION_FIELD: str = "direction"
DOCUMENT_FONTS_FIELD: str = "fonts"

# ============================================================================
# TRANSPORT LIMITS
# ============================================================================

# Seconds. Applied by HttpTransport only; the engine itself never times out
# a fetch.
DEFAULT_HTTP_TIMEOUT: float = 30.0

# Maximum language document size in bytes (10 MB) accepted by FileTransport.
MAX_DOCUMENT_SIZE: int = 10 * 1024 * 1024
