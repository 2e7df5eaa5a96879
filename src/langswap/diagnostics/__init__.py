"""Diagnostic system for LangSwap errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    DocumentFormatError,
    LangSwapError,
    TransportError,
    UnknownLanguageError,
)

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DocumentFormatError",
    "LangSwapError",
    "TransportError",
    "UnknownLanguageError",
]
