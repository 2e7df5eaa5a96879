"""LangSwap exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error information.

Error policy by type:
    ConfigurationError   - fatal at setup time, raised immediately
    UnknownLanguageError - programmer error, raised to the caller, never retried
    TransportError       - raised by transports, recovered by the loader
    DocumentFormatError  - malformed style metadata in a language document

Python 3.13+.
"""

from .codes import Diagnostic

__all__ = [
    "ConfigurationError",
    "DocumentFormatError",
    "LangSwapError",
    "TransportError",
    "UnknownLanguageError",
]


class LangSwapError(Exception):
    """Base exception for all LangSwap errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LangSwapError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(LangSwapError):
    """Invalid engine setup.

    Raised when a file-based language is registered before a base
    location is configured.
    """


class UnknownLanguageError(LangSwapError):
    """Activation requested for a key absent from the registry.

    Attributes:
        key: The unregistered language key
    """

    def __init__(self, message: str | Diagnostic, *, key: str = "") -> None:
        """Initialize UnknownLanguageError.

        Args:
            message: Error message string OR Diagnostic object
            key: The language key that was not found
        """
        super().__init__(message)
        self.key = key


class TransportError(LangSwapError):
    """Fetching a language document failed.

    Never propagated out of LanguageSwitcher.activate(); the loader logs it
    and reports a FAILED ActivationResult instead.

    Attributes:
        url: Location that was being fetched
    """

    def __init__(self, message: str | Diagnostic, *, url: str = "") -> None:
        """Initialize TransportError.

        Args:
            message: Error message string OR Diagnostic object
            url: Location that was being fetched
        """
        super().__init__(message)
        self.url = url


class DocumentFormatError(LangSwapError):
    """Language document style metadata does not match the expected shape."""
