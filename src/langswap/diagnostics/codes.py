"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic attached to LangSwap
exceptions.

Python 3.13+.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (setup-time, fatal)
        2000-2999: Registry errors (unknown keys, programmer mistakes)
        3000-3999: Transport errors (recovered by the loader)
        4000-4999: Document errors (malformed style metadata)
    """

    # Configuration errors (1000-1999)
    BASE_LOCATION_MISSING = 1001
    INVALID_CONFIGURATION = 1002

    # Registry errors (2000-2999)
    UNKNOWN_LANGUAGE = 2001

    # Transport errors (3000-3999)
    FETCH_FAILED = 3001
    HTTP_STATUS = 3002
    DOCUMENT_NOT_FOUND = 3003
    DOCUMENT_DECODE_FAILED = 3004
    DOCUMENT_TOO_LARGE = 3005
    UNSAFE_LOCATION = 3006

    # Document errors (4000-4999)
    INVALID_DIRECTION = 4001
    INVALID_FONT = 4002
    MISSING_SECTION = 4003


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        location: Document URL or path the error relates to (if any)
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    location: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic as a compact multi-line report.

        Example output:
            error[BASE_LOCATION_MISSING]: Language 'de' uses file 'de.json' ...
              --> locales/de.json
              = help: Set base_location in LanguageConfig before registering

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {self.message}"]
        if self.location:
            lines.append(f"  --> {self.location}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
