"""
Error types and source location tracking for the GLanguage formatter.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where a parse failure was detected: 1-indexed line and column, plus the file if known."""

    line: int
    column: int
    filename: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.filename}:" if self.filename else ""
        return f"{prefix}{self.line}:{self.column}"


class GLanguageError(Exception):
    """Base exception for all GLanguage formatter errors."""

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
    ) -> None:
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"[{self.location}] {self.message}"
        return self.message


class ParseError(GLanguageError):
    """Raised by a statement source when it encounters malformed input."""

    pass


class ConfigError(GLanguageError):
    """Raised when a formatter configuration is invalid."""

    pass
