"""
GLanguage Formatter Utilities Package.

Common utilities for error handling and source locations.
"""

from glformat.utils.errors import (
    ConfigError,
    GLanguageError,
    ParseError,
    SourceLocation,
)

__all__ = [
    "GLanguageError",
    "ParseError",
    "ConfigError",
    "SourceLocation",
]
