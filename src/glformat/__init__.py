"""
glformat - A canonical source formatter for GLanguage.

Renders an already-parsed GLanguage syntax tree, or the statements drained
from an incremental parser, as consistently indented source text.
"""

from glformat.ast_nodes import AbstractSyntaxTree, Block, StatementSource
from glformat.formatter import (
    FormatConfig,
    Formatter,
    check_format,
    format_statements,
    format_tree,
    get_diff,
)
from glformat.utils.errors import ConfigError, GLanguageError, ParseError

__version__ = "0.1.0"
__all__ = [
    "AbstractSyntaxTree",
    "Block",
    "StatementSource",
    "FormatConfig",
    "Formatter",
    "format_tree",
    "format_statements",
    "check_format",
    "get_diff",
    "GLanguageError",
    "ParseError",
    "ConfigError",
]
