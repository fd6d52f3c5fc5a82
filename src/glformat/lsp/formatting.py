"""
Code formatting for GLanguage editor integrations.

This module wraps the GLanguage formatter to produce LSP text edits.
Parsing belongs to the caller: the formatter is handed a factory that
builds a statement source over the document text.
"""

import logging
import re
from collections.abc import Callable

from lsprotocol import types

from glformat.ast_nodes import AbstractSyntaxTree, StatementSource
from glformat.formatter import FormatConfig, Formatter
from glformat.utils.errors import ParseError

logger = logging.getLogger(__name__)

ParserFactory = Callable[[str], StatementSource]

# Line terminators recognised by LSP clients.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _document_end(source: str) -> types.Position:
    """Position just past the last character of the document, in UTF-16 code units."""
    lines = _LINE_BREAK.split(source)
    last = lines[-1]
    return types.Position(line=len(lines) - 1, character=len(last.encode("utf-16-le")) // 2)


def _replace_document(source: str, formatted: str) -> list[types.TextEdit]:
    if source == formatted:
        return []

    return [
        types.TextEdit(
            range=types.Range(
                start=types.Position(line=0, character=0),
                end=_document_end(source),
            ),
            new_text=formatted,
        )
    ]


class LSPFormatter:
    """
    Provides document formatting for a GLanguage language server.

    Produces a single edit replacing the whole document, or no edits when
    the document is already canonical or cannot be parsed.
    """

    def __init__(self, parser_factory: ParserFactory, config: FormatConfig | None = None) -> None:
        """
        Initialize the formatter.

        Args:
            parser_factory: Builds a statement source over document text
            config: Optional formatting configuration
        """
        self.config = config or FormatConfig()
        self._parser_factory = parser_factory
        self._formatter = Formatter(self.config)

    def format_document(self, source: str) -> list[types.TextEdit]:
        """
        Format an entire document.

        Args:
            source: The GLanguage source code to format

        Returns:
            List of text edits to apply
        """
        try:
            formatted = self._formatter.render_from_parser(self._parser_factory(source))
        except ParseError as e:
            # Reported to the user as a diagnostic elsewhere.
            logger.warning("Skipping formatting: %s", e)
            return []

        return _replace_document(source, formatted)

    def format_tree_edits(self, source: str, tree: AbstractSyntaxTree) -> list[types.TextEdit]:
        """Edits turning ``source`` into the canonical rendering of an already parsed tree."""
        return _replace_document(source, self._formatter.render(tree))


def format_document(
    source: str,
    parser_factory: ParserFactory,
    config: FormatConfig | None = None,
) -> list[types.TextEdit]:
    """
    Convenience function to format a document.

    Args:
        source: The GLanguage source code
        parser_factory: Builds a statement source over the source text
        config: Optional formatting configuration

    Returns:
        List of text edits
    """
    formatter = LSPFormatter(parser_factory, config)
    return formatter.format_document(source)
