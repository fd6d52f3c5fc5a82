"""
Pytest configuration and shared fixtures for glformat tests.
"""

from typing import Optional

import pytest

from glformat.ast_nodes import Statement
from glformat.formatter import FormatConfig, Formatter
from glformat.utils.errors import ParseError, SourceLocation


class ListParser:
    """Statement source backed by a list; optionally fails on a given pull."""

    def __init__(self, statements: list[Statement], fail_on: Optional[int] = None) -> None:
        self._statements = list(statements)
        self._fail_on = fail_on
        self.pulls = 0

    def next_statement(self) -> Optional[Statement]:
        self.pulls += 1
        if self._fail_on is not None and self.pulls == self._fail_on:
            raise ParseError("unexpected token", SourceLocation(self.pulls, 1, filename="test.gl"))
        if self._statements:
            return self._statements.pop(0)
        return None


@pytest.fixture
def formatter():
    """Create a formatter with default configuration (hard tabs)."""
    return Formatter()


@pytest.fixture
def space_formatter():
    """Create a formatter that indents with two spaces."""
    return Formatter(FormatConfig(hard_tabs=False, tab_spaces=2))


@pytest.fixture
def parser_factory():
    """Factory fixture for creating list-backed statement sources."""

    def _create_parser(statements: list[Statement], fail_on: Optional[int] = None) -> ListParser:
        return ListParser(statements, fail_on)

    return _create_parser
