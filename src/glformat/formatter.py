"""
GLanguage Code Formatter.

Provides AST-based code formatting for GLanguage programs, producing
canonical source text with consistent indentation and separators.

The formatter never parses. It renders either a complete tree or the
statements drained from an external parser.

Usage:
    formatter = Formatter()
    text = formatter.render(tree)
    text = formatter.render_from_parser(parser)
"""

from __future__ import annotations

import difflib
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal, localcontext
from fractions import Fraction

from glformat.ast_nodes import (
    AbstractSyntaxTree,
    ASTVisitor,
    Block,
    BooleanLiteral,
    CallExpression,
    # Expressions
    Expression,
    ExpressionReturnStatement,
    ExpressionStatement,
    FloatLiteral,
    FunctionExpression,
    FunctionStatement,
    HashMapLiteral,
    Identifier,
    ImportStatement,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    # Literals
    NullLiteral,
    PrefixExpression,
    # Statements
    Statement,
    StatementSource,
    StringLiteral,
    TupleLiteral,
    VecLiteral,
)
from glformat.utils.errors import ConfigError, ParseError

logger = logging.getLogger(__name__)

# Significant digits used for rationals without a terminating decimal expansion.
FLOAT_PRECISION = 32


# =============================================================================
# Formatter Configuration
# =============================================================================


@dataclass(frozen=True)
class FormatConfig:
    """Configuration for the code formatter."""

    hard_tabs: bool = True
    tab_spaces: int = 4

    def __post_init__(self) -> None:
        if self.tab_spaces < 0:
            raise ConfigError(f"tab_spaces must not be negative, got {self.tab_spaces}")

    @property
    def indent_unit(self) -> str:
        """The text of one indentation level."""
        return "\t" if self.hard_tabs else " " * self.tab_spaces


# =============================================================================
# Float Rendering
# =============================================================================


def format_rational(value: Fraction) -> str:
    """
    Render a rational number as decimal source text.

    Values with a terminating decimal expansion are rendered exactly and
    always carry a fractional part (``2.0``, ``0.125``). Other values are
    rounded to ``FLOAT_PRECISION`` significant digits and a warning is logged.
    """
    value = Fraction(value)
    numerator, denominator = value.numerator, value.denominator

    # A fraction in lowest terms terminates iff its denominator is 2^a * 5^b.
    rest, twos, fives = denominator, 0, 0
    while rest % 2 == 0:
        rest //= 2
        twos += 1
    while rest % 5 == 0:
        rest //= 5
        fives += 1

    if rest == 1:
        scale = max(twos, fives)
        sign = "-" if numerator < 0 else ""
        digits = abs(numerator) * 10**scale // denominator
        whole, fractional = divmod(digits, 10**scale)
        if scale == 0:
            return f"{sign}{whole}.0"
        return f"{sign}{whole}.{fractional:0{scale}d}"

    logger.warning(
        "Float %s/%s has no exact decimal form; rounding to %d significant digits",
        numerator,
        denominator,
        FLOAT_PRECISION,
    )
    with localcontext() as ctx:
        ctx.prec = FLOAT_PRECISION
        approx = Decimal(numerator) / Decimal(denominator)
    text = format(approx, "f")
    if "." not in text:
        text += ".0"
    return text


# =============================================================================
# Code Formatter
# =============================================================================


class Formatter(ASTVisitor):
    """
    AST-based code formatter for GLanguage.

    Traverses the AST and produces canonical source text. The nesting depth
    is instance state that only changes while a block is being rendered and
    is always restored on exit, so an instance must not be shared by
    overlapping render calls.
    """

    def __init__(self, config: FormatConfig | None = None) -> None:
        """Initialize the formatter with optional configuration."""
        self.config = config or FormatConfig()
        self._indent_level = 0

    @property
    def indent_level(self) -> int:
        """Current nesting depth. Zero outside of a render call."""
        return self._indent_level

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def render(self, tree: AbstractSyntaxTree) -> str:
        """Render a complete program. Top-level statements are not wrapped in braces."""
        self._indent_level = 0
        return self.visit(tree)

    def render_from_parser(self, parser: StatementSource) -> str:
        """
        Drain a statement source and render every statement in order.

        Args:
            parser: Source yielding statements until it returns None

        Returns:
            The concatenated, newline-terminated statement renderings

        Raises:
            ParseError: If the parser fails; no partial output is returned
        """
        self._indent_level = 0
        parts: list[str] = []

        while True:
            try:
                stmt = parser.next_statement()
            except ParseError:
                logger.debug("Parser failed after %d statements", len(parts))
                raise
            if stmt is None:
                break
            parts.append(self._format_statement_line(stmt))

        logger.debug("Rendered %d statements from parser", len(parts))
        return "".join(parts)

    def render_block(self, block: Block) -> str:
        """Render a block at depth zero. The result has no trailing newline."""
        self._indent_level = 0
        return self.visit(block)

    def render_statement(self, stmt: Statement) -> str:
        """Render a single top-level statement, newline-terminated."""
        self._indent_level = 0
        return self._format_statement_line(stmt)

    def render_expression(self, expr: Expression) -> str:
        """Render a single expression."""
        self._indent_level = 0
        return self.visit(expr)

    # -------------------------------------------------------------------------
    # Indentation
    # -------------------------------------------------------------------------

    def _indent(self) -> str:
        """Get the current indentation string."""
        return self.config.indent_unit * self._indent_level

    @contextmanager
    def _indented(self) -> Iterator[None]:
        """Increase the nesting depth for the duration of the block."""
        self._indent_level += 1
        try:
            yield
        finally:
            self._indent_level -= 1

    def _format_statement_line(self, stmt: Statement) -> str:
        return self.visit(stmt) + "\n"

    def _join(self, nodes: tuple[Expression, ...]) -> str:
        return ", ".join(self.visit(node) for node in nodes)

    # -------------------------------------------------------------------------
    # Program and Block Formatting
    # -------------------------------------------------------------------------

    def visit_abstract_syntax_tree(self, node: AbstractSyntaxTree) -> str:
        return "".join(self._format_statement_line(stmt) for stmt in node.statements)

    def visit_block(self, node: Block) -> str:
        """Format a block. Empty blocks render as ``{}``."""
        with self._indented():
            lines = [self._indent() + self._format_statement_line(stmt) for stmt in node.statements]

        if not lines:
            return "{}"
        return "{\n" + "".join(lines) + self._indent() + "}"

    # -------------------------------------------------------------------------
    # Statement Formatting
    # -------------------------------------------------------------------------

    def visit_let_statement(self, node: LetStatement) -> str:
        return f"let {node.name} = {self.visit(node.value)};"

    def visit_expression_statement(self, node: ExpressionStatement) -> str:
        return f"{self.visit(node.expression)};"

    def visit_expression_return_statement(self, node: ExpressionReturnStatement) -> str:
        # The block's value: no terminator.
        return self.visit(node.expression)

    def visit_function_statement(self, node: FunctionStatement) -> str:
        params = ", ".join(node.parameters)
        return f"fn {node.name}({params}) {self.visit(node.body)}"

    def visit_import_statement(self, node: ImportStatement) -> str:
        return f'import "{node.module}";'

    # -------------------------------------------------------------------------
    # Expression Formatting
    # -------------------------------------------------------------------------

    def visit_identifier(self, node: Identifier) -> str:
        return node.name

    def visit_prefix_expression(self, node: PrefixExpression) -> str:
        return f"{node.operator}{self.visit(node.operand)}"

    def visit_infix_expression(self, node: InfixExpression) -> str:
        left = self.visit(node.left)
        right = self.visit(node.right)
        return f"{left} {node.operator} {right}"

    def visit_function_expression(self, node: FunctionExpression) -> str:
        params = ", ".join(node.parameters)
        return f"fn ({params}) {self.visit(node.body)}"

    def visit_call_expression(self, node: CallExpression) -> str:
        return f"{self.visit(node.callee)}({self._join(node.arguments)})"

    def visit_index_expression(self, node: IndexExpression) -> str:
        return f"{self.visit(node.target)}[{self.visit(node.index)}]"

    # -------------------------------------------------------------------------
    # Literal Formatting
    # -------------------------------------------------------------------------

    def visit_null_literal(self, node: NullLiteral) -> str:
        return "null"

    def visit_integer_literal(self, node: IntegerLiteral) -> str:
        return str(node.value)

    def visit_float_literal(self, node: FloatLiteral) -> str:
        return format_rational(node.value)

    def visit_boolean_literal(self, node: BooleanLiteral) -> str:
        return "true" if node.value else "false"

    def visit_string_literal(self, node: StringLiteral) -> str:
        # Payload is emitted verbatim; quotes and escapes are not re-escaped.
        return f'"{node.value}"'

    def visit_vec_literal(self, node: VecLiteral) -> str:
        return f"[{self._join(node.elements)}]"

    def visit_tuple_literal(self, node: TupleLiteral) -> str:
        return f"({self._join(node.elements)})"

    def visit_hash_map_literal(self, node: HashMapLiteral) -> str:
        pairs = ", ".join(f"{self.visit(k)}: {self.visit(v)}" for k, v in node.pairs)
        return "{" + pairs + "}"


# =============================================================================
# Public API
# =============================================================================


def format_tree(tree: AbstractSyntaxTree, config: FormatConfig | None = None) -> str:
    """
    Format a GLanguage program.

    Args:
        tree: The parsed program
        config: Optional formatting configuration

    Returns:
        The formatted source code
    """
    return Formatter(config).render(tree)


def format_statements(parser: StatementSource, config: FormatConfig | None = None) -> str:
    """
    Format the statements produced by a parser.

    Args:
        parser: Statement source to drain
        config: Optional formatting configuration

    Returns:
        The formatted source code

    Raises:
        ParseError: If the parser fails
    """
    return Formatter(config).render_from_parser(parser)


def check_format(
    source: str,
    tree: AbstractSyntaxTree,
    config: FormatConfig | None = None,
) -> bool:
    """
    Check if source code is properly formatted.

    Args:
        source: The source text the tree was parsed from
        tree: The parsed program
        config: Optional formatting configuration

    Returns:
        True if the source is already in canonical form, False otherwise
    """
    return source == format_tree(tree, config)


def get_diff(
    source: str,
    tree: AbstractSyntaxTree,
    config: FormatConfig | None = None,
    filename: str = "<input>",
) -> str:
    """
    Get a diff showing formatting changes.

    Args:
        source: The source text the tree was parsed from
        tree: The parsed program
        config: Optional formatting configuration
        filename: Filename for diff header

    Returns:
        A unified diff string, or empty string if no changes needed
    """
    formatted = format_tree(tree, config)

    if source == formatted:
        return ""

    diff = difflib.unified_diff(
        source.splitlines(keepends=True),
        formatted.splitlines(keepends=True),
        fromfile=f"a/{filename}",
        tofile=f"b/{filename}",
    )

    return "".join(diff)
