"""
Abstract Syntax Tree (AST) node definitions for GLanguage.

This module defines the node types the formatter consumes. The tree is
built by an external parser; the formatter only reads it. Each node is
immutable and may carry source location information.

Node families:
    Literals:    null, integers, floats, booleans, strings, vecs, tuples, hash maps
    Expressions: identifiers, literals, prefix/infix operators, anonymous
                 functions, calls, index access
    Statements:  let, expression, expression-return, fn, import
    Blocks:      brace-delimited statement sequences
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Optional, Protocol, runtime_checkable

from glformat.utils.errors import SourceLocation


class ASTNode(ABC):
    """Base class for all AST nodes."""

    location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass


class ASTVisitor(ABC):
    """
    Visitor pattern base class for AST traversal.

    Every node variant has an abstract ``visit_*`` method, so a visitor
    that does not handle a variant cannot be instantiated.
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        if not isinstance(node, ASTNode):
            raise TypeError(f"cannot visit {type(node).__name__}: not an AST node")
        return node.accept(self)

    # Literals
    @abstractmethod
    def visit_null_literal(self, node: "NullLiteral") -> Any: ...

    @abstractmethod
    def visit_integer_literal(self, node: "IntegerLiteral") -> Any: ...

    @abstractmethod
    def visit_float_literal(self, node: "FloatLiteral") -> Any: ...

    @abstractmethod
    def visit_boolean_literal(self, node: "BooleanLiteral") -> Any: ...

    @abstractmethod
    def visit_string_literal(self, node: "StringLiteral") -> Any: ...

    @abstractmethod
    def visit_vec_literal(self, node: "VecLiteral") -> Any: ...

    @abstractmethod
    def visit_tuple_literal(self, node: "TupleLiteral") -> Any: ...

    @abstractmethod
    def visit_hash_map_literal(self, node: "HashMapLiteral") -> Any: ...

    # Expressions
    @abstractmethod
    def visit_identifier(self, node: "Identifier") -> Any: ...

    @abstractmethod
    def visit_prefix_expression(self, node: "PrefixExpression") -> Any: ...

    @abstractmethod
    def visit_infix_expression(self, node: "InfixExpression") -> Any: ...

    @abstractmethod
    def visit_function_expression(self, node: "FunctionExpression") -> Any: ...

    @abstractmethod
    def visit_call_expression(self, node: "CallExpression") -> Any: ...

    @abstractmethod
    def visit_index_expression(self, node: "IndexExpression") -> Any: ...

    # Statements
    @abstractmethod
    def visit_let_statement(self, node: "LetStatement") -> Any: ...

    @abstractmethod
    def visit_expression_statement(self, node: "ExpressionStatement") -> Any: ...

    @abstractmethod
    def visit_expression_return_statement(self, node: "ExpressionReturnStatement") -> Any: ...

    @abstractmethod
    def visit_function_statement(self, node: "FunctionStatement") -> Any: ...

    @abstractmethod
    def visit_import_statement(self, node: "ImportStatement") -> Any: ...

    # Blocks
    @abstractmethod
    def visit_block(self, node: "Block") -> Any: ...

    @abstractmethod
    def visit_abstract_syntax_tree(self, node: "AbstractSyntaxTree") -> Any: ...


# -----------------------------------------------------------------------------
# Expressions
# -----------------------------------------------------------------------------


class Expression(ASTNode):
    """Base class for all expressions."""

    pass


@dataclass(frozen=True, slots=True)
class Identifier(Expression):
    """
    An identifier expression.

    Example:
        x, myVariable, _private
    """

    name: str
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_identifier(self)


# -----------------------------------------------------------------------------
# Literals
# -----------------------------------------------------------------------------


class Literal(Expression):
    """Base class for literal values. A literal is usable wherever an expression is."""

    pass


@dataclass(frozen=True, slots=True)
class NullLiteral(Literal):
    """The null literal."""

    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_null_literal(self)


@dataclass(frozen=True, slots=True)
class IntegerLiteral(Literal):
    """An integer literal of arbitrary precision."""

    value: int
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_integer_literal(self)


@dataclass(frozen=True, slots=True)
class FloatLiteral(Literal):
    """
    A floating-point literal.

    The value is held as an exact rational so that rendering never goes
    through binary floating point.

    Example:
        FloatLiteral(Fraction(314, 100))  ->  3.14
    """

    value: Fraction
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_float_literal(self)


@dataclass(frozen=True, slots=True)
class BooleanLiteral(Literal):
    """A boolean literal (true/false)."""

    value: bool
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_boolean_literal(self)


@dataclass(frozen=True, slots=True)
class StringLiteral(Literal):
    """A string literal. ``value`` is the raw, unescaped payload."""

    value: str
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_string_literal(self)


@dataclass(frozen=True, slots=True)
class VecLiteral(Literal):
    """
    A vector literal expression.

    Example:
        [1, 2, 3]
    """

    elements: tuple[Expression, ...]
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_vec_literal(self)


@dataclass(frozen=True, slots=True)
class TupleLiteral(Literal):
    """
    A tuple literal expression.

    Examples:
        (1, 2, 3)
        ()
    """

    elements: tuple[Expression, ...]
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_tuple_literal(self)


@dataclass(frozen=True, slots=True)
class HashMapLiteral(Literal):
    """
    A hash map literal expression. Pairs keep their insertion order.

    Example:
        {"a": 1, "b": 2}
    """

    pairs: tuple[tuple[Expression, Expression], ...]
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_hash_map_literal(self)


# -----------------------------------------------------------------------------
# Operator, Function and Access Expressions
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PrefixExpression(Expression):
    """
    A prefix operator applied to one operand.

    Examples:
        -x, !done
    """

    operator: str
    operand: Expression
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_prefix_expression(self)


@dataclass(frozen=True, slots=True)
class InfixExpression(Expression):
    """
    A binary operator between two operands.

    Examples:
        a + b, x == y
    """

    operator: str
    left: Expression
    right: Expression
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_infix_expression(self)


@dataclass(frozen=True, slots=True)
class FunctionExpression(Expression):
    """
    An anonymous function.

    Example:
        fn (a, b) { a + b }
    """

    parameters: tuple[str, ...]
    body: "Block"
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_expression(self)


@dataclass(frozen=True, slots=True)
class CallExpression(Expression):
    """
    A function call.

    Example:
        add(1, 2)
    """

    callee: Expression
    arguments: tuple[Expression, ...]
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_call_expression(self)


@dataclass(frozen=True, slots=True)
class IndexExpression(Expression):
    """
    An index access.

    Example:
        items[0]
    """

    target: Expression
    index: Expression
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_index_expression(self)


# -----------------------------------------------------------------------------
# Statements
# -----------------------------------------------------------------------------


class Statement(ASTNode):
    """Base class for all statements."""

    pass


@dataclass(frozen=True, slots=True)
class LetStatement(Statement):
    """
    A variable binding.

    Example:
        let x = 42;
    """

    name: str
    value: Expression
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_let_statement(self)


@dataclass(frozen=True, slots=True)
class ExpressionStatement(Statement):
    """
    An expression evaluated for its effect.

    Example:
        print("hello");
    """

    expression: Expression
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_expression_statement(self)


@dataclass(frozen=True, slots=True)
class ExpressionReturnStatement(Statement):
    """
    An expression whose value is the enclosing block's result.

    Written without a terminating semicolon:
        { let x = 1; x }
    """

    expression: Expression
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_expression_return_statement(self)


@dataclass(frozen=True, slots=True)
class FunctionStatement(Statement):
    """
    A named function definition.

    Example:
        fn add(a, b) { a + b }
    """

    name: str
    parameters: tuple[str, ...]
    body: "Block"
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_statement(self)


@dataclass(frozen=True, slots=True)
class ImportStatement(Statement):
    """
    A module import.

    Example:
        import "std/io";
    """

    module: str
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_import_statement(self)


# -----------------------------------------------------------------------------
# Blocks and Root Node
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Block(ASTNode):
    """
    A block of statements enclosed in braces.

    Example:
        { stmt1; stmt2; stmt3 }
    """

    statements: tuple[Statement, ...]
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_block(self)


@dataclass(frozen=True, slots=True)
class AbstractSyntaxTree(ASTNode):
    """
    The root node of a GLanguage program.

    Contains all top-level statements.
    """

    statements: tuple[Statement, ...]
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_abstract_syntax_tree(self)


# -----------------------------------------------------------------------------
# Statement Sources
# -----------------------------------------------------------------------------


@runtime_checkable
class StatementSource(Protocol):
    """
    A sequential source of parsed statements, such as an incremental parser.

    ``next_statement`` returns the next statement, or ``None`` at the end of
    input. Malformed input raises :class:`~glformat.utils.errors.ParseError`.
    """

    def next_statement(self) -> Optional[Statement]: ...
