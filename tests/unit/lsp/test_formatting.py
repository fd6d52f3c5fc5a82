"""Tests for the LSP formatting provider."""

from lsprotocol import types

from glformat.ast_nodes import (
    AbstractSyntaxTree,
    Block,
    ExpressionReturnStatement,
    FunctionStatement,
    Identifier,
    IntegerLiteral,
    LetStatement,
)
from glformat.formatter import FormatConfig
from glformat.lsp.formatting import LSPFormatter, format_document

STATEMENTS = [
    LetStatement("x", IntegerLiteral(5)),
    FunctionStatement("id", ("v",), Block((ExpressionReturnStatement(Identifier("v")),))),
]
CANONICAL = "let x = 5;\nfn id(v) {\n\tv\n}\n"


class TestLSPFormatter:
    """Test suite for LSPFormatter."""

    def test_unformatted_document_gets_one_edit(self, parser_factory) -> None:
        source = "let x=5\nfn id(v){v}"
        formatter = LSPFormatter(lambda text: parser_factory(STATEMENTS))

        edits = formatter.format_document(source)

        assert len(edits) == 1
        assert edits[0].new_text == CANONICAL
        assert edits[0].range == types.Range(
            start=types.Position(line=0, character=0),
            end=types.Position(line=1, character=11),
        )

    def test_canonical_document_has_no_edits(self, parser_factory) -> None:
        formatter = LSPFormatter(lambda text: parser_factory(STATEMENTS))
        assert formatter.format_document(CANONICAL) == []

    def test_parse_failure_yields_no_edits(self, parser_factory, caplog) -> None:
        formatter = LSPFormatter(lambda text: parser_factory(STATEMENTS, fail_on=2))

        assert formatter.format_document("let x = ") == []
        assert "Skipping formatting" in caplog.text

    def test_factory_receives_document_text(self, parser_factory) -> None:
        seen: list[str] = []

        def factory(text: str):
            seen.append(text)
            return parser_factory([])

        LSPFormatter(factory).format_document("anything")
        assert seen == ["anything"]

    def test_edit_range_covers_trailing_newline(self, parser_factory) -> None:
        formatter = LSPFormatter(lambda text: parser_factory(STATEMENTS))
        edits = formatter.format_document("let x=5;\n")

        assert edits[0].range.end == types.Position(line=1, character=0)

    def test_format_tree_edits(self, parser_factory) -> None:
        formatter = LSPFormatter(lambda text: parser_factory([]), FormatConfig(hard_tabs=False))
        tree = AbstractSyntaxTree(tuple(STATEMENTS))

        edits = formatter.format_tree_edits("", tree)

        assert edits[0].new_text == "let x = 5;\nfn id(v) {\n    v\n}\n"
        assert edits[0].range.end == types.Position(line=0, character=0)

    def test_module_function(self, parser_factory) -> None:
        edits = format_document("let x = 5", lambda text: parser_factory(STATEMENTS[:1]))
        assert [e.new_text for e in edits] == ["let x = 5;\n"]

    def test_edit_range_counts_utf16_code_units(self, parser_factory) -> None:
        """Characters outside the BMP take two UTF-16 code units."""
        formatter = LSPFormatter(lambda text: parser_factory(STATEMENTS))
        edits = formatter.format_document('let s="\U0001F600"')

        assert edits[0].range.end == types.Position(line=0, character=10)

    def test_edit_range_with_carriage_return_line_breaks(self, parser_factory) -> None:
        formatter = LSPFormatter(lambda text: parser_factory(STATEMENTS))
        edits = formatter.format_document("let a=1\rlet b=2")

        assert edits[0].range.end == types.Position(line=1, character=7)

    def test_edit_range_with_crlf_line_breaks(self, parser_factory) -> None:
        formatter = LSPFormatter(lambda text: parser_factory(STATEMENTS))
        edits = formatter.format_document("let a=1\r\nlet b=2\r\n")

        assert edits[0].range.end == types.Position(line=2, character=0)
