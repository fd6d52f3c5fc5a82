"""
GLanguage editor integration.

Turns formatter output into Language Server Protocol text edits so a
language server can offer document formatting.
"""

from glformat.lsp.formatting import LSPFormatter, format_document

__all__ = [
    "LSPFormatter",
    "format_document",
]
