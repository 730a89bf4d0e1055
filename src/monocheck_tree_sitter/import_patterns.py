"""Import-specific AST pattern recognition."""

from tree_sitter import Node

from .ast_walker import ASTWalker
from .node_types import NodeMatch, ParseResult
from .queries import ImportQueryHelper

IMPORT_QUERY = """
    (import_statement
      source: (string) @source) @import
"""

COMMENT_QUERY = "(comment) @comment"

_query_helper = ImportQueryHelper()


class ImportPatterns:
    """Recognize import statements and comment trivia in the AST."""

    @staticmethod
    def find_import_statements(result: ParseResult) -> list[NodeMatch]:
        """All `import ... from '...'` statements that carry a source string.

        Each match has an ``import`` capture (the statement) and a ``source``
        capture (the quoted string). `import x = require('y')` has no source
        field and is not reported.
        """
        return _query_helper.query(IMPORT_QUERY, result.tree.root_node, result.dialect)

    @staticmethod
    def find_block_comments(result: ParseResult) -> list[Node]:
        """All `/* ... */` comment nodes in document order."""
        matches = _query_helper.query(COMMENT_QUERY, result.tree.root_node, result.dialect)
        return [m.node for m in matches if ImportPatterns.is_block_comment(m.node, result.source)]

    @staticmethod
    def is_block_comment(node: Node, source: bytes | str) -> bool:
        return node.type == "comment" and ASTWalker.get_text(node, source).startswith("/*")

    @staticmethod
    def get_specifier(string_node: Node, source: bytes | str) -> str:
        """Module specifier without its quotes."""
        text = ASTWalker.get_text(string_node, source)
        return text[1:-1] if len(text) >= 2 else ""

    @staticmethod
    def specifier_byte_range(string_node: Node) -> tuple[int, int]:
        """Byte range of the specifier between the quotes of a string node."""
        return string_node.start_byte + 1, string_node.end_byte - 1

    @staticmethod
    def get_import_line(import_node: Node) -> int:
        return ASTWalker.start_line(import_node)
