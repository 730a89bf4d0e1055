from tree_sitter import Node
from typing import Callable, List


class ASTWalker:
    """Utilities for traversing and searching the TypeScript AST"""

    @staticmethod
    def walk(node: Node, callback: Callable[[Node], None]):
        """Perform a depth-first traversal of the AST"""
        callback(node)
        for child in node.children:
            ASTWalker.walk(child, callback)

    @staticmethod
    def get_text(node: Node, source: bytes | str) -> str:
        """Return the source text covered by a node.

        Node offsets are UTF-8 byte offsets, so a str source is encoded first.
        """
        data = source.encode("utf-8") if isinstance(source, str) else source
        return data[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def start_line(node: Node) -> int:
        """1-based line number of the first character of a node"""
        return node.start_point[0] + 1

    @staticmethod
    def find_errors(node: Node) -> List[Node]:
        """Collect ERROR and MISSING nodes below a node"""
        results = []

        def check(n):
            if n.type == "ERROR" or n.is_missing:
                results.append(n)

        ASTWalker.walk(node, check)
        return results
