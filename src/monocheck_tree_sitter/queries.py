from tree_sitter import Node, Query, QueryCursor

from .node_types import NodeMatch
from .parser import TYPESCRIPT, get_language


class ImportQueryHelper:
    """Runs tree-sitter queries and flattens the captures into NodeMatch objects"""

    def __init__(self):
        self._compiled: dict[tuple[str, str], Query] = {}

    def _compile(self, query_str: str, dialect: str) -> Query:
        key = (dialect, query_str)
        if key not in self._compiled:
            self._compiled[key] = Query(get_language(dialect), query_str)
        return self._compiled[key]

    def query(self, query_str: str, node: Node, dialect: str = TYPESCRIPT) -> list[NodeMatch]:
        """Execute a query and return one NodeMatch per match, in document order.

        The query must be compiled for the grammar that produced the tree,
        hence the dialect argument. The match node is the outermost capture.
        """
        cursor = QueryCursor(self._compile(query_str, dialect))
        results = []
        for pattern_index, captures_dict in cursor.matches(node):
            captures = {name: nodes[0] for name, nodes in captures_dict.items() if nodes}
            if not captures:
                continue
            main = min(captures.values(), key=lambda n: (n.start_byte, -n.end_byte))
            results.append(NodeMatch(node=main, captures=captures, pattern_index=pattern_index))
        return sorted(results, key=lambda m: m.node.start_byte)
