from .ast_walker import ASTWalker
from .import_patterns import ImportPatterns
from .node_types import NodeMatch, ParseResult
from .parser import TSX, TYPESCRIPT, TSParser, dialect_for
from .queries import ImportQueryHelper

__all__ = [
    "ASTWalker",
    "ImportPatterns",
    "ImportQueryHelper",
    "NodeMatch",
    "ParseResult",
    "TSParser",
    "TSX",
    "TYPESCRIPT",
    "dialect_for",
]
