from dataclasses import dataclass, field
from typing import List

from tree_sitter import Node, Tree


@dataclass
class ParseResult:
    """Result of a tree-sitter parse operation"""

    tree: Tree
    source: str
    dialect: str = "typescript"
    errors: List[str] = field(default_factory=list)


@dataclass
class NodeMatch:
    """Result of a tree-sitter query match"""

    node: Node
    captures: dict[str, Node]
    pattern_index: int
