"""Tree-sitter front end for TypeScript and JavaScript sources."""

from pathlib import Path

import tree_sitter_typescript as tsts
from tree_sitter import Language, Parser

from .ast_walker import ASTWalker
from .node_types import ParseResult

TYPESCRIPT = "typescript"
TSX = "tsx"

# JavaScript is parsed with the tsx grammar, which accepts JSX and plain JS.
DIALECT_BY_SUFFIX = {
    ".ts": TYPESCRIPT,
    ".mts": TYPESCRIPT,
    ".cts": TYPESCRIPT,
    ".tsx": TSX,
    ".js": TSX,
    ".jsx": TSX,
    ".mjs": TSX,
    ".cjs": TSX,
}

_LANGUAGES: dict[str, Language] = {}


def get_language(dialect: str = TYPESCRIPT) -> Language:
    """Return the (cached) tree-sitter Language for a dialect"""
    if dialect not in _LANGUAGES:
        if dialect == TYPESCRIPT:
            _LANGUAGES[dialect] = Language(tsts.language_typescript())
        elif dialect == TSX:
            _LANGUAGES[dialect] = Language(tsts.language_tsx())
        else:
            raise ValueError(f"Unknown dialect: {dialect}")
    return _LANGUAGES[dialect]


def dialect_for(path: Path | str) -> str:
    return DIALECT_BY_SUFFIX.get(Path(path).suffix.lower(), TYPESCRIPT)


class TSParser:
    """Parses TypeScript/JavaScript source into tree-sitter trees"""

    def __init__(self):
        self._parsers: dict[str, Parser] = {}

    def _parser_for(self, dialect: str) -> Parser:
        if dialect not in self._parsers:
            self._parsers[dialect] = Parser(get_language(dialect))
        return self._parsers[dialect]

    def parse_string(self, source: str, dialect: str = TYPESCRIPT) -> ParseResult:
        tree = self._parser_for(dialect).parse(source.encode("utf-8"))
        errors = [
            f"Syntax error at line {ASTWalker.start_line(node)}"
            for node in ASTWalker.find_errors(tree.root_node)
        ]
        return ParseResult(tree=tree, source=source, dialect=dialect, errors=errors)

    def parse_file(self, file_path: Path) -> ParseResult:
        source = Path(file_path).read_text(encoding="utf-8")
        return self.parse_string(source, dialect_for(file_path))
