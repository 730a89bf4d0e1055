"""Detection of import statements that have been commented out.

This is a line-level heuristic, not a parser: any comment line mentioning
both `import` and `from` is reported, including unrelated prose.
"""

import re
from dataclasses import dataclass
from typing import Iterator

from monocheck_tree_sitter import ASTWalker, ImportPatterns, ParseResult, TSParser

from .models import CommentStyle

COMMENTED_IMPORT_PATTERN = re.compile(r"""import\s+.*\s+from\s+['"]([^'"]+)['"]""")

_BLOCK_LEADING = re.compile(r"^\s*(?:/\*+|\*+)\s*")
_BLOCK_TRAILING = re.compile(r"\s*\*+/\s*$")


@dataclass(frozen=True)
class CommentedImport:
    text: str
    line_number: int
    comment_style: CommentStyle


def parse_commented_specifier(text: str) -> str | None:
    """Module specifier of a commented import, None when the text is not one."""
    match = COMMENTED_IMPORT_PATTERN.search(text)
    return match.group(1) if match else None


def clean_block_line(line: str) -> str:
    """Strip `/*`, leading `*` decoration and a trailing `*/` from a block comment line."""
    return _BLOCK_TRAILING.sub("", _BLOCK_LEADING.sub("", line)).strip()


class CommentScan:
    """Restartable, lazy view over the commented imports of one source text.

    Line-heuristic results come first, then block-comment results; each
    group is in document order. The tree is only parsed when the block
    group is reached.
    """

    def __init__(self, scanner: "CommentScanner", source: str, parse_result: ParseResult | None):
        self._scanner = scanner
        self._source = source
        self._parse_result = parse_result

    def __iter__(self) -> Iterator[CommentedImport]:
        yield from self._scanner.scan_lines(self._source)
        if self._parse_result is None:
            self._parse_result = self._scanner.parser.parse_string(self._source)
        yield from self._scanner.scan_blocks(self._parse_result)


class CommentScanner:
    """Finds import-like statements hidden in `//`, `#` and `/* */` comments"""

    def __init__(self, parser: TSParser | None = None):
        self.parser = parser or TSParser()

    def scan(self, source: str, parse_result: ParseResult | None = None) -> CommentScan:
        return CommentScan(self, source, parse_result)

    def scan_lines(self, source: str) -> Iterator[CommentedImport]:
        for index, line in enumerate(source.split("\n")):
            trimmed = line.strip()
            if not (trimmed.startswith("//") or trimmed.startswith("#")):
                continue
            if "import" in trimmed and "from" in trimmed:
                style = CommentStyle.SINGLE_LINE if trimmed.startswith("//") else CommentStyle.HASH
                yield CommentedImport(text=trimmed, line_number=index + 1, comment_style=style)

    def scan_blocks(self, parse_result: ParseResult) -> Iterator[CommentedImport]:
        for comment in ImportPatterns.find_block_comments(parse_result):
            comment_text = ASTWalker.get_text(comment, parse_result.source)
            if "import" not in comment_text or "from" not in comment_text:
                continue

            first_line = ASTWalker.start_line(comment)
            for offset, raw_line in enumerate(comment_text.split("\n")):
                cleaned = clean_block_line(raw_line)
                if cleaned.startswith("import"):
                    # only the first import-looking line of a block counts
                    yield CommentedImport(
                        text=cleaned,
                        line_number=first_line + offset,
                        comment_style=CommentStyle.BLOCK,
                    )
                    break
