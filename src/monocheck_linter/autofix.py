import logging
import re
from typing import Callable, Dict, List

from monocheck_tree_sitter import ImportPatterns, TSParser, dialect_for

from .errors import RewriteCorruptionError
from .models import CommentStyle, ImportOccurrence, Issue

logger = logging.getLogger(__name__)

_LINE_MARKERS = {
    CommentStyle.SINGLE_LINE: re.compile(r"^\s*//+\s*"),
    CommentStyle.HASH: re.compile(r"^\s*#+\s*"),
}
_BLOCK_OPEN = re.compile(r"^\s*/\*+\s*")
_BLOCK_CLOSE = re.compile(r"\s*\*+/\s*$")
_BLOCK_DECORATION = re.compile(r"^\s*\*+\s*")


def _quoted(specifier: str) -> re.Pattern:
    return re.compile(r"""(['"])""" + re.escape(specifier) + r"\1")


class Rewriter:
    """Applies import fixes to source text.

    Every fix edits a single line in place and never changes the number of
    lines, so fixes for one file can be applied one after the other using
    the line numbers recorded at classification time.
    """

    def __init__(self, parser: TSParser | None = None):
        self.parser = parser or TSParser()
        self._fixers: Dict[CommentStyle | None, Callable[[str, ImportOccurrence, str], str]] = {
            None: self._rewrite_active,
            CommentStyle.SINGLE_LINE: self._rewrite_comment_line,
            CommentStyle.HASH: self._rewrite_comment_line,
            CommentStyle.BLOCK: self._rewrite_block_line,
        }

    def apply(self, source: str, occurrence: ImportOccurrence, new_specifier: str) -> str:
        """Return the source with one occurrence rewritten to a new specifier.

        Re-applying a fix that is already in place returns the source
        unchanged. Raises RewriteCorruptionError when the recorded line no
        longer holds the expected import.
        """
        if not new_specifier:
            raise ValueError("No replacement specifier to apply")
        if occurrence.specifier is None:
            raise ValueError("Malformed occurrences cannot be rewritten")

        line_count = source.count("\n") + 1
        if not 1 <= occurrence.line_number <= line_count:
            raise RewriteCorruptionError(
                occurrence.file_path,
                occurrence.line_number,
                f"line out of range (file has {line_count} lines)",
            )

        style = occurrence.comment_style if occurrence.is_commented else None
        return self._fixers[style](source, occurrence, new_specifier)

    def apply_fixes(self, source: str, issues: List[Issue], dry_run: bool = False) -> str:
        """Apply every fixable issue in order; failed fixes are logged and skipped."""
        for issue in issues:
            if not issue.auto_fixable or issue.fixed:
                continue
            try:
                source = self.apply(source, issue.occurrence, issue.replacement)
            except RewriteCorruptionError as e:
                logger.error("Could not fix %s: %s", issue.occurrence.display_path, e)
                continue
            if not dry_run:
                issue.fixed = True
        return source

    def _rewrite_active(self, source: str, occurrence: ImportOccurrence, new_specifier: str) -> str:
        result = self.parser.parse_string(source, dialect_for(occurrence.file_path))
        target = None
        already_applied = False
        for match in ImportPatterns.find_import_statements(result):
            import_node = match.captures.get("import", match.node)
            string_node = match.captures.get("source")
            if string_node is None or ImportPatterns.get_import_line(import_node) != occurrence.line_number:
                continue
            current = ImportPatterns.get_specifier(string_node, source)
            if current == occurrence.specifier:
                target = string_node
                break
            if current == new_specifier:
                already_applied = True

        if target is None:
            if already_applied:
                return source
            raise RewriteCorruptionError(
                occurrence.file_path,
                occurrence.line_number,
                f"no import of '{occurrence.specifier}' on this line",
            )

        start, end = ImportPatterns.specifier_byte_range(target)
        data = source.encode("utf-8")
        return (data[:start] + new_specifier.encode("utf-8") + data[end:]).decode("utf-8")

    def _rewrite_comment_line(self, source: str, occurrence: ImportOccurrence, new_specifier: str) -> str:
        marker = _LINE_MARKERS[occurrence.comment_style]

        def uncomment(body: str) -> str:
            indent = body[: len(body) - len(body.lstrip())]
            return indent + marker.sub("", body, count=1)

        return self._rewrite_line(source, occurrence, new_specifier, uncomment)

    def _rewrite_block_line(self, source: str, occurrence: ImportOccurrence, new_specifier: str) -> str:
        def uncomment(body: str) -> str:
            indent = body[: len(body) - len(body.lstrip())]
            opens = _BLOCK_OPEN.match(body)
            closes = _BLOCK_CLOSE.search(body)
            if opens and closes:
                return indent + _BLOCK_CLOSE.sub("", _BLOCK_OPEN.sub("", body, count=1))
            if opens:
                # the comment continues on later lines; dropping `/*` here would expose them
                return body
            return indent + _BLOCK_DECORATION.sub("", body, count=1)

        return self._rewrite_line(source, occurrence, new_specifier, uncomment)

    def _rewrite_line(
        self,
        source: str,
        occurrence: ImportOccurrence,
        new_specifier: str,
        uncomment: Callable[[str], str],
    ) -> str:
        lines = source.split("\n")
        idx = occurrence.line_number - 1
        line = lines[idx]
        ending = "\r" if line.endswith("\r") else ""
        body = line[: len(line) - len(ending)]

        old_pattern = _quoted(occurrence.specifier)
        if not old_pattern.search(body):
            if _quoted(new_specifier).search(body):
                return source
            raise RewriteCorruptionError(
                occurrence.file_path,
                occurrence.line_number,
                f"'{occurrence.specifier}' not found on this line",
            )

        new_body = old_pattern.sub(lambda m: f"{m.group(1)}{new_specifier}{m.group(1)}", uncomment(body), count=1)
        lines[idx] = new_body + ending
        return "\n".join(lines)
