from pathlib import Path

from monocheck_tree_sitter import ImportPatterns, ParseResult, TSParser, dialect_for

from .comments import CommentScanner, parse_commented_specifier
from .models import ImportOccurrence


class ImportExtractor:
    """Extracts active and commented import occurrences from a source file"""

    def __init__(self, parser: TSParser | None = None):
        self.parser = parser or TSParser()
        self.comment_scanner = CommentScanner(self.parser)

    def parse(self, source: str, file_path: Path) -> ParseResult:
        return self.parser.parse_string(source, dialect_for(file_path))

    def extract(
        self, source: str, file_path: Path, parse_result: ParseResult | None = None
    ) -> list[ImportOccurrence]:
        """Active imports in document order, then commented ones."""
        result = parse_result or self.parse(source, file_path)
        occurrences = self.extract_active(result, file_path)
        occurrences.extend(self.extract_commented(source, file_path, result))
        return occurrences

    def extract_active(self, result: ParseResult, file_path: Path) -> list[ImportOccurrence]:
        occurrences = []
        for match in ImportPatterns.find_import_statements(result):
            source_node = match.captures.get("source")
            import_node = match.captures.get("import", match.node)
            if source_node is None:
                continue
            occurrences.append(
                ImportOccurrence(
                    file_path=file_path,
                    line_number=ImportPatterns.get_import_line(import_node),
                    specifier=ImportPatterns.get_specifier(source_node, result.source),
                )
            )
        return occurrences

    def extract_commented(
        self, source: str, file_path: Path, result: ParseResult | None = None
    ) -> list[ImportOccurrence]:
        return [
            ImportOccurrence(
                file_path=file_path,
                line_number=found.line_number,
                specifier=parse_commented_specifier(found.text),
                is_commented=True,
                comment_style=found.comment_style,
                text=found.text,
            )
            for found in self.comment_scanner.scan(source, result)
        ]
