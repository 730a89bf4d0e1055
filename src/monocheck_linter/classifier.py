import logging

from .models import ImportOccurrence, Issue, ScanContext
from .registry import CheckRegistry

logger = logging.getLogger(__name__)


class Classifier:
    """Decides, for one occurrence at a time, whether an import is canonical.

    Steps are the registered checks in order: malformed commented import,
    rule match, relative path, alias-style root. The first check that
    applies is terminal; specifiers no check claims (bare packages such as
    `react`) are canonical.
    """

    def __init__(self, registry: CheckRegistry | None = None):
        self.registry = registry or CheckRegistry()

    def classify(self, occurrence: ImportOccurrence, context: ScanContext) -> Issue | None:
        for check in self.registry.get_all_checks():
            if check.applies(occurrence, context):
                issue = check.check(occurrence, context)
                logger.debug(
                    "%s:%d %r -> %s",
                    occurrence.file_path,
                    occurrence.line_number,
                    occurrence.display_path,
                    issue.category.value if issue else "canonical",
                )
                return issue
        return None

    def classify_all(self, occurrences: list[ImportOccurrence], context: ScanContext) -> list[Issue]:
        """Zero or one issue per occurrence, in occurrence order."""
        issues = []
        for occurrence in occurrences:
            issue = self.classify(occurrence, context)
            if issue is not None:
                issues.append(issue)
        return issues
