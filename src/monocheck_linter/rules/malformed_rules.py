from ..models import ImportOccurrence, Issue, IssueCategory, ScanContext
from .base import BaseCheck


class MalformedCommentCheck(BaseCheck):
    """Commented text that mentions imports but has no `import ... from '...'` shape."""

    @property
    def category(self) -> IssueCategory:
        return IssueCategory.MALFORMED_COMMENTED_IMPORT

    @property
    def name(self) -> str:
        return "malformed-commented-import"

    def applies(self, occurrence: ImportOccurrence, context: ScanContext) -> bool:
        return occurrence.is_commented and occurrence.specifier is None

    def check(self, occurrence: ImportOccurrence, context: ScanContext) -> Issue | None:
        return self._create_issue(
            occurrence,
            message="Invalid commented import syntax, manual review required",
            suggestion=None,
        )
