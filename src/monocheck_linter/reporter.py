from collections import Counter
from pathlib import Path

from .models import DirectoryReport, Issue, IssueCategory


class Reporter:
    """Aggregates the issues of one directory group into a summary record"""

    @staticmethod
    def summarize(
        directory: Path,
        total_files: int,
        issues: list[Issue],
        failed_files: list[Path] | None = None,
    ) -> DirectoryReport:
        return DirectoryReport(
            directory=directory,
            total_files=total_files,
            total_issues=len(issues),
            standard_issues=sum(1 for i in issues if not i.occurrence.is_commented),
            commented_issues=sum(1 for i in issues if i.occurrence.is_commented),
            fixed_issues=sum(1 for i in issues if i.fixed),
            skipped_issues=sum(1 for i in issues if i.skipped_by_user),
            issues=list(issues),
            failed_files=list(failed_files or []),
        )

    @staticmethod
    def counts_by_category(issues: list[Issue]) -> dict[IssueCategory, int]:
        counts = Counter(i.category for i in issues)
        return {category: counts[category] for category in IssueCategory if counts[category]}

    @staticmethod
    def actionable(issues: list[Issue]) -> list[Issue]:
        """Issues still needing attention: not fixed and not excluded by a rule."""
        return [i for i in issues if not i.fixed and not i.excluded]
