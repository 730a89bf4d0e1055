from abc import ABC, abstractmethod

from ..models import ImportOccurrence, Issue, IssueCategory, Rule, ScanContext


class BaseCheck(ABC):
    """Abstract base class for all classification checks.

    The classifier asks each registered check in turn whether it `applies`
    to an occurrence; the first one that does decides the outcome.
    """

    @property
    @abstractmethod
    def category(self) -> IssueCategory:
        """Default category of the issues this check emits."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable check name (e.g., 'relative-import')."""
        pass

    @property
    def description(self) -> str:
        """Detailed description of what this check looks for."""
        return ""

    @abstractmethod
    def applies(self, occurrence: ImportOccurrence, context: ScanContext) -> bool:
        """Whether this check owns the occurrence."""
        pass

    @abstractmethod
    def check(self, occurrence: ImportOccurrence, context: ScanContext) -> Issue | None:
        """Classify an occurrence; None means the import is canonical."""
        pass

    # Helper method for consistent issue creation
    def _create_issue(
        self,
        occurrence: ImportOccurrence,
        message: str,
        suggestion: str | None = None,
        replacement: str | None = None,
        category: IssueCategory | None = None,
        rule: Rule | None = None,
    ) -> Issue:
        """Helper to create an issue with check defaults."""
        return Issue(
            occurrence=occurrence,
            category=category or self.category,
            message=message,
            suggestion=suggestion,
            replacement=replacement,
            rule=rule,
        )

    @staticmethod
    def _change_to(occurrence: ImportOccurrence, new_specifier: str) -> str:
        verb = "Uncomment and change" if occurrence.is_commented else "Change"
        return f"{verb} to: import ... from '{new_specifier}'"
