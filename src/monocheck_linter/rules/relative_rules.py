from ..models import ImportOccurrence, Issue, IssueCategory, ScanContext
from ..resolver import is_relative
from .base import BaseCheck


class RelativeImportCheck(BaseCheck):
    """Relative imports that point into an aliased directory, or nowhere."""

    @property
    def category(self) -> IssueCategory:
        return IssueCategory.SHOULD_USE_ALIAS

    @property
    def name(self) -> str:
        return "relative-import"

    @property
    def description(self) -> str:
        return "Relative specifiers resolving under an alias base directory should use the alias"

    def applies(self, occurrence: ImportOccurrence, context: ScanContext) -> bool:
        return occurrence.specifier is not None and is_relative(occurrence.specifier)

    def check(self, occurrence: ImportOccurrence, context: ScanContext) -> Issue | None:
        specifier = occurrence.specifier
        resolver = context.resolver
        resolved = resolver.resolve_relative(specifier, occurrence.file_path)
        label = "Commented import" if occurrence.is_commented else "Relative import"

        if resolved is None:
            expected = resolver.expected_location(specifier, occurrence.file_path)
            return self._create_issue(
                occurrence,
                message=f"{label} '{specifier}' cannot be resolved",
                suggestion=f"File not found at {expected}",
                category=IssueCategory.UNRESOLVED_RELATIVE,
            )

        entry = context.aliases.best_match(resolved)
        if entry is None:
            return None

        new_specifier = context.aliases.to_alias_specifier(resolved, entry)
        return self._create_issue(
            occurrence,
            message=f"{label} should use alias '{entry.prefix}'",
            suggestion=self._change_to(occurrence, new_specifier) if new_specifier else None,
            replacement=new_specifier,
        )
