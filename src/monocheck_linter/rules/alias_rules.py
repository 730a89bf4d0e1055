from ..aliases import alias_roots, is_under
from ..models import ImportOccurrence, Issue, IssueCategory, ScanContext
from ..resolver import is_relative, package_name
from .base import BaseCheck


class AliasImportCheck(BaseCheck):
    """Alias-style specifiers: unknown aliases and aliases resolving outside their base."""

    @property
    def category(self) -> IssueCategory:
        return IssueCategory.ALIAS_MISMATCH

    @property
    def name(self) -> str:
        return "alias-import"

    def applies(self, occurrence: ImportOccurrence, context: ScanContext) -> bool:
        specifier = occurrence.specifier
        if specifier is None or is_relative(specifier):
            return False
        return specifier.startswith("@") or context.aliases.lookup_root(specifier) is not None

    def check(self, occurrence: ImportOccurrence, context: ScanContext) -> Issue | None:
        specifier = occurrence.specifier
        entry = context.aliases.lookup_root(specifier)
        if entry is None:
            return self._check_unknown(occurrence, context)

        resolved = context.resolver.resolve_alias(specifier, entry)
        if resolved is None or is_under(resolved, entry.base_path):
            return None

        better = context.aliases.best_match(resolved)
        new_specifier = context.aliases.to_alias_specifier(resolved, better) if better else None
        if new_specifier:
            suggestion = self._change_to(occurrence, new_specifier)
        else:
            suggestion = f"Verify path for '{specifier}'"

        return self._create_issue(
            occurrence,
            message=f"Alias '{specifier}' resolves incorrectly",
            suggestion=suggestion,
            replacement=new_specifier,
        )

    def _check_unknown(self, occurrence: ImportOccurrence, context: ScanContext) -> Issue | None:
        specifier = occurrence.specifier
        package = package_name(specifier)
        root = specifier.split("/")[0]

        installed = (
            package in context.dependencies
            or root in context.dependencies
            or context.resolver.has_package_artifact(package, occurrence.file_path, context.project_root)
            or context.resolver.has_package_artifact(root, occurrence.file_path, context.project_root)
        )
        # an installed scoped package is a third-party import unless an alias prefix shadows it
        if installed and not context.aliases.shadows(specifier):
            return None

        if installed or context.rules.mentions_root(root):
            suggestion = "Verify alias in tsconfig.json or use relative path"
        else:
            suggestion = f"Module '{package}' not found. Run: npm install {package}"

        roots = " or ".join(f"'{r}'" for r in alias_roots(specifier))
        return self._create_issue(
            occurrence,
            message=f"Unknown alias {roots}",
            suggestion=suggestion,
            category=IssueCategory.UNKNOWN_ALIAS,
        )
