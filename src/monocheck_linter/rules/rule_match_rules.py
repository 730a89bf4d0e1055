from ..models import (
    EXCLUDED_SUGGESTION,
    ImportOccurrence,
    Issue,
    IssueCategory,
    Rule,
    RuleAction,
    RuleSource,
    ScanContext,
)
from .base import BaseCheck


class RuleMatchCheck(BaseCheck):
    """Specifiers claimed by an override or community rule."""

    @property
    def category(self) -> IssueCategory:
        return IssueCategory.RULE_MATCH

    @property
    def name(self) -> str:
        return "rule-match"

    def applies(self, occurrence: ImportOccurrence, context: ScanContext) -> bool:
        return occurrence.specifier is not None and context.rules.find(occurrence.specifier) is not None

    def check(self, occurrence: ImportOccurrence, context: ScanContext) -> Issue | None:
        rule = context.rules.find(occurrence.specifier)
        if rule is None:
            return None

        replacement = rule.rewrite(occurrence.specifier)
        return self._create_issue(
            occurrence,
            message=self._message(occurrence, rule),
            suggestion=self._suggestion(occurrence, rule, replacement),
            replacement=replacement,
            rule=rule,
        )

    @staticmethod
    def _message(occurrence: ImportOccurrence, rule: Rule) -> str:
        kind = "Community rule" if rule.source == RuleSource.COMMUNITY else "Special case"
        if occurrence.is_commented:
            kind = f"Commented {kind[0].lower()}{kind[1:]}"
        return f"{kind}: {rule.action.value}"

    @staticmethod
    def _suggestion(occurrence: ImportOccurrence, rule: Rule, replacement: str | None) -> str:
        if rule.action == RuleAction.EXCLUDE:
            return EXCLUDED_SUGGESTION
        if replacement is None:
            return f"No replacement configured for '{rule.match_key}'; verify manually"

        prefix = "Uncomment and " if occurrence.is_commented else ""
        if rule.action == RuleAction.RENAME:
            verb = "rename" if prefix else "Rename"
            return f"{prefix}{verb} to: import ... from '{replacement}'"

        verb = "replace" if prefix else "Replace"
        # call sites are not touched by the fix
        note = "adjust usage accordingly"
        if rule.description:
            note = f"{rule.description}; {note}"
        return f"{prefix}{verb} with: import from '{replacement}' ({note})"
