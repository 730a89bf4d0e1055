from typing import Protocol

from .models import ImportOccurrence, Issue, ScanContext


class ImportCheck(Protocol):
    """Protocol for a classification check"""

    name: str

    def applies(self, occurrence: ImportOccurrence, context: ScanContext) -> bool: ...

    def check(self, occurrence: ImportOccurrence, context: ScanContext) -> Issue | None: ...


class CheckRegistry:
    """Registry for managing and ordering classification checks"""

    def __init__(self, load_builtins: bool = True):
        self._checks: list[ImportCheck] = []
        if load_builtins:
            self._load_builtin_checks()

    def register(self, check: ImportCheck):
        self._checks.append(check)

    def get_all_checks(self) -> list[ImportCheck]:
        return self._checks

    def _load_builtin_checks(self):
        from .rules.alias_rules import AliasImportCheck
        from .rules.malformed_rules import MalformedCommentCheck
        from .rules.relative_rules import RelativeImportCheck
        from .rules.rule_match_rules import RuleMatchCheck

        # order is significant: the first applicable check decides
        self.register(MalformedCommentCheck())
        self.register(RuleMatchCheck())
        self.register(RelativeImportCheck())
        self.register(AliasImportCheck())
