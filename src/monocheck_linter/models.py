from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .aliases import AliasTable
    from .resolver import PathResolver
    from .rule_table import RuleTable


class IssueCategory(str, Enum):
    RULE_MATCH = "RuleMatch"
    SHOULD_USE_ALIAS = "ShouldUseAlias"
    UNRESOLVED_RELATIVE = "UnresolvedRelative"
    UNKNOWN_ALIAS = "UnknownAlias"
    ALIAS_MISMATCH = "AliasMismatch"
    MALFORMED_COMMENTED_IMPORT = "MalformedCommentedImport"


class RuleAction(str, Enum):
    RENAME = "rename"
    REPLACE_METHOD = "replace-method"
    EXCLUDE = "exclude"


class RuleSource(str, Enum):
    USER_OVERRIDE = "user-override"
    COMMUNITY = "community"


class CommentStyle(str, Enum):
    SINGLE_LINE = "single-line"
    HASH = "hash"
    BLOCK = "block"


EXCLUDED_SUGGESTION = "Excluded from checks"


@dataclass(frozen=True)
class AliasEntry:
    """A path alias prefix and the absolute directory it stands for"""

    prefix: str
    base_path: Path
    description: str = ""


@dataclass(frozen=True)
class Rule:
    """An override or community rule keyed on a module specifier"""

    match_key: str
    action: RuleAction
    replacement: str | None = None
    prefix_only: bool = False
    priority: int = 0
    source: RuleSource = RuleSource.USER_OVERRIDE
    description: str = ""
    category: str = ""

    def matches(self, specifier: str) -> bool:
        if self.prefix_only:
            return specifier.startswith(self.match_key)
        return specifier == self.match_key

    def rewrite(self, specifier: str) -> str | None:
        """Replacement specifier for a matching specifier, None when no fix exists."""
        if self.action == RuleAction.EXCLUDE or not self.replacement:
            return None
        if self.action == RuleAction.RENAME and self.prefix_only:
            return self.replacement + specifier[len(self.match_key) :]
        return self.replacement


@dataclass(frozen=True)
class ImportOccurrence:
    """One physical import-like statement, active or hidden in a comment"""

    file_path: Path
    line_number: int
    specifier: str | None
    is_commented: bool = False
    comment_style: CommentStyle | None = None
    text: str = ""  # captured comment text, empty for active imports

    @property
    def display_path(self) -> str:
        return self.specifier if self.specifier is not None else self.text


@dataclass
class Issue:
    """Internal representation of a non-canonical import"""

    occurrence: ImportOccurrence
    category: IssueCategory
    message: str
    suggestion: str | None = None
    replacement: str | None = None
    rule: Rule | None = None
    fixed: bool = False
    skipped_by_user: bool = False

    @property
    def auto_fixable(self) -> bool:
        return self.replacement is not None

    @property
    def excluded(self) -> bool:
        return self.rule is not None and self.rule.action == RuleAction.EXCLUDE

    @property
    def line(self) -> int:
        return self.occurrence.line_number


def _default_resolver() -> "PathResolver":
    from .resolver import PathResolver

    return PathResolver()


@dataclass(frozen=True)
class ScanContext:
    """Read-only snapshot of everything one scan pass classifies against"""

    aliases: "AliasTable"
    rules: "RuleTable"
    dependencies: frozenset[str] = frozenset()
    project_root: Path | None = None
    resolver: "PathResolver" = field(default_factory=_default_resolver)


@dataclass
class DirectoryReport:
    """Summary of one scanned directory group"""

    directory: Path
    total_files: int
    total_issues: int
    standard_issues: int
    commented_issues: int
    fixed_issues: int
    skipped_issues: int
    issues: list[Issue] = field(default_factory=list)
    failed_files: list[Path] = field(default_factory=list)
