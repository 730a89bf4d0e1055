from .aliases import AliasTable
from .autofix import Rewriter
from .classifier import Classifier
from .comments import CommentScanner
from .engine import LinterEngine
from .errors import MonocheckError, RewriteCorruptionError
from .models import (
    AliasEntry,
    CommentStyle,
    DirectoryReport,
    ImportOccurrence,
    Issue,
    IssueCategory,
    Rule,
    RuleAction,
    RuleSource,
    ScanContext,
)
from .reporter import Reporter
from .resolver import PathResolver
from .rule_table import RuleTable

__all__ = [
    "AliasEntry",
    "AliasTable",
    "Classifier",
    "CommentScanner",
    "CommentStyle",
    "DirectoryReport",
    "ImportOccurrence",
    "Issue",
    "IssueCategory",
    "LinterEngine",
    "MonocheckError",
    "PathResolver",
    "Reporter",
    "Rewriter",
    "RewriteCorruptionError",
    "Rule",
    "RuleAction",
    "RuleSource",
    "RuleTable",
    "ScanContext",
]
