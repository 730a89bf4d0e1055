from .alias_rules import AliasImportCheck
from .base import BaseCheck
from .malformed_rules import MalformedCommentCheck
from .relative_rules import RelativeImportCheck
from .rule_match_rules import RuleMatchCheck

__all__ = [
    "AliasImportCheck",
    "BaseCheck",
    "MalformedCommentCheck",
    "RelativeImportCheck",
    "RuleMatchCheck",
]
