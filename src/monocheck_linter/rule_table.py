from dataclasses import replace
from typing import Iterable, Iterator

from .models import Rule, RuleSource


class RuleTable:
    """Ordered union of user override rules and community rules.

    Overrides are always consulted before community rules. Within one source
    the first matching rule in declaration order wins; rules are never
    re-sorted by priority, so ambiguous tables still resolve deterministically.
    """

    def __init__(self, overrides: Iterable[Rule] = (), community: Iterable[Rule] = ()):
        self._overrides = tuple(self._tag(r, RuleSource.USER_OVERRIDE) for r in overrides)
        self._community = tuple(self._tag(r, RuleSource.COMMUNITY) for r in community)

    @staticmethod
    def _tag(rule: Rule, source: RuleSource) -> Rule:
        return rule if rule.source == source else replace(rule, source=source)

    def __iter__(self) -> Iterator[Rule]:
        yield from self._overrides
        yield from self._community

    def find(self, specifier: str) -> Rule | None:
        for rule in self:
            if rule.matches(specifier):
                return rule
        return None

    def mentions_root(self, root: str) -> bool:
        """True when an override rule is keyed on this package root."""
        for rule in self._overrides:
            if rule.prefix_only and rule.match_key.startswith(root):
                return True
            if not rule.prefix_only and rule.match_key == root:
                return True
        return False
