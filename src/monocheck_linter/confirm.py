from typing import Protocol

from .models import Issue


class ConfirmStrategy(Protocol):
    """Decides whether a suggested fix may be applied"""

    def confirm(self, issue: Issue) -> bool: ...


class AlwaysAccept:
    """Batch mode: every suggestion is applied"""

    def confirm(self, issue: Issue) -> bool:
        return True


class AlwaysSkip:
    def confirm(self, issue: Issue) -> bool:
        return False
