"""Per-category ignore lists supplied by the user."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

WILDCARD = "*"


class IssueCategory(Enum):
    """Which advice category an ignore list applies to."""

    ANY = "any"
    UNUSED_DEPENDENCIES = "unused_dependencies"
    USED_TRANSITIVE_DEPENDENCIES = "used_transitive_dependencies"
    INCORRECT_CONFIGURATION = "incorrect_configuration"
    UNUSED_PROCS = "unused_procs"


@dataclass(frozen=True)
class IgnoreFilter:
    """Identifiers to drop from final advice, per category.

    ``ANY`` applies to every category; ``"*"`` matches every identifier.
    """

    ignored: dict[IssueCategory, frozenset[str]] = field(default_factory=dict)

    def is_ignored(self, category: IssueCategory, identifier: str) -> bool:
        for cat in (IssueCategory.ANY, category):
            names = self.ignored.get(cat, frozenset())
            if WILDCARD in names or identifier in names:
                return True
        return False

    def accepts(self, category: IssueCategory, identifier: str) -> bool:
        return not self.is_ignored(category, identifier)
