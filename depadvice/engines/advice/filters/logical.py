"""Logical dependency filter — members of one logical group stand in for each other."""

from __future__ import annotations

from depadvice.config.logical_dependencies import LogicalDependencyIndex
from depadvice.engines.advice.filters.base import unsupported_candidate
from depadvice.models import (
    ComponentWithTransitives,
    Dependency,
    HasDependency,
    TransitiveDependency,
)


class LogicalDependencyFilter:
    """Suppress advice when a candidate is related to a member of its own group.

    * Add advice (:class:`TransitiveDependency`): suppressed if any parent is
      in a group the candidate belongs to.
    * Remove advice (:class:`ComponentWithTransitives`): suppressed if any used
      transitive is in a group the candidate belongs to.

    An empty index accepts everything.
    """

    def __init__(self, index: LogicalDependencyIndex) -> None:
        self._index = index

    def accept(self, candidate: HasDependency) -> bool:
        if self._index.is_empty:
            return True
        if isinstance(candidate, TransitiveDependency):
            related = candidate.parents
        elif isinstance(candidate, ComponentWithTransitives):
            related = candidate.used_transitive_dependencies
        else:
            raise unsupported_candidate(self, candidate)
        return not self._shares_group(candidate.dependency, related)

    def _shares_group(self, dep: Dependency, related: frozenset[Dependency]) -> bool:
        groups = self._index.groups_for(dep.identifier)
        return any(
            self._index.any_match(group, other.identifier)
            for group in groups
            for other in related
        )
