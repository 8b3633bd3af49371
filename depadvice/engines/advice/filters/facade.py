"""Facade filter — umbrella artifacts whose siblings share a coordinate group."""

from __future__ import annotations

from collections.abc import Iterable

from depadvice.engines.advice.filters.base import unsupported_candidate
from depadvice.models import ComponentWithTransitives, HasDependency, TransitiveDependency


class FacadeFilter:
    """Treat artifacts of a facade group as interchangeable.

    A facade (e.g. ``com.squareup.okio:okio`` re-exporting ``okio-jvm``) looks
    unused because the classes actually come from a sibling in the same group.
    Advice is suppressed when the candidate's group is a facade group and a
    related dependency (parent for add advice, used transitive for remove
    advice) sits in that same group.
    """

    def __init__(self, facade_groups: Iterable[str]) -> None:
        self._facade_groups = frozenset(facade_groups)

    @property
    def facade_groups(self) -> frozenset[str]:
        return self._facade_groups

    def accept(self, candidate: HasDependency) -> bool:
        group = candidate.dependency.group
        if isinstance(candidate, TransitiveDependency):
            related = candidate.parents
        elif isinstance(candidate, ComponentWithTransitives):
            related = candidate.used_transitive_dependencies
        else:
            raise unsupported_candidate(self, candidate)

        if group is None or group not in self._facade_groups:
            return True
        return not any(dep.group == group for dep in related)
