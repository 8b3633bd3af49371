"""Filter chain — composable predicates applied to raw advice candidates."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, TypeVar, runtime_checkable

import structlog

from depadvice.engines.advice.filters.ignore import IgnoreFilter
from depadvice.models import HasDependency

log = structlog.get_logger("depadvice.filter")

T = TypeVar("T", bound=HasDependency)


@runtime_checkable
class DependencyFilter(Protocol):
    """A single predicate. Returning ``False`` suppresses the candidate."""

    def accept(self, candidate: HasDependency) -> bool: ...


def unsupported_candidate(flt: object, candidate: object) -> TypeError:
    return TypeError(
        f"{type(flt).__name__} expects a TransitiveDependency or a "
        f"ComponentWithTransitives, got {type(candidate).__name__}"
    )


class FilterChain:
    """Conjunction of registered filters, evaluated lazily in registration order."""

    def __init__(self, filters: Iterable[DependencyFilter] = ()) -> None:
        self._filters: list[DependencyFilter] = list(filters)

    @property
    def filters(self) -> tuple[DependencyFilter, ...]:
        return tuple(self._filters)

    def add(self, flt: DependencyFilter) -> FilterChain:
        self._filters.append(flt)
        return self

    def accept(self, candidate: HasDependency) -> bool:
        for flt in self._filters:
            if not flt.accept(candidate):
                log.debug(
                    "filter.suppressed",
                    filter=type(flt).__name__,
                    dependency=candidate.dependency.identifier,
                )
                return False
        return True

    def apply(self, candidates: Iterable[T]) -> tuple[T, ...]:
        return tuple(c for c in candidates if self.accept(c))


@dataclass(frozen=True)
class FilterSpec:
    """Everything needed to turn raw advice into final advice."""

    universal_filter: FilterChain = field(default_factory=FilterChain)
    ignore: IgnoreFilter | None = None


@dataclass
class FilterSpecBuilder:
    """Mutable builder; the engine registers its built-in filters here."""

    universal_filter: FilterChain = field(default_factory=FilterChain)
    facade_filter: DependencyFilter | None = None
    ignore: IgnoreFilter | None = None

    def add_to_universal_filter(self, flt: DependencyFilter) -> FilterSpecBuilder:
        self.universal_filter.add(flt)
        return self

    def build(self) -> FilterSpec:
        chain = FilterChain(self.universal_filter.filters)
        if self.facade_filter is not None:
            chain.add(self.facade_filter)
        return FilterSpec(universal_filter=chain, ignore=self.ignore)

