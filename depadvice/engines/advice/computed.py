"""ComputedAdvice — raw advice sets plus the filtered, user-facing view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import TypeVar

from depadvice.engines.advice.filters import FilterSpec, IssueCategory
from depadvice.models import (
    AnnotationProcessor,
    Component,
    ComponentWithTransitives,
    Dependency,
    HasDependency,
    TransitiveDependency,
    VariantDependency,
)

T = TypeVar("T", bound=HasDependency)

API = "api"
IMPLEMENTATION = "implementation"


def _needs_change(
    deps: tuple[VariantDependency, ...], to_configuration: str
) -> tuple[VariantDependency, ...]:
    """Drop change advice for dependencies already on (a variant of) the target."""
    return tuple(
        v
        for v in deps
        if not (v.dependency.configuration_name or "").lower().endswith(to_configuration)
    )


class AdviceKind(Enum):
    REMOVE = "remove"
    ADD_TO_API = "add_to_api"
    ADD_TO_IMPLEMENTATION = "add_to_implementation"
    CHANGE_TO_API = "change_to_api"
    CHANGE_TO_IMPLEMENTATION = "change_to_implementation"
    REMOVE_PROCESSOR = "remove_processor"


@dataclass(frozen=True)
class Advice:
    """One actionable item: a single coordinate and a single kind."""

    dependency: Dependency
    kind: AdviceKind
    from_configuration: str | None = None
    to_configuration: str | None = None
    parents: frozenset[Dependency] = frozenset()
    variants: frozenset[str] = frozenset()

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "identifier": self.dependency.identifier,
            "version": self.dependency.resolved_version,
            "from_configuration": self.from_configuration,
            "to_configuration": self.to_configuration,
            "parents": sorted(p.identifier for p in self.parents),
            "variants": sorted(self.variants),
        }


@dataclass(frozen=True)
class ComputedAdvice:
    """Output of one :class:`~depadvice.engines.advice.advisor.Advisor` run.

    The ``unused_components`` .. ``unused_procs`` fields are the raw engine
    output. The ``remove`` .. ``unused_annotation_processors`` properties are
    the same sets after the filter spec has been applied, and :attr:`advice`
    flattens them into :class:`Advice` records.
    """

    compile_only_candidates: tuple[Component, ...]
    unused_components: tuple[ComponentWithTransitives, ...]
    undeclared_api_dependencies: tuple[TransitiveDependency, ...]
    undeclared_impl_dependencies: tuple[TransitiveDependency, ...]
    api_deps_wrongly_declared: tuple[VariantDependency, ...]
    impl_deps_wrongly_declared: tuple[VariantDependency, ...]
    unused_procs: tuple[AnnotationProcessor, ...]
    filter_spec: FilterSpec = field(default_factory=FilterSpec)

    def _filtered(self, items: tuple[T, ...], category: IssueCategory) -> tuple[T, ...]:
        ignore = self.filter_spec.ignore
        if ignore is None:
            return items
        return tuple(i for i in items if ignore.accepts(category, i.dependency.identifier))

    @cached_property
    def remove(self) -> tuple[ComponentWithTransitives, ...]:
        chained = self.filter_spec.universal_filter.apply(self.unused_components)
        return self._filtered(chained, IssueCategory.UNUSED_DEPENDENCIES)

    @cached_property
    def add_to_api(self) -> tuple[TransitiveDependency, ...]:
        chained = self.filter_spec.universal_filter.apply(self.undeclared_api_dependencies)
        return self._filtered(chained, IssueCategory.USED_TRANSITIVE_DEPENDENCIES)

    @cached_property
    def add_to_implementation(self) -> tuple[TransitiveDependency, ...]:
        chained = self.filter_spec.universal_filter.apply(self.undeclared_impl_dependencies)
        return self._filtered(chained, IssueCategory.USED_TRANSITIVE_DEPENDENCIES)

    @cached_property
    def change_to_api(self) -> tuple[VariantDependency, ...]:
        return self._filtered(
            _needs_change(self.api_deps_wrongly_declared, API),
            IssueCategory.INCORRECT_CONFIGURATION,
        )

    @cached_property
    def change_to_implementation(self) -> tuple[VariantDependency, ...]:
        return self._filtered(
            _needs_change(self.impl_deps_wrongly_declared, IMPLEMENTATION),
            IssueCategory.INCORRECT_CONFIGURATION,
        )

    @cached_property
    def unused_annotation_processors(self) -> tuple[AnnotationProcessor, ...]:
        return self._filtered(self.unused_procs, IssueCategory.UNUSED_PROCS)

    @cached_property
    def advice(self) -> tuple[Advice, ...]:
        items: list[Advice] = []
        for c in self.remove:
            items.append(
                Advice(
                    c.dependency,
                    AdviceKind.REMOVE,
                    from_configuration=c.dependency.configuration_name,
                )
            )
        for kind, to, deps in (
            (AdviceKind.ADD_TO_API, API, self.add_to_api),
            (AdviceKind.ADD_TO_IMPLEMENTATION, IMPLEMENTATION, self.add_to_implementation),
        ):
            for t in deps:
                items.append(
                    Advice(t.dependency, kind, None, to, parents=t.parents, variants=t.variants)
                )
        for kind, to, changes in (
            (AdviceKind.CHANGE_TO_API, API, self.change_to_api),
            (AdviceKind.CHANGE_TO_IMPLEMENTATION, IMPLEMENTATION, self.change_to_implementation),
        ):
            for v in changes:
                items.append(
                    Advice(
                        v.dependency,
                        kind,
                        from_configuration=v.dependency.configuration_name,
                        to_configuration=to,
                        variants=v.variants,
                    )
                )
        for p in self.unused_annotation_processors:
            items.append(
                Advice(
                    p.dependency,
                    AdviceKind.REMOVE_PROCESSOR,
                    from_configuration=p.dependency.configuration_name,
                )
            )
        return tuple(sorted(items, key=lambda a: (a.dependency.sort_key(), a.kind.value)))
