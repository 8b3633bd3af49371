"""DependencyFacts — the immutable input snapshot of one analysis run."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from depadvice.models import (
    AnnotationProcessor,
    Component,
    ComponentWithTransitives,
    Dependency,
    ServiceLoader,
    TransitiveComponent,
    VariantDependency,
)


def _sorted(items: Iterable) -> tuple:
    # dict.fromkeys drops duplicates while keeping the first occurrence.
    return tuple(sorted(dict.fromkeys(items)))


@dataclass(frozen=True)
class DependencyFacts:
    """Usage, declaration and ABI facts supplied by the build integration.

    Every collection is normalized to a sorted, de-duplicated tuple so that
    advice computed from the same facts is always emitted in the same order,
    whatever container the caller passed in.

    A dependency referenced by one of the views without a matching
    :class:`Component` is not an error: it is treated as having no derived
    facts (not compile-only, not a security provider).
    """

    used_variant_dependencies: tuple[VariantDependency, ...] = ()
    all_components: tuple[Component, ...] = ()
    all_components_with_transitives: tuple[ComponentWithTransitives, ...] = ()
    unused_components_with_transitives: tuple[ComponentWithTransitives, ...] = ()
    used_transitive_components: tuple[TransitiveComponent, ...] = ()
    abi_deps: tuple[Dependency, ...] = ()
    all_declared_deps: tuple[Dependency, ...] = ()
    unused_procs: tuple[AnnotationProcessor, ...] = ()
    service_loaders: tuple[ServiceLoader, ...] = ()
    facade_groups: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        for name in (
            "used_variant_dependencies",
            "all_components",
            "all_components_with_transitives",
            "unused_components_with_transitives",
            "used_transitive_components",
            "abi_deps",
            "all_declared_deps",
            "unused_procs",
            "service_loaders",
        ):
            object.__setattr__(self, name, _sorted(getattr(self, name)))
        object.__setattr__(self, "facade_groups", frozenset(self.facade_groups))
