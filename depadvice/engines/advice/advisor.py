"""Turn dependency usage facts into remove / add / change advice.

Classes of advice:
 1. Declared dependencies which are not used: remove.
 2. Undeclared (transitive) dependencies that are part of the ABI: add to ``api``.
 3. Undeclared (transitive) dependencies that are used: add to ``implementation``.
 4. ``api`` dependencies incorrectly declared on another configuration: change.
 5. ``implementation`` dependencies incorrectly declared on another configuration: change.

Three exception layers protect dependencies that look wrong but are not:
compile-only candidates (never advised on), service loaders and security
providers (never removed, since they are only used at runtime).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

import structlog

from depadvice.config.logical_dependencies import LogicalDependencyIndex
from depadvice.engines.advice.computed import ComputedAdvice
from depadvice.engines.advice.facts import DependencyFacts
from depadvice.engines.advice.filters import (
    FacadeFilter,
    FilterChain,
    FilterSpecBuilder,
    KtxFilter,
    LogicalDependencyFilter,
)
from depadvice.models import (
    Component,
    ComponentWithTransitives,
    Dependency,
    HasDependency,
    TransitiveDependency,
    VariantDependency,
)

log = structlog.get_logger("depadvice.engine")

T = TypeVar("T", bound=HasDependency)

_COMPILE_ONLY = "compileonly"


def _identifiers(items: Iterable[HasDependency]) -> frozenset[str]:
    return frozenset(i.dependency.identifier for i in items)


def _strip(items: Iterable[T], identifiers: frozenset[str]) -> tuple[T, ...]:
    return tuple(i for i in items if i.dependency.identifier not in identifiers)


def _strip_deps(deps: Iterable[Dependency], identifiers: frozenset[str]) -> tuple[Dependency, ...]:
    return tuple(d for d in deps if d.identifier not in identifiers)


class Advisor:
    """Pure computation over one :class:`DependencyFacts` snapshot.

    The compile-only and security-provider layers are classified once in
    ``__init__`` and never change afterwards; :meth:`compute` may be called
    any number of times and always returns the same advice.

    *ignore_ktx* installs :class:`KtxFilter`: an "unused" ``-ktx`` dependency
    is not suggested for removal if any of its dependencies are used.
    A non-empty *logical_dependencies* index installs
    :class:`LogicalDependencyFilter`.
    """

    def __init__(
        self,
        facts: DependencyFacts,
        ignore_ktx: bool = False,
        logical_dependencies: LogicalDependencyIndex | None = None,
    ) -> None:
        self._facts = facts
        self._ignore_ktx = ignore_ktx
        self._logical_dependencies = logical_dependencies

        compile_only: list[Component] = []
        security: list[Component] = []
        for component in facts.all_components:
            if self._is_compile_only(component):
                compile_only.append(component)
            elif component.is_security_provider:
                security.append(component)
        self._compile_only_candidates = tuple(compile_only)
        self._security_providers = tuple(security)

        self._compile_only_ids = _identifiers(self._compile_only_candidates)
        self._service_loader_ids = _identifiers(facts.service_loaders)
        self._security_provider_ids = _identifiers(self._security_providers)

    @staticmethod
    def _is_compile_only(component: Component) -> bool:
        conf = component.dependency.configuration_name
        return component.is_compile_only_annotations or (
            conf is not None and conf.lower().endswith(_COMPILE_ONLY)
        )

    @property
    def compile_only_candidates(self) -> tuple[Component, ...]:
        return self._compile_only_candidates

    @property
    def security_providers(self) -> tuple[Component, ...]:
        return self._security_providers

    def compute(self, filter_spec_builder: FilterSpecBuilder | None = None) -> ComputedAdvice:
        """Compute all advice in one pass.

        A coordinate lands in at most one category. Categories are computed in
        precedence order (remove, change to api, change to implementation,
        add to api, add to implementation) and each skips coordinates already
        claimed by an earlier one. On consistent facts the eligibility rules
        are already disjoint and this never drops anything.
        """
        builder = self._own_builder(filter_spec_builder)

        unused_components = self._compute_unused_dependencies()
        unused_ids = _identifiers(unused_components)

        claimed = set(unused_ids)
        change_to_api = self._claim(self._compute_api_deps_wrongly_declared(), claimed)
        change_to_impl = self._claim(self._compute_impl_deps_wrongly_declared(unused_ids), claimed)
        undeclared_api = self._claim(self._compute_undeclared_api_dependencies(), claimed)
        undeclared_impl = self._claim(
            self._compute_undeclared_impl_dependencies(undeclared_api), claimed
        )

        if self._logical_dependencies is not None and not self._logical_dependencies.is_empty:
            builder.add_to_universal_filter(LogicalDependencyFilter(self._logical_dependencies))

        if self._facts.facade_groups:
            builder.facade_filter = FacadeFilter(self._facts.facade_groups)

        if self._ignore_ktx:
            builder.add_to_universal_filter(
                KtxFilter(
                    unused_direct_components=self._facts.unused_components_with_transitives,
                    used_transitive_components=self._facts.used_transitive_components,
                )
            )

        log.debug(
            "advisor.computed",
            compile_only=len(self._compile_only_candidates),
            security_providers=len(self._security_providers),
            remove=len(unused_components),
            add_to_api=len(undeclared_api),
            add_to_impl=len(undeclared_impl),
            change_to_api=len(change_to_api),
            change_to_impl=len(change_to_impl),
        )

        return ComputedAdvice(
            compile_only_candidates=self._compile_only_candidates,
            unused_components=unused_components,
            undeclared_api_dependencies=undeclared_api,
            undeclared_impl_dependencies=undeclared_impl,
            api_deps_wrongly_declared=change_to_api,
            impl_deps_wrongly_declared=change_to_impl,
            unused_procs=self._facts.unused_procs,
            filter_spec=builder.build(),
        )

    @staticmethod
    def _own_builder(builder: FilterSpecBuilder | None) -> FilterSpecBuilder:
        """Copy of the caller's builder; built-in filters are never written back."""
        if builder is None:
            return FilterSpecBuilder()
        return FilterSpecBuilder(
            universal_filter=FilterChain(builder.universal_filter.filters),
            facade_filter=builder.facade_filter,
            ignore=builder.ignore,
        )

    @staticmethod
    def _claim(items: tuple[T, ...], claimed: set[str]) -> tuple[T, ...]:
        kept = _strip(items, frozenset(claimed))
        claimed.update(_identifiers(kept))
        return kept

    # ── advice categories ────────────────────────────────────────────────

    def _compute_unused_dependencies(self) -> tuple[ComponentWithTransitives, ...]:
        """Unused, and not compile-only, not a service loader, not a security provider.

        The three layers are applied in that order as successive filters.
        """
        candidates = self._facts.unused_components_with_transitives
        candidates = _strip(candidates, self._compile_only_ids)
        candidates = _strip(candidates, self._service_loader_ids)
        return _strip(candidates, self._security_provider_ids)

    def _compute_undeclared_api_dependencies(self) -> tuple[TransitiveDependency, ...]:
        """Part of the ABI, not declared (null configuration), not compile-only."""
        undeclared = [d for d in self._facts.abi_deps if d.configuration_name is None]
        return tuple(
            self._with_transitive_variants(self._with_parents(d))
            for d in _strip_deps(undeclared, self._compile_only_ids)
        )

    def _compute_undeclared_impl_dependencies(
        self, undeclared_api: tuple[TransitiveDependency, ...]
    ) -> tuple[TransitiveDependency, ...]:
        """Used transitively, not compile-only, and not already an undeclared api dependency."""
        candidates = _strip(self._facts.used_transitive_components, self._compile_only_ids)
        # Parents and variants differ between the two shapes, so compare identity only.
        candidates = _strip(candidates, _identifiers(undeclared_api))
        return tuple(
            self._with_transitive_variants(self._with_parents(c.dependency)) for c in candidates
        )

    def _compute_api_deps_wrongly_declared(self) -> tuple[VariantDependency, ...]:
        """Part of the ABI, declared on some configuration, not compile-only.

        Removed dependencies are dropped by the claim order in :meth:`compute`.
        """
        declared = [d for d in self._facts.abi_deps if d.configuration_name is not None]
        return tuple(
            self._with_declared_variants(d)
            for d in _strip_deps(declared, self._compile_only_ids)
        )

    def _compute_impl_deps_wrongly_declared(
        self, unused_ids: frozenset[str]
    ) -> tuple[VariantDependency, ...]:
        """Declared, not advised for removal, not part of the ABI, not compile-only.

        *unused_ids* is the remove result, so unused service loaders and
        security providers still get change advice.
        """
        declared = [d for d in self._facts.all_declared_deps if d.configuration_name is not None]
        declared = _strip_deps(declared, unused_ids)
        declared = _strip_deps(declared, frozenset(d.identifier for d in self._facts.abi_deps))
        return tuple(
            self._with_declared_variants(d)
            for d in _strip_deps(declared, self._compile_only_ids)
        )

    # ── enrichment ───────────────────────────────────────────────────────

    def _with_parents(self, dep: Dependency) -> TransitiveDependency:
        parents = frozenset(
            component.dependency
            for component in self._facts.all_components_with_transitives
            if any(t.identifier == dep.identifier for t in component.used_transitive_dependencies)
        )
        return TransitiveDependency(dep, parents=parents)

    def _with_transitive_variants(self, dep: TransitiveDependency) -> TransitiveDependency:
        for component in self._facts.used_transitive_components:
            if component.dependency.identifier == dep.dependency.identifier:
                return TransitiveDependency(dep.dependency, dep.parents, component.variants)
        return dep

    def _with_declared_variants(self, dep: Dependency) -> VariantDependency:
        for used in self._facts.used_variant_dependencies:
            if used.dependency.identifier == dep.identifier:
                return VariantDependency(dep, used.variants)
        return VariantDependency(dep)


def compute(
    facts: DependencyFacts,
    filter_spec_builder: FilterSpecBuilder | None = None,
    ignore_ktx: bool = False,
    logical_dependencies: LogicalDependencyIndex | None = None,
) -> ComputedAdvice:
    """Compute advice for *facts* without keeping the :class:`Advisor` around."""
    advisor = Advisor(facts, ignore_ktx=ignore_ktx, logical_dependencies=logical_dependencies)
    return advisor.compute(filter_spec_builder)
