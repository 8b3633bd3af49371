"""Ktx filter — keep convenience "-ktx" artifacts whose transitives are in use."""

from __future__ import annotations

from collections.abc import Iterable

from depadvice.engines.advice.filters.base import unsupported_candidate
from depadvice.models import (
    ComponentWithTransitives,
    HasDependency,
    TransitiveComponent,
    TransitiveDependency,
)

KTX_SUFFIX = "-ktx"


class KtxFilter:
    """Opt-in filter for Kotlin extension artifacts.

    A "-ktx" artifact is usually declared for the library it wraps. When the
    ktx artifact itself looks unused but one of its transitive dependencies is
    used, removing it would be unhelpful: it stays, so no removal advice is
    given for it and no add advice is given for what it brings in.
    """

    def __init__(
        self,
        unused_direct_components: Iterable[ComponentWithTransitives],
        used_transitive_components: Iterable[TransitiveComponent],
    ) -> None:
        used = {c.dependency.identifier for c in used_transitive_components}
        self._kept_ktx = frozenset(
            c.dependency.identifier
            for c in unused_direct_components
            if c.dependency.identifier.endswith(KTX_SUFFIX)
            and any(t.identifier in used for t in c.used_transitive_dependencies)
        )

    @property
    def kept_ktx(self) -> frozenset[str]:
        return self._kept_ktx

    def accept(self, candidate: HasDependency) -> bool:
        if isinstance(candidate, ComponentWithTransitives):
            return candidate.dependency.identifier not in self._kept_ktx
        if isinstance(candidate, TransitiveDependency):
            return not any(p.identifier in self._kept_ktx for p in candidate.parents)
        raise unsupported_candidate(self, candidate)
