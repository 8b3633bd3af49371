"""Data models for dependency usage facts.

All types are frozen snapshots built once per analysis run. Equality and
ordering of a :class:`Dependency` are by coordinate plus configuration, but
the engine compares *usage* by :attr:`Dependency.identifier` only, so two
declarations of the same artifact on different configurations count as the
same artifact.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@functools.total_ordering
@dataclass(frozen=True)
class Dependency:
    """A dependency coordinate, optionally declared on a configuration.

    ``configuration_name`` is ``None`` iff the dependency was only ever
    observed transitively.
    """

    identifier: str  # "group:artifact" or a project path like ":lib"
    resolved_version: str | None = field(default=None, compare=False)
    configuration_name: str | None = None

    @property
    def group(self) -> str | None:
        if self.identifier.startswith(":") or ":" not in self.identifier:
            return None
        return self.identifier.split(":", 1)[0]

    @property
    def is_declared(self) -> bool:
        return self.configuration_name is not None

    def sort_key(self) -> tuple[str, int, str]:
        # Undeclared sorts before any declared configuration.
        if self.configuration_name is None:
            return (self.identifier, 0, "")
        return (self.identifier, 1, self.configuration_name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Dependency):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        version = f":{self.resolved_version}" if self.resolved_version else ""
        return f"{self.identifier}{version}"


@runtime_checkable
class HasDependency(Protocol):
    """Anything that wraps a single :class:`Dependency`."""

    @property
    def dependency(self) -> Dependency: ...


def _by_dependency(cls):
    """Order instances of a dependency-wrapping dataclass by their dependency."""

    def __lt__(self, other):
        if not isinstance(other, cls):
            return NotImplemented
        return self.dependency < other.dependency

    cls.__lt__ = __lt__
    return functools.total_ordering(cls)


@_by_dependency
@dataclass(frozen=True)
class Component:
    """A resolved dependency plus the facts derived from inspecting its artifact."""

    dependency: Dependency
    is_compile_only_annotations: bool = False
    is_security_provider: bool = False


@_by_dependency
@dataclass(frozen=True)
class ComponentWithTransitives:
    """A direct dependency and the used dependencies it brings in transitively."""

    dependency: Dependency
    used_transitive_dependencies: frozenset[Dependency] = frozenset()


@_by_dependency
@dataclass(frozen=True)
class TransitiveComponent:
    """A dependency used transitively, and the variants that use it."""

    dependency: Dependency
    variants: frozenset[str] = frozenset()


@_by_dependency
@dataclass(frozen=True)
class VariantDependency:
    """A dependency and the variants it appears in (or should be declared on)."""

    dependency: Dependency
    variants: frozenset[str] = frozenset()


@_by_dependency
@dataclass(frozen=True)
class TransitiveDependency:
    """A transitive dependency, the direct dependencies that bring it in, and its variants."""

    dependency: Dependency
    parents: frozenset[Dependency] = frozenset()
    variants: frozenset[str] = frozenset()


@_by_dependency
@dataclass(frozen=True)
class AnnotationProcessor:
    processor: str  # fully-qualified processor class
    dependency: Dependency


@_by_dependency
@dataclass(frozen=True)
class ServiceLoader:
    """A dependency that provides implementations loaded at runtime via service lookup."""

    dependency: Dependency
    providers: frozenset[str] = frozenset()
