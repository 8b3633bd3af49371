"""Request schemas for fact snapshots (JSON in, :class:`DependencyFacts` out)."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from depadvice.engines.advice.facts import DependencyFacts
from depadvice.exceptions import FactsError
from depadvice.models import (
    AnnotationProcessor,
    Component,
    ComponentWithTransitives,
    Dependency,
    ServiceLoader,
    TransitiveComponent,
    VariantDependency,
)


class DependencySchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    identifier: str
    version: str | None = None
    configuration: str | None = None

    @field_validator("identifier", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator("identifier")
    @classmethod
    def _not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("identifier must not be empty")
        return v

    def to_model(self) -> Dependency:
        return Dependency(self.identifier, self.version, self.configuration)


class ComponentSchema(BaseModel):
    dependency: DependencySchema
    is_compile_only_annotations: bool = False
    is_security_provider: bool = False

    def to_model(self) -> Component:
        return Component(
            self.dependency.to_model(),
            is_compile_only_annotations=self.is_compile_only_annotations,
            is_security_provider=self.is_security_provider,
        )


class ComponentWithTransitivesSchema(BaseModel):
    dependency: DependencySchema
    used_transitive_dependencies: list[DependencySchema] = Field(default_factory=list)

    def to_model(self) -> ComponentWithTransitives:
        return ComponentWithTransitives(
            self.dependency.to_model(),
            frozenset(d.to_model() for d in self.used_transitive_dependencies),
        )


class VariantsSchema(BaseModel):
    """Shared shape of TransitiveComponent and VariantDependency."""

    dependency: DependencySchema
    variants: list[str] = Field(default_factory=list)


class AnnotationProcessorSchema(BaseModel):
    processor: str
    dependency: DependencySchema

    def to_model(self) -> AnnotationProcessor:
        return AnnotationProcessor(self.processor, self.dependency.to_model())


class ServiceLoaderSchema(BaseModel):
    dependency: DependencySchema
    providers: list[str] = Field(default_factory=list)

    def to_model(self) -> ServiceLoader:
        return ServiceLoader(self.dependency.to_model(), frozenset(self.providers))


class FactsSchema(BaseModel):
    """Serialized form of one module's dependency facts."""

    model_config = ConfigDict(extra="forbid")

    used_variant_dependencies: list[VariantsSchema] = Field(default_factory=list)
    all_components: list[ComponentSchema] = Field(default_factory=list)
    all_components_with_transitives: list[ComponentWithTransitivesSchema] = Field(
        default_factory=list
    )
    unused_components_with_transitives: list[ComponentWithTransitivesSchema] = Field(
        default_factory=list
    )
    used_transitive_components: list[VariantsSchema] = Field(default_factory=list)
    abi_deps: list[DependencySchema] = Field(default_factory=list)
    all_declared_deps: list[DependencySchema] = Field(default_factory=list)
    unused_procs: list[AnnotationProcessorSchema] = Field(default_factory=list)
    service_loaders: list[ServiceLoaderSchema] = Field(default_factory=list)
    facade_groups: list[str] = Field(default_factory=list)

    def to_facts(self) -> DependencyFacts:
        return DependencyFacts(
            used_variant_dependencies=[
                VariantDependency(v.dependency.to_model(), frozenset(v.variants))
                for v in self.used_variant_dependencies
            ],
            all_components=[c.to_model() for c in self.all_components],
            all_components_with_transitives=[
                c.to_model() for c in self.all_components_with_transitives
            ],
            unused_components_with_transitives=[
                c.to_model() for c in self.unused_components_with_transitives
            ],
            used_transitive_components=[
                TransitiveComponent(t.dependency.to_model(), frozenset(t.variants))
                for t in self.used_transitive_components
            ],
            abi_deps=[d.to_model() for d in self.abi_deps],
            all_declared_deps=[d.to_model() for d in self.all_declared_deps],
            unused_procs=[p.to_model() for p in self.unused_procs],
            service_loaders=[s.to_model() for s in self.service_loaders],
            facade_groups=frozenset(self.facade_groups),
        )


def load_facts(path: str | Path) -> DependencyFacts:
    """Load a JSON fact snapshot. Raises :class:`FactsError` on any problem."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise FactsError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise FactsError(f"Cannot read {path}: {e}") from e
    try:
        return FactsSchema.model_validate(data).to_facts()
    except ValidationError as e:
        raise FactsError(f"Invalid facts in {path}: {e}") from e
