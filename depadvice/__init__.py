"""depadvice: dependency advice engine (remove / add / change)."""

__version__ = "0.1.0"

from depadvice.config.logical_dependencies import (
    GroupHandler,
    LogicalDependenciesHandler,
    LogicalDependencyIndex,
)
from depadvice.engines.advice import (
    Advice,
    AdviceKind,
    Advisor,
    ComputedAdvice,
    DependencyFacts,
    compute,
)
from depadvice.engines.advice.filters import FilterChain, FilterSpecBuilder
from depadvice.models import (
    AnnotationProcessor,
    Component,
    ComponentWithTransitives,
    Dependency,
    ServiceLoader,
    TransitiveComponent,
    TransitiveDependency,
    VariantDependency,
)

__all__ = [
    "Advice",
    "AdviceKind",
    "Advisor",
    "AnnotationProcessor",
    "Component",
    "ComponentWithTransitives",
    "ComputedAdvice",
    "Dependency",
    "DependencyFacts",
    "FilterChain",
    "FilterSpecBuilder",
    "GroupHandler",
    "LogicalDependenciesHandler",
    "LogicalDependencyIndex",
    "ServiceLoader",
    "TransitiveComponent",
    "TransitiveDependency",
    "VariantDependency",
    "compute",
]
