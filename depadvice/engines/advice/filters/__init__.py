"""Post-processing filters over raw advice."""

from depadvice.engines.advice.filters.base import (
    DependencyFilter,
    FilterChain,
    FilterSpec,
    FilterSpecBuilder,
)
from depadvice.engines.advice.filters.facade import FacadeFilter
from depadvice.engines.advice.filters.ignore import IgnoreFilter, IssueCategory
from depadvice.engines.advice.filters.ktx import KtxFilter
from depadvice.engines.advice.filters.logical import LogicalDependencyFilter

__all__ = [
    "DependencyFilter",
    "FacadeFilter",
    "FilterChain",
    "FilterSpec",
    "FilterSpecBuilder",
    "IgnoreFilter",
    "IssueCategory",
    "KtxFilter",
    "LogicalDependencyFilter",
]
