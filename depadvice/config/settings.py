"""Advice configuration, validated at load time before any advice is computed."""

from __future__ import annotations

import json
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from depadvice.config.logical_dependencies import (
    LogicalDependenciesHandler,
    LogicalDependencyIndex,
)
from depadvice.engines.advice.filters import (
    FilterSpecBuilder,
    IgnoreFilter,
    IssueCategory,
    LogicalDependencyFilter,
)
from depadvice.exceptions import ConfigurationError


class LogicalGroupConfig(BaseModel):
    """One logical dependency group, in the three forms a rule can take."""

    model_config = ConfigDict(extra="forbid")

    name: str
    include_groups: list[str] = Field(default_factory=list)
    include_dependencies: list[str] = Field(default_factory=list)
    include: list[str] = Field(default_factory=list)

    @field_validator("include")
    @classmethod
    def _compile_rules(cls, v: list[str]) -> list[str]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid pattern '{pattern}': {e}") from e
        return v


class IgnoreConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    any: list[str] = Field(default_factory=list)
    unused_dependencies: list[str] = Field(default_factory=list)
    used_transitive_dependencies: list[str] = Field(default_factory=list)
    incorrect_configuration: list[str] = Field(default_factory=list)
    unused_procs: list[str] = Field(default_factory=list)

    def to_filter(self) -> IgnoreFilter | None:
        ignored = {
            category: frozenset(getattr(self, category.value))
            for category in IssueCategory
            if getattr(self, category.value)
        }
        return IgnoreFilter(ignored) if ignored else None


class AdviceConfig(BaseModel):
    """User-facing configuration surface of the advice engine.

    ``logical_dependencies`` holds the project-level groups; root-level groups
    are supplied separately (see :meth:`logical_handler`) and must not redefine
    a project-level group.
    """

    model_config = ConfigDict(extra="forbid")

    ignore_ktx: bool = False
    facade_groups: list[str] = Field(default_factory=list)
    logical_dependencies: list[LogicalGroupConfig] = Field(default_factory=list)
    ignore: IgnoreConfig = Field(default_factory=IgnoreConfig)

    @classmethod
    def load(cls, path: str | Path) -> AdviceConfig:
        """Read a JSON config file. Raises :class:`ConfigurationError` on any problem."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read config {path}: {e}") from e
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config {path}: {e}") from e

    def logical_handler(
        self, root: LogicalDependenciesHandler | None = None
    ) -> LogicalDependenciesHandler:
        handler = LogicalDependenciesHandler()
        for group in self.logical_dependencies:
            g = handler.group(group.name)
            for name in group.include_groups:
                g.include_group(name)
            for identifier in group.include_dependencies:
                g.include_dependency(identifier)
            for pattern in group.include:
                g.include(pattern)
        if root is not None:
            handler.merge(root)
        return handler

    def logical_index(self, root: LogicalDependenciesHandler | None = None) -> LogicalDependencyIndex:
        return self.logical_handler(root).to_index()

    def filter_spec_builder(
        self, root: LogicalDependenciesHandler | None = None
    ) -> FilterSpecBuilder:
        builder = FilterSpecBuilder(ignore=self.ignore.to_filter())
        index = self.logical_index(root)
        if not index.is_empty:
            builder.add_to_universal_filter(LogicalDependencyFilter(index))
        return builder
