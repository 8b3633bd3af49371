"""Logical dependency groups: several artifacts treated as one unit.

Usage::

    handler = LogicalDependenciesHandler()
    handler.group("kotlin-stdlib", lambda g: (
        # 1: every artifact in a group
        g.include_group("org.jetbrains.kotlin"),
        # 2: specific artifacts
        g.include_dependency("org.jetbrains.kotlin:kotlin-stdlib-jdk8"),
        # 3: anything matching a regular expression
        g.include(r".*kotlin-stdlib.*"),
    ))
    index = handler.to_index()

Rules are full-match regular expressions over ``group:artifact`` identifiers.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType

import structlog

from depadvice.exceptions import ConfigurationError, InvalidRuleError

log = structlog.get_logger("depadvice.config")

_SCOPE_CLASH = "You must configure this project either at the root or the project level, not both"


class GroupHandler:
    """A single named logical dependency group and its matching rules."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._includes: dict[str, re.Pattern[str]] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def includes(self) -> tuple[re.Pattern[str], ...]:
        return tuple(self._includes.values())

    def any_match(self, identifier: str) -> bool:
        return any(rule.fullmatch(identifier) for rule in self._includes.values())

    def include_group(self, group: str) -> None:
        self.include(f"^{re.escape(group)}:.*")

    def include_dependency(self, identifier: str) -> None:
        self.include(f"^{re.escape(identifier)}$")

    def include(self, regex: str | re.Pattern[str]) -> None:
        """Add a rule. Raises :class:`InvalidRuleError` on a malformed pattern."""
        if isinstance(regex, re.Pattern):
            self._includes[regex.pattern] = regex
            return
        try:
            compiled = re.compile(regex)
        except re.error as e:
            raise InvalidRuleError(regex, str(e)) from e
        self._includes[regex] = compiled


class LogicalDependenciesHandler:
    """Container of :class:`GroupHandler`s for one configuration surface.

    Group names are unique. Defining the same group twice means the surface
    was populated both at the root and at the project level, which is a
    configuration error.
    """

    def __init__(self) -> None:
        self._groups: dict[str, GroupHandler] = {}

    @property
    def groups(self) -> tuple[GroupHandler, ...]:
        return tuple(self._groups.values())

    def group(
        self,
        name: str,
        configure: Callable[[GroupHandler], object] | None = None,
    ) -> GroupHandler:
        if name in self._groups:
            raise ConfigurationError(f"{_SCOPE_CLASH} (group '{name}' is already defined)")
        handler = GroupHandler(name)
        if configure is not None:
            configure(handler)
        self._groups[name] = handler
        return handler

    def merge(self, other: LogicalDependenciesHandler) -> None:
        """Fold the groups of a root-scope handler into this project-scope one."""
        clashes = sorted(set(self._groups) & set(other._groups))
        if clashes:
            raise ConfigurationError(f"{_SCOPE_CLASH} (groups defined twice: {clashes})")
        for handler in other.groups:
            self._groups[handler.name] = handler

    def to_index(self) -> LogicalDependencyIndex:
        return LogicalDependencyIndex(
            {name: handler.includes for name, handler in self._groups.items()}
        )


class LogicalDependencyIndex(Mapping[str, tuple[re.Pattern[str], ...]]):
    """Read-only lookup from group name to its rules."""

    def __init__(self, groups: Mapping[str, tuple[re.Pattern[str], ...]] | None = None) -> None:
        self._groups = MappingProxyType({k: tuple(v) for k, v in (groups or {}).items()})
        log.debug("logical_index.built", groups=len(self._groups))

    def __getitem__(self, name: str) -> tuple[re.Pattern[str], ...]:
        return self._groups[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    @property
    def is_empty(self) -> bool:
        return not self._groups

    def any_match(self, name: str, identifier: str) -> bool:
        return any(rule.fullmatch(identifier) for rule in self._groups.get(name, ()))

    def groups_for(self, identifier: str) -> tuple[str, ...]:
        """Names of every group with a rule matching *identifier*."""
        return tuple(name for name in self._groups if self.any_match(name, identifier))
