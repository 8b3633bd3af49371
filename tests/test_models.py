"""Tests for the dependency data model and the facts snapshot."""

from __future__ import annotations

import dataclasses

import pytest

from depadvice.engines.advice import DependencyFacts
from depadvice.models import Component, ComponentWithTransitives, Dependency


class TestDependency:
    def test_equality_ignores_version(self):
        assert Dependency("a:b", "1.0", "api") == Dependency("a:b", "2.0", "api")
        assert hash(Dependency("a:b", "1.0", "api")) == hash(Dependency("a:b", "2.0", "api"))

    def test_configuration_is_part_of_identity(self):
        assert Dependency("a:b", "1.0", "api") != Dependency("a:b", "1.0", "implementation")
        assert Dependency("a:b", "1.0", None) != Dependency("a:b", "1.0", "api")

    def test_undeclared_sorts_first(self):
        deps = [
            Dependency("a:b", configuration_name="implementation"),
            Dependency("a:b"),
            Dependency("a:a", configuration_name="api"),
        ]
        assert [d.configuration_name for d in sorted(deps)] == ["api", None, "implementation"]

    def test_group(self):
        assert Dependency("com.squareup.okio:okio").group == "com.squareup.okio"
        assert Dependency(":lib").group is None

    def test_is_declared(self):
        assert not Dependency("a:b").is_declared
        assert Dependency("a:b", configuration_name="api").is_declared

    def test_str(self):
        assert str(Dependency("a:b", "1.0")) == "a:b:1.0"
        assert str(Dependency(":lib")) == ":lib"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Dependency("a:b").identifier = "c:d"  # type: ignore[misc]


class TestOrdering:
    def test_components_order_by_dependency(self):
        b = Component(Dependency("b:b"))
        a = Component(Dependency("a:a"), is_security_provider=True)
        assert sorted([b, a]) == [a, b]

    def test_components_with_transitives_order_by_dependency(self):
        b = ComponentWithTransitives(Dependency("b:b"))
        a = ComponentWithTransitives(Dependency("a:a"), frozenset({Dependency("z:z")}))
        assert sorted([b, a]) == [a, b]


class TestDependencyFacts:
    def test_normalizes_to_sorted_unique_tuples(self):
        a = Dependency("a:a", configuration_name="api")
        b = Dependency("b:b", configuration_name="api")

        facts = DependencyFacts(all_declared_deps=[b, a, b], facade_groups=["g", "g"])

        assert facts.all_declared_deps == (a, b)
        assert facts.facade_groups == frozenset({"g"})

    def test_replace_renormalizes(self):
        facts = DependencyFacts()
        updated = dataclasses.replace(facts, abi_deps={Dependency("b:b"), Dependency("a:a")})
        assert [d.identifier for d in updated.abi_deps] == ["a:a", "b:b"]
