"""Unit tests for AutoFallbackProvider."""

from abc import ABC, abstractmethod
from typing import Protocol

import pytest

from tested_di.application.candidate_pool import CandidatePool
from tested_di.application.constructor_resolver import ConstructorResolver
from tested_di.application.fallback import AutoFallbackProvider
from tested_di.domain import CircularDependencyError, IFallbackInstanceProvider, NestedDependencyProvider


class Config:
    pass


class Repository:
    def __init__(self, config: Config):
        self.config = config


class Notifier(ABC):
    @abstractmethod
    def notify(self) -> None:
        ...


class Clock(Protocol):
    def now(self) -> float:
        ...


class Owner:
    pass


class Node:
    def __init__(self, parent: "Node"):
        self.parent = parent


def _provider(declared_type, name="dependency"):
    return NestedDependencyProvider(name=name, declared_type=declared_type)


class TestAutoFallbackProvider:
    """Test cases for automatic instantiation of nested dependencies."""

    def test_implements_interface(self):
        assert isinstance(AutoFallbackProvider(CandidatePool()), IFallbackInstanceProvider)

    def test_builds_concrete_class_recursively(self):
        """Test that nested constructors are resolved through the engine."""
        pool = CandidatePool()
        fallback = AutoFallbackProvider(pool)
        resolver = ConstructorResolver(Owner, pool, fallback)

        result = fallback.create_or_reuse(resolver, _provider(Repository), None)

        assert isinstance(result.value, Repository)
        assert isinstance(result.value.config, Config)
        assert pool.instances_created == (result.value.config, result.value)

    def test_nested_build_uses_registered_candidates(self):
        """Test that nested constructors get pool candidates first."""
        pool = CandidatePool()
        config = Config()
        pool.add(Config, config)
        fallback = AutoFallbackProvider(pool)
        resolver = ConstructorResolver(Owner, pool, fallback)

        result = fallback.create_or_reuse(resolver, _provider(Repository), None)

        assert result.value.config is config

    def test_reuses_instance_for_same_type_and_qualifier(self):
        """Test that a built instance is shared."""
        pool = CandidatePool()
        fallback = AutoFallbackProvider(pool)
        resolver = ConstructorResolver(Owner, pool, fallback)

        first = fallback.create_or_reuse(resolver, _provider(Config), None)
        second = fallback.create_or_reuse(resolver, _provider(Config), None)
        other = fallback.create_or_reuse(resolver, _provider(Config), "other")

        assert first.value is second.value
        assert other.value is not first.value
        assert len(pool.instances_created) == 2

    def test_reuse_can_be_disabled(self):
        """Test that every request builds a new instance without reuse."""
        pool = CandidatePool()
        fallback = AutoFallbackProvider(pool, reuse_created_instances=False)
        resolver = ConstructorResolver(Owner, pool, fallback)

        first = fallback.create_or_reuse(resolver, _provider(Config), None)
        second = fallback.create_or_reuse(resolver, _provider(Config), None)

        assert first.value is not second.value

    @pytest.mark.parametrize("declared_type", [Notifier, Clock, int, str])
    def test_cannot_build_abstract_protocol_or_value_types(self, declared_type):
        """Test that non-instantiable types give the absent result."""
        pool = CandidatePool()
        fallback = AutoFallbackProvider(pool)
        resolver = ConstructorResolver(Owner, pool, fallback)

        result = fallback.create_or_reuse(resolver, _provider(declared_type), None)

        assert result.is_absent
        assert pool.instances_created == ()

    def test_circular_dependency_is_detected(self):
        """Test that a class needing itself fails instead of recursing forever."""

        pool = CandidatePool()
        fallback = AutoFallbackProvider(pool)
        resolver = ConstructorResolver(Owner, pool, fallback)

        with pytest.raises(CircularDependencyError) as exc_info:
            fallback.create_or_reuse(resolver, _provider(Node), None)

        assert exc_info.value.dependency_chain == [Node, Node]
        assert resolver.circular_detector.depth == 0

    def test_can_instantiate(self):
        assert AutoFallbackProvider.can_instantiate(Config) is True
        assert AutoFallbackProvider.can_instantiate(Notifier) is False

    def test_clear_forgets_instances(self):
        """Test that clear drops the reuse cache."""
        pool = CandidatePool()
        fallback = AutoFallbackProvider(pool)
        resolver = ConstructorResolver(Owner, pool, fallback)
        first = fallback.create_or_reuse(resolver, _provider(Config), None)

        fallback.clear()

        assert fallback.create_or_reuse(resolver, _provider(Config), None).value is not first.value

    def test_description(self):
        assert str(AutoFallbackProvider(CandidatePool())) == "automatic instantiation"
