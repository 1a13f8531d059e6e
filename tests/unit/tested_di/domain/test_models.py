"""Unit tests for domain models."""

from typing import Annotated, Callable

import pytest
from pydantic import ValidationError

from tested_di.domain import (
    DirectProvider,
    Injectable,
    InjectedValue,
    InjectionPoint,
    LookupOutcome,
    Named,
    NestedDependencyProvider,
    PoolCheckpoint,
    ProviderKind,
)


class Database:
    pass


class TestInjectionPoint:
    """Test cases for the InjectionPoint model."""

    def test_create_injection_point(self):
        """Test creating an injection point with defaults."""
        point = InjectionPoint(declared_type=Database, index=0, name="db")

        assert point.declared_type is Database
        assert point.index == 0
        assert point.name == "db"
        assert point.annotations == ()
        assert point.is_variadic is False
        assert point.is_keyword_only is False

    def test_injection_point_is_immutable(self):
        """Test that injection points cannot be modified."""
        point = InjectionPoint(declared_type=Database, index=0, name="db")

        with pytest.raises(ValidationError):
            point.name = "other"

    def test_negative_index_is_rejected(self):
        """Test that positions cannot be negative."""
        with pytest.raises(ValidationError):
            InjectionPoint(declared_type=Database, index=-1, name="db")

    def test_target_type_unwraps_annotated(self):
        """Test that Annotated metadata is stripped from the target type."""
        point = InjectionPoint(
            declared_type=Annotated[Database, Named("primary")],
            index=0,
            name="db",
            annotations=(Named("primary"),),
        )

        assert point.target_type is Database
        assert point.qualifier == "primary"

    def test_target_type_unwraps_provider(self):
        """Test that Callable[[], T] targets T."""
        point = InjectionPoint(declared_type=Callable[[], Database], index=0, name="db")

        assert point.target_type is Database

    def test_qualifier_is_none_without_named_marker(self):
        """Test that unqualified points have no qualifier."""
        point = InjectionPoint(declared_type=Database, index=0, name="db", annotations=("doc",))

        assert point.qualifier is None


class TestInjectable:
    """Test cases for the Injectable model."""

    def test_create_injectable(self):
        """Test creating an injectable."""
        database = Database()
        injectable = Injectable(declared_type=Database, name="db", value=database)

        assert injectable.value is database
        assert injectable.qualifier is None

    def test_value_is_not_copied(self):
        """Test that the registered object is kept by identity."""
        values = [1, 2]
        injectable = Injectable(declared_type=list, name="values", value=values)

        assert injectable.value is values

    def test_null_injectable(self):
        """Test that an injectable may be intentionally null."""
        injectable = Injectable(declared_type=Database, name="db")

        assert injectable.value is None


class TestInjectedValue:
    """Test cases for the InjectedValue three-state result."""

    def test_of_value_is_present(self):
        """Test a present value."""
        result = InjectedValue.of(42)

        assert result.outcome == LookupOutcome.PRESENT
        assert result.value == 42
        assert result.is_absent is False

    def test_of_none_is_null(self):
        """Test that wrapping None gives the null state."""
        assert InjectedValue.of(None).outcome == LookupOutcome.NULL

    def test_null_is_not_absent(self):
        """Test that null and absent are distinguishable."""
        result = InjectedValue.null()

        assert result.value is None
        assert result.is_absent is False

    def test_absent(self):
        """Test the absent state."""
        result = InjectedValue.absent()

        assert result.value is None
        assert result.is_absent is True

    def test_falsy_values_are_present(self):
        """Test that falsy values are not mistaken for null."""
        assert InjectedValue.of(0).outcome == LookupOutcome.PRESENT
        assert InjectedValue.of("").outcome == LookupOutcome.PRESENT


class TestProviders:
    """Test cases for the provider variants."""

    def test_direct_provider_kind(self):
        """Test that direct providers are tagged DIRECT."""
        provider = DirectProvider(name="x")

        assert provider.kind == ProviderKind.DIRECT
        assert provider.injectable is None

    def test_direct_provider_keeps_injectable_identity(self):
        """Test that the wrapped candidate is the registered one."""
        injectable = Injectable(declared_type=int, name="x", value=1)
        provider = DirectProvider(name="x", injectable=injectable)

        assert provider.injectable is injectable

    def test_nested_provider_kind(self):
        """Test that nested providers are tagged NESTED."""
        provider = NestedDependencyProvider(name="db", declared_type=Database)

        assert provider.kind == ProviderKind.NESTED
        assert provider.value is None

    def test_nested_provider_for_injection_point(self):
        """Test building a nested provider from an injection point."""
        point = InjectionPoint(
            declared_type=Annotated[Database, Named("replica")],
            index=2,
            name="replica",
            annotations=(Named("replica"),),
        )

        provider = NestedDependencyProvider.for_injection_point(point)

        assert provider.name == "replica"
        assert provider.declared_type == Annotated[Database, Named("replica")]
        assert provider.annotations == (Named("replica"),)
        assert provider.target_type is Database

    def test_provider_kind_cannot_be_overridden(self):
        """Test that the tag is fixed per variant."""
        with pytest.raises(ValidationError):
            DirectProvider(name="x", kind=ProviderKind.NESTED)


class TestPoolCheckpoint:
    """Test cases for the PoolCheckpoint model."""

    def test_checkpoint_keeps_candidates_by_identity(self):
        """Test that saved candidates are the same objects."""
        injectable = Injectable(declared_type=int, name="x", value=1)
        checkpoint = PoolCheckpoint(consumed=(injectable,))

        assert checkpoint.consumed[0] is injectable

    def test_empty_checkpoint(self):
        """Test the default checkpoint."""
        assert PoolCheckpoint().consumed == ()
