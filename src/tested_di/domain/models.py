from typing import Any, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from tested_di.domain.enums import LookupOutcome, ProviderKind
from tested_di.domain.markers import get_qualified_name
from tested_di.domain.type_utils import provided_type


class InjectionPoint(BaseModel):
    """Value object describing one constructor parameter.

    Attributes:
        declared_type: The declared type, possibly generic or ``Annotated``.
        index: Position among the constructor's injection points.
        name: The parameter name.
        annotations: Metadata carried by an ``Annotated`` declaration.
        is_variadic: Whether this is the ``*args`` parameter.
        is_keyword_only: Whether the parameter must be passed by keyword.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    declared_type: Any = Field(..., description="The declared type of the parameter.")
    index: int = Field(..., ge=0, description="Position of the parameter among injection points.")
    name: str = Field(..., description="The parameter name.")
    annotations: Tuple[Any, ...] = Field(default=(), description="Annotated metadata of the parameter.")
    is_variadic: bool = Field(default=False, description="Whether the parameter is *args.")
    is_keyword_only: bool = Field(default=False, description="Whether the parameter is keyword-only.")

    @property
    def target_type(self) -> Any:
        """The type a value must have, with ``Annotated`` and providers unwrapped."""
        return provided_type(self.declared_type)

    @property
    def qualifier(self) -> Optional[str]:
        """The name carried by a ``Named`` marker, if any."""
        return get_qualified_name(self.annotations)


class Injectable(BaseModel):
    """A candidate value registered in the candidate pool.

    A ``None`` value is an injectable that is intentionally null.

    Attributes:
        declared_type: The type the value is registered under.
        name: Label of the injectable, used for name matching and diagnostics.
        value: The value to inject.
        qualifier: Optional qualifier matched against ``Named`` markers.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    declared_type: Any = Field(..., description="The type the value is registered under.")
    name: str = Field(..., description="Label of the injectable.")
    value: Any = Field(default=None, description="The value to inject, None when intentionally null.")
    qualifier: Optional[str] = Field(default=None, description="Optional qualifier of the injectable.")


class InjectedValue(BaseModel):
    """Three-state result of a value lookup: present, intentionally null or absent."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    outcome: LookupOutcome
    value: Any = None

    @classmethod
    def of(cls, value: Any) -> "InjectedValue":
        if value is None:
            return cls.null()
        return cls(outcome=LookupOutcome.PRESENT, value=value)

    @classmethod
    def null(cls) -> "InjectedValue":
        return cls(outcome=LookupOutcome.NULL)

    @classmethod
    def absent(cls) -> "InjectedValue":
        return cls(outcome=LookupOutcome.ABSENT)

    @property
    def is_absent(self) -> bool:
        return self.outcome == LookupOutcome.ABSENT


class DirectProvider(BaseModel):
    """Provider whose value comes straight from the candidate pool.

    Attributes:
        name: Label used in diagnostics when the parameter name is unknown.
        injectable: The candidate chosen for the parameter, or None if the pool had none.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[ProviderKind.DIRECT] = ProviderKind.DIRECT
    name: str = Field(..., description="Label of the provider.")
    injectable: Optional[Injectable] = Field(default=None, description="The candidate to inject.")


class NestedDependencyProvider(BaseModel):
    """Provider for a parameter whose value is itself a tested sub-object.

    Attributes:
        name: Name of the parameter.
        declared_type: Declared type of the sub-object.
        annotations: Metadata used to derive the qualifier.
        value: Already-known instance, reused as is when set. ``plan_providers``
            never sets it; it is for callers that build their own provider list,
            for example to pass an object they already tested.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[ProviderKind.NESTED] = ProviderKind.NESTED
    name: str = Field(..., description="Name of the parameter.")
    declared_type: Any = Field(..., description="Declared type of the sub-object.")
    annotations: Tuple[Any, ...] = Field(default=(), description="Annotated metadata of the parameter.")
    value: Optional[Any] = Field(default=None, description="Already-known instance, if any.")

    @classmethod
    def for_injection_point(cls, point: InjectionPoint) -> "NestedDependencyProvider":
        return cls(name=point.name, declared_type=point.declared_type, annotations=point.annotations)

    @property
    def target_type(self) -> Any:
        return provided_type(self.declared_type)


InjectionPointProvider = Union[DirectProvider, NestedDependencyProvider]


class PoolCheckpoint(BaseModel):
    """Opaque snapshot of which pool candidates have been consumed."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    consumed: Tuple[Any, ...] = Field(default=(), description="Candidates consumed when the snapshot was taken.")
