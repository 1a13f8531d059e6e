from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, List, Optional, Sequence, Type

from tested_di.domain.models import (
    Injectable,
    InjectedValue,
    InjectionPoint,
    InjectionPointProvider,
    NestedDependencyProvider,
    PoolCheckpoint,
)


class ICandidatePool(ABC):
    """Abstract interface for the registry of injectable candidates."""

    @abstractmethod
    def find_named_candidate(
        self, point: InjectionPoint, exclude: Sequence[Injectable] = ()
    ) -> Optional[Injectable]:
        """Return the unconsumed candidate matching an injection point by qualifier or name.

        Args:
            point: The injection point to satisfy.
            exclude: Candidates already assigned to other parameters.
        """

    @abstractmethod
    def find_candidate(self, point: InjectionPoint, exclude: Sequence[Injectable] = ()) -> Optional[Injectable]:
        """Return the unconsumed candidate best matching an injection point.

        Args:
            point: The injection point to satisfy.
            exclude: Candidates already assigned to other parameters.
        """

    @abstractmethod
    def value_for(self, provider: InjectionPointProvider) -> InjectedValue:
        """Consume and return the value of the candidate behind a provider.

        Args:
            provider: The provider whose candidate should be injected.

        Returns:
            The value, the null result for an intentionally null candidate,
            or the absent result when nothing is available.
        """

    @abstractmethod
    def next_matching_candidate(self) -> Optional[Injectable]:
        """Return the next unconsumed candidate assignable to the current target type."""

    @abstractmethod
    def set_current_target_type(self, target_type: Any) -> None:
        """Set the type that candidate matching is performed against.

        Args:
            target_type: The declared type of the injection point being resolved.
        """

    @abstractmethod
    def save_consumed(self) -> PoolCheckpoint:
        """Snapshot which candidates have been consumed so far."""

    @abstractmethod
    def restore(self, checkpoint: PoolCheckpoint) -> None:
        """Restore consumption state from a snapshot.

        Args:
            checkpoint: A snapshot taken by ``save_consumed``.
        """

    @abstractmethod
    def checkpoint(self) -> AbstractContextManager:
        """Snapshot on entry and restore on every exit, including errors."""


class IConstructorResolver(ABC):
    """Abstract interface for constructing one class from its constructor."""

    @property
    @abstractmethod
    def target(self) -> Type:
        """The class this resolver builds."""

    @abstractmethod
    def plan_providers(self) -> List[InjectionPointProvider]:
        """Choose one provider per non-variadic constructor parameter."""

    @abstractmethod
    def instantiate(self, providers: Sequence[InjectionPointProvider]) -> Any:
        """Resolve every constructor argument and invoke the constructor.

        Args:
            providers: One provider per non-variadic parameter, in declared order.

        Returns:
            The new instance.

        Raises:
            MissingDependencyError: If a sub-object parameter has no value.
            MissingInjectableError: If a direct parameter has no value.
        """

    @abstractmethod
    def for_type(self, cls: Type) -> "IConstructorResolver":
        """Return a resolver for another class sharing this resolver's collaborators."""


class IFallbackInstanceProvider(ABC):
    """Abstract interface for fabricating or reusing sub-object instances."""

    @abstractmethod
    def create_or_reuse(
        self,
        resolver: IConstructorResolver,
        provider: NestedDependencyProvider,
        qualifier: Optional[str],
    ) -> InjectedValue:
        """Return an existing compatible instance or construct a new one.

        Args:
            resolver: The resolver asking, used to re-enter nested construction.
            provider: The nested dependency to satisfy.
            qualifier: Name derived from the parameter's annotations, if any.

        Returns:
            The instance, or the absent result when none can be produced.
        """


class IMockingZone(ABC):
    """Abstract interface for the guard bracketing real constructor calls."""

    @abstractmethod
    def real_code(self) -> AbstractContextManager:
        """Suspend the no-mocking zone for the duration of the block."""


class IParameterNameResolver(ABC):
    """Abstract interface for best-effort parameter name lookup."""

    @abstractmethod
    def parameter_name(self, owner: Type, index: int) -> Optional[str]:
        """Return the name of the injection point at ``index`` of ``owner``'s constructor.

        Args:
            owner: The class whose constructor is inspected.
            index: Position among the constructor's injection points.
        """
