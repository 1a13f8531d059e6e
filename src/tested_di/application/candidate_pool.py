"""Application layer - Registry of injectable candidates."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from tested_di.domain import (
    ICandidatePool,
    Injectable,
    InjectedValue,
    InjectionPoint,
    InjectionPointProvider,
    PoolCheckpoint,
    ProviderKind,
)
from tested_di.domain.type_utils import is_assignable, type_name

logger = logging.getLogger(__name__)


def _contains(candidates: Sequence[Injectable], injectable: Injectable) -> bool:
    return any(candidate is injectable for candidate in candidates)


class CandidatePool(ICandidatePool):
    """Test-scoped registry of injectable candidates.

    Candidates are kept in registration order. Injecting a candidate marks it
    as consumed so that it fills at most one parameter of a constructor;
    ``checkpoint()`` undoes that bookkeeping once the constructor's arguments
    are resolved.

    Attributes:
        _candidates: Registered injectables, in registration order.
        _consumed: Injectables consumed since the last restore.
        _current_target_type: Type that ``next_matching_candidate`` matches against.
        _instances_created: Instances built by the fallback provider.
    """

    def __init__(self) -> None:
        """Initialize an empty pool."""
        self._candidates: List[Injectable] = []
        self._consumed: List[Injectable] = []
        self._current_target_type: Any = None
        self._instances_created: List[Any] = []

    @property
    def candidates(self) -> Tuple[Injectable, ...]:
        return tuple(self._candidates)

    @property
    def consumed(self) -> Tuple[Injectable, ...]:
        return tuple(self._consumed)

    @property
    def current_target_type(self) -> Any:
        return self._current_target_type

    @property
    def instances_created(self) -> Tuple[Any, ...]:
        return tuple(self._instances_created)

    def register(self, injectable: Injectable) -> Injectable:
        """Append a candidate to the pool.

        Args:
            injectable: The candidate to register.

        Returns:
            The registered candidate.
        """
        self._candidates.append(injectable)
        return injectable

    def add(
        self,
        declared_type: Any,
        value: Any,
        name: Optional[str] = None,
        qualifier: Optional[str] = None,
    ) -> Injectable:
        """Register a value under a type.

        Args:
            declared_type: The type the value is registered under.
            value: The value, or None for an intentionally null injectable.
            name: Optional label; defaults to the qualifier or the uncapitalized type name.
            qualifier: Optional qualifier matched against ``Named`` markers.

        Returns:
            The registered candidate.

        Example:
            >>> pool = CandidatePool()
            >>> pool.add(int, 42, name="timeout")
            >>> pool.add(Database, None)  # intentionally null
        """
        if name is None:
            name = qualifier or _default_name(declared_type)
        return self.register(Injectable(declared_type=declared_type, name=name, value=value, qualifier=qualifier))

    def is_consumed(self, injectable: Injectable) -> bool:
        return _contains(self._consumed, injectable)

    def _assignable_candidates(self, point: InjectionPoint, exclude: Sequence[Injectable]) -> List[Injectable]:
        return [
            candidate
            for candidate in self._candidates
            if not self.is_consumed(candidate)
            and not _contains(exclude, candidate)
            and is_assignable(point.declared_type, candidate.declared_type)
        ]

    def find_named_candidate(
        self, point: InjectionPoint, exclude: Sequence[Injectable] = ()
    ) -> Optional[Injectable]:
        """Return the unconsumed candidate registered explicitly for an injection point.

        A qualified point matches a candidate with that qualifier (or name);
        any other point matches a candidate named like the parameter.
        """
        qualifier = point.qualifier
        for candidate in self._assignable_candidates(point, exclude):
            if qualifier is not None:
                if qualifier in (candidate.qualifier, candidate.name):
                    return candidate
            elif candidate.name == point.name:
                return candidate
        return None

    def find_candidate(self, point: InjectionPoint, exclude: Sequence[Injectable] = ()) -> Optional[Injectable]:
        """Return the unconsumed candidate best matching an injection point.

        A qualified point only accepts a candidate with that qualifier (or name).
        Otherwise a candidate named like the parameter wins, then the first
        assignable one in registration order.
        """
        named = self.find_named_candidate(point, exclude)
        if named is not None or point.qualifier is not None:
            return named

        matches = self._assignable_candidates(point, exclude)
        return matches[0] if matches else None

    def value_for(self, provider: InjectionPointProvider) -> InjectedValue:
        if provider.kind != ProviderKind.DIRECT or provider.injectable is None:
            return InjectedValue.absent()

        injectable = provider.injectable
        if self.is_consumed(injectable):
            return InjectedValue.absent()

        self._consumed.append(injectable)
        return InjectedValue.of(injectable.value)

    def set_current_target_type(self, target_type: Any) -> None:
        self._current_target_type = target_type

    def next_matching_candidate(self) -> Optional[Injectable]:
        if self._current_target_type is None:
            return None

        for candidate in self._candidates:
            if not self.is_consumed(candidate) and is_assignable(self._current_target_type, candidate.declared_type):
                return candidate
        return None

    def save_consumed(self) -> PoolCheckpoint:
        return PoolCheckpoint(consumed=tuple(self._consumed))

    def restore(self, checkpoint: PoolCheckpoint) -> None:
        self._consumed = list(checkpoint.consumed)

    @contextmanager
    def checkpoint(self) -> Iterator[PoolCheckpoint]:
        """Snapshot consumption on entry and restore it on every exit.

        Yields:
            The snapshot taken on entry.

        Example:
            >>> with pool.checkpoint():
            ...     pool.value_for(provider)  # consumed inside the block only
        """
        saved = self.save_consumed()
        logger.debug("Saved pool checkpoint with %d consumed candidate(s)", len(saved.consumed))
        try:
            yield saved
        finally:
            self.restore(saved)
            logger.debug("Restored pool checkpoint with %d consumed candidate(s)", len(saved.consumed))

    def record_created_instance(self, instance: Any) -> None:
        """Remember an instance built by the fallback provider. Never undone by ``restore``."""
        self._instances_created.append(instance)

    def clear(self) -> None:
        """Remove all candidates, consumption state and created instances."""
        self._candidates.clear()
        self._consumed.clear()
        self._instances_created.clear()
        self._current_target_type = None


def _default_name(declared_type: Any) -> str:
    name = type_name(declared_type)
    return name[:1].lower() + name[1:]
