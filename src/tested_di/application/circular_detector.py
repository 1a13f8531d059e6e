"""Application layer - Guard against constructors that transitively need themselves."""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Tuple, Type

from tested_di.domain import CircularDependencyError

logger = logging.getLogger(__name__)


class CircularDependencyDetector:
    """Tracks the classes whose constructor arguments are being resolved.

    Every ``ConstructorResolver.instantiate`` call, the top-level tested class
    included, runs inside ``building(cls)``. Re-entering a class that is still
    on the current thread's stack is a cycle and fails before any argument of
    the repeated class is resolved.

    Attributes:
        _local: Thread-local storage for the construction stack.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _stack(self) -> List[Type]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    @property
    def chain(self) -> Tuple[Type, ...]:
        """Classes being built on the current thread, outermost first."""
        return tuple(self._stack())

    @property
    def depth(self) -> int:
        return len(self._stack())

    @contextmanager
    def building(self, cls: Type) -> Iterator[None]:
        """Mark ``cls`` as under construction for the duration of the block.

        Raises:
            CircularDependencyError: If ``cls`` is already under construction.
                The chain runs from its first occurrence back to itself.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> with detector.building(Chicken):
            ...     with detector.building(Egg):
            ...         with detector.building(Chicken):  # Chicken -> Egg -> Chicken
            ...             ...
        """
        stack = self._stack()
        if cls in stack:
            cycle = stack[stack.index(cls):] + [cls]
            logger.debug("Cycle while building %s: %s", cls, cycle)
            raise CircularDependencyError(cycle)

        stack.append(cls)
        try:
            yield
        finally:
            if stack and stack[-1] is cls:
                stack.pop()

    def clear(self) -> None:
        """Forget the current thread's construction stack."""
        self._stack().clear()
