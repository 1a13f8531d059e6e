"""Application layer - Guard around real constructor invocations."""

import threading
from contextlib import contextmanager
from typing import Iterator

from tested_di.domain import IMockingZone


class MockingZone(IMockingZone):
    """Thread-local "no mocking" zone.

    Tested objects are initialized inside the zone, so mocking machinery that
    checks ``active`` leaves the framework's own work alone. The real constructor
    of a tested class is the exception: ``real_code()`` leaves the zone for the
    duration of that single call and re-enters it afterwards.

    Attributes:
        _local: Thread-local storage for the zone depth.
    """

    def __init__(self) -> None:
        """Initialize the zone with thread-local storage."""
        self._local = threading.local()

    def _get_depth(self) -> int:
        return getattr(self._local, "depth", 0)

    @property
    def active(self) -> bool:
        """Whether the current thread is inside the no-mocking zone."""
        return self._get_depth() > 0

    def enter(self) -> None:
        self._local.depth = self._get_depth() + 1

    def exit(self) -> None:
        depth = self._get_depth()
        if depth > 0:
            self._local.depth = depth - 1

    @contextmanager
    def no_mocking(self) -> Iterator[None]:
        """Run the block inside the no-mocking zone."""
        self.enter()
        try:
            yield
        finally:
            self.exit()

    @contextmanager
    def real_code(self) -> Iterator[None]:
        """Run the block outside the zone, re-entering it on every exit.

        Example:
            >>> zone = MockingZone()
            >>> with zone.no_mocking():
            ...     with zone.real_code():
            ...         assert not zone.active
            ...     assert zone.active
        """
        depth = self._get_depth()
        self._local.depth = 0
        try:
            yield
        finally:
            self._local.depth = depth
