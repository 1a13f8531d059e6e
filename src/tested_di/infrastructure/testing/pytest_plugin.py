"""Pytest fixtures giving each test its own candidate pool.

Enable them from a top-level ``conftest.py``::

    pytest_plugins = ["tested_di.infrastructure.testing.pytest_plugin"]
"""

from typing import Iterator

import pytest

from tested_di.application import CandidatePool, TestedInitializer


@pytest.fixture()
def injection_pool() -> CandidatePool:
    """Create a per-test candidate pool.

    The fixture is function-scoped, so injectables are isolated between tests.
    """
    return CandidatePool()


@pytest.fixture()
def tested_initializer(injection_pool: CandidatePool) -> Iterator[TestedInitializer]:
    """Create a per-test initializer over ``injection_pool``, cleared after the test."""
    initializer = TestedInitializer(pool=injection_pool)
    yield initializer
    initializer.clear()
