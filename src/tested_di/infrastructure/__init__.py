"""
Infrastructure layer - Test framework integrations.

This layer contains helpers for using tested-di from test suites.
It depends on both Application and Domain layers.
"""

from . import testing

__all__ = [
    "testing",
]
