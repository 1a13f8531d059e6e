"""
Testing utilities module.

Provides helpers and pytest fixtures for building tested objects.
"""

from .utilities import InjectableScope, create_initializer, create_tested

__all__ = [
    "create_initializer",
    "create_tested",
    "InjectableScope",
]
