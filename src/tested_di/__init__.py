"""
tested-di: Constructor-argument resolution for tested objects.

Public API exports for the tested-di package.
"""

# Application exports
from tested_di.application.candidate_pool import CandidatePool
from tested_di.application.constructor_resolver import ConstructorResolver
from tested_di.application.fallback import AutoFallbackProvider
from tested_di.application.initializer import TestedInitializer
from tested_di.application.mocking_zone import MockingZone

# Domain exports
from tested_di.domain.exceptions import (
    CircularDependencyError,
    FallbackNotConfiguredError,
    InjectionError,
    InvalidConstructorError,
    MissingDependencyError,
    MissingInjectableError,
)
from tested_di.domain.markers import Named
from tested_di.domain.settings import InjectionSettings

__version__ = "0.1.0"

__all__ = [
    # Initializer
    "TestedInitializer",
    "ConstructorResolver",
    "CandidatePool",
    "AutoFallbackProvider",
    "MockingZone",
    # Configuration
    "InjectionSettings",
    # Markers
    "Named",
    # Exceptions
    "InjectionError",
    "MissingDependencyError",
    "FallbackNotConfiguredError",
    "MissingInjectableError",
    "CircularDependencyError",
    "InvalidConstructorError",
]
