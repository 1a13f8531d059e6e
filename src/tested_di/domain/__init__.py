"""
Domain layer - Core value objects and contracts.

This layer contains the injection points, providers, lookup results and the
interfaces of the collaborators the constructor resolver talks to.
It has no dependencies on other layers.
"""

from .enums import LookupOutcome, ProviderKind
from .exceptions import (
    CircularDependencyError,
    FallbackNotConfiguredError,
    InjectionError,
    InvalidConstructorError,
    MissingDependencyError,
    MissingInjectableError,
)
from .interfaces import (
    ICandidatePool,
    IConstructorResolver,
    IFallbackInstanceProvider,
    IMockingZone,
    IParameterNameResolver,
)
from .markers import Named, get_qualified_name
from .models import (
    DirectProvider,
    Injectable,
    InjectedValue,
    InjectionPoint,
    InjectionPointProvider,
    NestedDependencyProvider,
    PoolCheckpoint,
)
from .settings import InjectionSettings

__all__ = [
    # Enums
    "LookupOutcome",
    "ProviderKind",
    # Exceptions
    "InjectionError",
    "MissingDependencyError",
    "FallbackNotConfiguredError",
    "MissingInjectableError",
    "CircularDependencyError",
    "InvalidConstructorError",
    # Interfaces
    "ICandidatePool",
    "IConstructorResolver",
    "IFallbackInstanceProvider",
    "IMockingZone",
    "IParameterNameResolver",
    # Markers
    "Named",
    "get_qualified_name",
    # Models
    "InjectionPoint",
    "Injectable",
    "InjectedValue",
    "DirectProvider",
    "NestedDependencyProvider",
    "InjectionPointProvider",
    "PoolCheckpoint",
    # Settings
    "InjectionSettings",
]
