"""
Application layer - Constructor resolution and its collaborators.

This layer contains the resolver that builds tested objects and the pool,
fallback and guard implementations it orchestrates.
It depends only on the Domain layer.
"""

from .candidate_pool import CandidatePool
from .circular_detector import CircularDependencyDetector
from .constructor_resolver import ConstructorResolver
from .fallback import AutoFallbackProvider
from .initializer import TestedInitializer
from .mocking_zone import MockingZone
from .provider_planner import plan_providers
from .signature import ConstructorSignature, SignatureParameterNames, describe_constructor, inspect_constructor

__all__ = [
    "TestedInitializer",
    "ConstructorResolver",
    "CandidatePool",
    "AutoFallbackProvider",
    "MockingZone",
    "CircularDependencyDetector",
    "ConstructorSignature",
    "SignatureParameterNames",
    "inspect_constructor",
    "describe_constructor",
    "plan_providers",
]
