"""Application layer - Choosing a provider for each constructor parameter."""

from typing import Dict, List

from tested_di.application.signature import ConstructorSignature
from tested_di.domain import (
    DirectProvider,
    ICandidatePool,
    Injectable,
    InjectionPointProvider,
    NestedDependencyProvider,
)
from tested_di.domain.type_utils import is_value_type


def plan_providers(signature: ConstructorSignature, pool: ICandidatePool) -> List[InjectionPointProvider]:
    """Choose one provider per non-variadic injection point.

    - A matching candidate in the pool gives a direct provider for it.
      Candidates registered under a parameter's qualifier or name are assigned
      first; the remaining parameters then take the remaining candidates in
      registration order. A candidate fills at most one parameter of the same
      constructor.
    - Without a candidate, value-like types (builtins, enums, unions...) get an
      empty direct provider, which fails with ``MissingInjectableError`` when resolved.
    - Any other class is a nested dependency, left to the fallback provider.
      Planned nested providers never carry a known value.

    Args:
        signature: The constructor to plan for.
        pool: The pool to look candidates up in.

    Returns:
        Providers aligned with ``signature.fixed_points``.

    Example:
        >>> # Pair(a: str, b: str), with "for-b" registered as "b", then "other"
        >>> [p.injectable.value for p in plan_providers(inspect_constructor(Pair), pool)]
        ['other', 'for-b']
    """
    points = signature.fixed_points
    chosen: Dict[int, Injectable] = {}
    assigned: List[Injectable] = []

    for position, point in enumerate(points):
        candidate = pool.find_named_candidate(point, exclude=assigned)
        if candidate is not None:
            chosen[position] = candidate
            assigned.append(candidate)

    for position, point in enumerate(points):
        if position in chosen:
            continue
        candidate = pool.find_candidate(point, exclude=assigned)
        if candidate is not None:
            chosen[position] = candidate
            assigned.append(candidate)

    providers: List[InjectionPointProvider] = []
    for position, point in enumerate(points):
        candidate = chosen.get(position)
        if candidate is not None:
            providers.append(DirectProvider(name=candidate.name, injectable=candidate))
        elif is_value_type(point.declared_type):
            providers.append(DirectProvider(name=point.name))
        else:
            providers.append(NestedDependencyProvider.for_injection_point(point))

    return providers
