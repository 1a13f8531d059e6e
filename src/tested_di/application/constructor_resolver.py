import logging
from typing import Any, List, Optional, Sequence, Type

from tested_di.application.circular_detector import CircularDependencyDetector
from tested_di.application.mocking_zone import MockingZone
from tested_di.application.provider_planner import plan_providers
from tested_di.application.signature import ConstructorSignature, SignatureParameterNames, inspect_constructor
from tested_di.domain import (
    DirectProvider,
    FallbackNotConfiguredError,
    ICandidatePool,
    IConstructorResolver,
    IFallbackInstanceProvider,
    IMockingZone,
    InjectionPoint,
    InjectionPointProvider,
    IParameterNameResolver,
    MissingDependencyError,
    MissingInjectableError,
    NestedDependencyProvider,
    ProviderKind,
    get_qualified_name,
)
from tested_di.domain.type_utils import wrap_in_provider_if_needed

logger = logging.getLogger(__name__)


class ConstructorResolver(IConstructorResolver):
    """Resolves the arguments of one class's constructor and invokes it.

    Each parameter is filled, in declared order, either by direct lookup in the
    candidate pool or by creating or reusing a nested sub-object through the
    fallback provider. An annotated ``*args`` collects every remaining matching
    candidate. Pool consumption is checkpointed around argument resolution, so
    nested and sibling constructions never see each other's bookkeeping.
    Resolvers derived through ``for_type`` share one circular dependency
    detector, so a class whose arguments lead back to itself is reported.

    Attributes:
        _target: The class to build.
        _signature: The inspected constructor of ``_target``.
        _pool: Shared candidate pool.
        _fallback: Provider of nested instances, or None when full injection is off.
        _mocking_zone: Guard bracketing the real constructor call.
        _name_resolver: Best-effort parameter name lookup for diagnostics.
        _circular_detector: Stack of classes under construction.
    """

    def __init__(
        self,
        target: Type,
        pool: ICandidatePool,
        fallback: Optional[IFallbackInstanceProvider] = None,
        mocking_zone: Optional[IMockingZone] = None,
        name_resolver: Optional[IParameterNameResolver] = None,
        circular_detector: Optional[CircularDependencyDetector] = None,
    ) -> None:
        """Initialize the resolver and inspect the target's constructor.

        Raises:
            InvalidConstructorError: If the constructor cannot be inspected.
        """
        self._target = target
        self._signature = inspect_constructor(target)
        self._pool = pool
        self._fallback = fallback
        self._mocking_zone: IMockingZone = mocking_zone or MockingZone()
        self._name_resolver: IParameterNameResolver = name_resolver or SignatureParameterNames()
        self._circular_detector = circular_detector or CircularDependencyDetector()

    @property
    def target(self) -> Type:
        return self._target

    @property
    def signature(self) -> ConstructorSignature:
        return self._signature

    @property
    def circular_detector(self) -> CircularDependencyDetector:
        return self._circular_detector

    def for_type(self, cls: Type) -> "ConstructorResolver":
        return ConstructorResolver(
            cls,
            self._pool,
            self._fallback,
            self._mocking_zone,
            self._name_resolver,
            self._circular_detector,
        )

    def plan_providers(self) -> List[InjectionPointProvider]:
        return plan_providers(self._signature, self._pool)

    def instantiate(self, providers: Sequence[InjectionPointProvider]) -> Any:
        """Resolve every constructor argument and invoke the constructor.

        Args:
            providers: One provider per non-variadic parameter, in declared order.

        Returns:
            The new instance.

        Raises:
            ValueError: If the number of providers does not match the constructor.
            MissingDependencyError: If a sub-object parameter has no value.
            MissingInjectableError: If a direct parameter has no value.
            CircularDependencyError: If the class is already under construction.

        Example:
            >>> resolver = ConstructorResolver(UserService, pool, fallback)
            >>> service = resolver.instantiate(resolver.plan_providers())
        """
        self._check_provider_count(providers)

        with self._circular_detector.building(self._target):
            return self._resolve_and_invoke(providers)

    def _resolve_and_invoke(self, providers: Sequence[InjectionPointProvider]) -> Any:
        if self._signature.parameter_count == 0:
            return self._invoke_constructor([])

        arguments: List[Any] = [None] * self._signature.parameter_count

        with self._pool.checkpoint():
            for point, provider in zip(self._signature.fixed_points, providers):
                if provider.kind == ProviderKind.NESTED:
                    value = self._create_or_reuse_argument_value(provider)
                else:
                    value = self._get_argument_value_to_inject(provider, point.index)

                if value is not None:
                    value = wrap_in_provider_if_needed(point.declared_type, value)
                arguments[point.index] = value

            variadic_point = self._signature.variadic_point
            if variadic_point is not None:
                arguments[variadic_point.index] = self._obtain_injected_varargs(variadic_point)

        return self._invoke_constructor(arguments)

    def _check_provider_count(self, providers: Sequence[InjectionPointProvider]) -> None:
        expected = len(self._signature.fixed_points)
        if len(providers) == expected:
            return
        if self._signature.is_variadic and len(providers) == expected + 1:
            return
        raise ValueError(
            f"Constructor {self._signature.description} needs {expected} provider(s), got {len(providers)}"
        )

    def _create_or_reuse_argument_value(self, provider: NestedDependencyProvider) -> Any:
        if provider.value is not None:
            return provider.value

        self._pool.set_current_target_type(provider.declared_type)
        qualifier = get_qualified_name(provider.annotations)

        if self._fallback is None:
            raise FallbackNotConfiguredError(provider.name, self._signature.description)

        logger.debug("Creating or reusing %s for parameter '%s' of %s", provider.declared_type, provider.name,
                     self._signature.description)
        created = self._fallback.create_or_reuse(self, provider, qualifier)

        if created.is_absent:
            raise MissingDependencyError(provider.name, self._signature.description, str(self._fallback))

        return created.value

    def _get_argument_value_to_inject(self, provider: DirectProvider, parameter_index: int) -> Any:
        injected = self._pool.value_for(provider)

        if injected.is_absent:
            parameter_name = self._name_resolver.parameter_name(self._target, parameter_index)
            if parameter_name is None:
                parameter_name = provider.name
            raise MissingInjectableError(parameter_name, self._signature.description)

        return injected.value

    def _obtain_injected_varargs(self, point: InjectionPoint) -> tuple:
        element_type = point.declared_type
        self._pool.set_current_target_type(element_type)
        values: List[Any] = []

        while True:
            candidate = self._pool.next_matching_candidate()
            if candidate is None:
                break

            injected = self._pool.value_for(DirectProvider(name=candidate.name, injectable=candidate))
            if injected.value is not None:
                values.append(wrap_in_provider_if_needed(element_type, injected.value))

        logger.debug("Collected %d value(s) for *%s of %s", len(values), point.name, self._signature.description)
        return tuple(values)

    def _invoke_constructor(self, arguments: Sequence[Any]) -> Any:
        args, kwargs = self._signature.build_call(arguments)
        with self._mocking_zone.real_code():
            return self._target(*args, **kwargs)
