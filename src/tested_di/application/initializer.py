import logging
from typing import Any, Optional, Type, TypeVar

from tested_di.application.candidate_pool import CandidatePool
from tested_di.application.circular_detector import CircularDependencyDetector
from tested_di.application.constructor_resolver import ConstructorResolver
from tested_di.application.fallback import AutoFallbackProvider
from tested_di.application.mocking_zone import MockingZone
from tested_di.application.signature import SignatureParameterNames
from tested_di.domain import Injectable, InjectionSettings

T = TypeVar("T")

logger = logging.getLogger(__name__)


class TestedInitializer:
    """Creates tested objects whose constructor arguments are supplied automatically.

    Orchestrates the candidate pool, the fallback provider and the mocking zone
    for one test. Register test doubles with ``add_injectable`` and build the
    object under test with ``instantiate``.

    Attributes:
        _settings: Configuration of this initializer.
        _pool: Candidate pool shared by every resolution.
        _fallback: Automatic instantiation, or None when full injection is off.
        _mocking_zone: Zone the initialization runs in.
        _name_resolver: Parameter name lookup for diagnostics.
        _circular_detector: Construction stack shared by every resolver.

    Example:
        >>> initializer = TestedInitializer()
        >>> initializer.add_injectable(EmailGateway, fake_gateway)
        >>> initializer.add_injectable(int, 3, name="retries")
        >>> service = initializer.instantiate(SignupService)
        >>> assert service.gateway is fake_gateway
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(
        self,
        settings: Optional[InjectionSettings] = None,
        pool: Optional[CandidatePool] = None,
        mocking_zone: Optional[MockingZone] = None,
    ) -> None:
        """Initialize the initializer.

        Args:
            settings: Optional configuration; defaults to full injection with reuse.
            pool: Optional pool to share; a new one is created otherwise.
            mocking_zone: Optional zone to share; a new one is created otherwise.
        """
        self._settings = settings or InjectionSettings()
        self._pool = pool if pool is not None else CandidatePool()
        self._mocking_zone = mocking_zone or MockingZone()
        self._name_resolver = SignatureParameterNames()
        self._circular_detector = CircularDependencyDetector()
        self._fallback: Optional[AutoFallbackProvider] = None
        if self._settings.full_injection:
            self._fallback = AutoFallbackProvider(
                self._pool,
                reuse_created_instances=self._settings.reuse_created_instances,
            )

    @property
    def settings(self) -> InjectionSettings:
        return self._settings

    @property
    def pool(self) -> CandidatePool:
        return self._pool

    @property
    def fallback(self) -> Optional[AutoFallbackProvider]:
        return self._fallback

    @property
    def mocking_zone(self) -> MockingZone:
        return self._mocking_zone

    def add_injectable(
        self,
        declared_type: Any,
        value: Any,
        name: Optional[str] = None,
        qualifier: Optional[str] = None,
    ) -> Injectable:
        """Register a test double or value for injection.

        Args:
            declared_type: The type the value is registered under.
            value: The value, or None for an intentionally null injectable.
            name: Optional label matched against parameter names.
            qualifier: Optional qualifier matched against ``Named`` markers.

        Returns:
            The registered candidate.
        """
        return self._pool.add(declared_type, value, name=name, qualifier=qualifier)

    def resolver_for(self, cls: Type) -> ConstructorResolver:
        """Create a constructor resolver for a class, wired to this initializer."""
        return ConstructorResolver(
            cls,
            self._pool,
            self._fallback,
            self._mocking_zone,
            self._name_resolver,
            self._circular_detector,
        )

    def instantiate(self, cls: Type[T]) -> T:
        """Create an instance of a class, resolving all its constructor arguments.

        Args:
            cls: The class under test.

        Returns:
            The new instance.

        Raises:
            InvalidConstructorError: If the constructor cannot be inspected.
            MissingDependencyError: If a sub-object parameter has no value.
            MissingInjectableError: If a direct parameter has no value.
            CircularDependencyError: If automatic instantiation loops.
        """
        resolver = self.resolver_for(cls)
        with self._mocking_zone.no_mocking():
            instance = resolver.instantiate(resolver.plan_providers())
        logger.debug("Initialized tested %s", resolver.signature.description)
        return instance

    def clear(self) -> None:
        """Remove all injectables and forget automatically built instances."""
        self._pool.clear()
        self._circular_detector.clear()
        if self._fallback is not None:
            self._fallback.clear()
