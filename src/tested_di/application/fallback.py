import inspect
import logging
from typing import Any, Dict, Optional, Tuple

from tested_di.application.candidate_pool import CandidatePool
from tested_di.domain import IConstructorResolver, IFallbackInstanceProvider, InjectedValue, NestedDependencyProvider
from tested_di.domain.type_utils import is_runtime_class, is_value_type

logger = logging.getLogger(__name__)


class AutoFallbackProvider(IFallbackInstanceProvider):
    """Builds missing sub-objects by re-entering constructor resolution.

    An instance already built for the same type and qualifier is reused. Otherwise
    concrete classes are instantiated through a resolver for that class, which in
    turn may ask this provider for its own sub-objects; cycles are reported by
    those resolvers. Abstract classes, protocols and value-like types cannot be
    built and yield the absent result.

    Attributes:
        _pool: Pool where every built instance is recorded.
        _reuse_created_instances: Whether built instances are shared.
        _instances: Built instances keyed by (type, qualifier).
    """

    def __init__(self, pool: CandidatePool, reuse_created_instances: bool = True) -> None:
        self._pool = pool
        self._reuse_created_instances = reuse_created_instances
        self._instances: Dict[Tuple[Any, Optional[str]], Any] = {}

    def create_or_reuse(
        self,
        resolver: IConstructorResolver,
        provider: NestedDependencyProvider,
        qualifier: Optional[str],
    ) -> InjectedValue:
        """Return an instance for a nested dependency.

        Args:
            resolver: The resolver of the object that needs the instance.
            provider: The nested dependency to satisfy.
            qualifier: Name derived from the parameter's annotations, if any.

        Returns:
            The reused or new instance, or the absent result.

        Raises:
            CircularDependencyError: If the class transitively needs itself.
        """
        target_type = provider.target_type
        key = (target_type, qualifier)

        if self._reuse_created_instances and key in self._instances:
            logger.debug("Reusing automatically built %s", target_type)
            return InjectedValue.of(self._instances[key])

        if not self.can_instantiate(target_type):
            return InjectedValue.absent()

        nested_resolver = resolver.for_type(target_type)
        instance = nested_resolver.instantiate(nested_resolver.plan_providers())

        logger.debug("Built %s for parameter '%s' of %s", target_type, provider.name, resolver.target)
        self._pool.record_created_instance(instance)
        if self._reuse_created_instances:
            self._instances[key] = instance
        return InjectedValue.of(instance)

    @staticmethod
    def can_instantiate(target_type: Any) -> bool:
        if not is_runtime_class(target_type) or is_value_type(target_type):
            return False
        if inspect.isabstract(target_type):
            return False
        return not getattr(target_type, "_is_protocol", False)

    def clear(self) -> None:
        """Forget every built instance."""
        self._instances.clear()

    def __str__(self) -> str:
        return "automatic instantiation"
