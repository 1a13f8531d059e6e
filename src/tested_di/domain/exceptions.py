from typing import List, Optional, Type


class InjectionError(Exception):
    """Base exception for injection-related errors."""


class MissingDependencyError(InjectionError):
    """Raised when a sub-object parameter has no tested or injectable value.

    This occurs when:
    - No test double was declared for the parameter's type.
    - The fallback provider could not create or reuse an instance.

    Attributes:
        parameter_name: Best-known name of the unmet parameter.
        constructor_description: Human-readable signature being built, e.g. ``Foo(Bar)``.
        fallback_description: The fallback mechanism that was consulted.
    """

    def __init__(self, parameter_name: str, constructor_description: str, fallback_description: str) -> None:
        self.parameter_name = parameter_name
        self.constructor_description = constructor_description
        self.fallback_description = fallback_description
        owner = constructor_description.split("(", 1)[0]
        message = (
            f'Missing tested or injectable value for parameter "{parameter_name}" '
            f"in constructor {constructor_description}"
            f"\n  when initializing {owner} using {fallback_description}"
        )
        super().__init__(message)


class FallbackNotConfiguredError(MissingDependencyError):
    """Raised when a sub-object parameter needs a fallback but none is configured."""

    def __init__(self, parameter_name: str, constructor_description: str) -> None:
        super().__init__(parameter_name, constructor_description, "no fallback provider (full injection is disabled)")


class MissingInjectableError(InjectionError):
    """Raised when a direct parameter has no matching registered value.

    Attributes:
        parameter_name: Name of the unmet parameter.
        constructor_description: Human-readable signature being built.
    """

    def __init__(self, parameter_name: str, constructor_description: str) -> None:
        self.parameter_name = parameter_name
        self.constructor_description = constructor_description
        message = (
            f'No injectable value available for parameter "{parameter_name}" '
            f"in constructor {constructor_description}"
        )
        super().__init__(message)


class CircularDependencyError(InjectionError):
    """Raised when automatic instantiation re-enters a type already being built.

    Attributes:
        dependency_chain: List of types involved in the circular dependency.
    """

    def __init__(self, dependency_chain: List[Type]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join([cls.__name__ for cls in dependency_chain])}"
        super().__init__(message)


class InvalidConstructorError(InjectionError):
    """Raised when a constructor signature cannot be inspected.

    Attributes:
        cls: The class whose constructor could not be inspected.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Type, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.reason = reason
        message = f"Cannot inspect constructor of type: {getattr(cls, '__name__', cls)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)
