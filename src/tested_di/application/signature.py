"""Application layer - Constructor inspection and description."""

import inspect
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, get_type_hints

from pydantic import BaseModel, ConfigDict, Field

from tested_di.domain import IParameterNameResolver, InjectionPoint, InvalidConstructorError
from tested_di.domain.type_utils import split_annotated, type_name

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class ConstructorSignature(BaseModel):
    """Injection points of one class's constructor.

    Attributes:
        owner: The class whose constructor was inspected.
        parameters: The raw constructor parameters, ``self`` excluded.
        injection_points: Parameters that need a resolved value, in declared order.
        description: Human-readable signature, e.g. ``Foo(Bar, int, *str)``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    owner: Any = Field(..., description="The class whose constructor was inspected.")
    parameters: Tuple[Any, ...] = Field(default=(), description="Raw constructor parameters.")
    injection_points: Tuple[InjectionPoint, ...] = Field(default=(), description="Injection points.")
    description: str = Field(..., description="Human-readable constructor signature.")

    @property
    def parameter_count(self) -> int:
        return len(self.injection_points)

    @property
    def fixed_points(self) -> Tuple[InjectionPoint, ...]:
        """Injection points resolved one by one, the variadic one excluded."""
        return tuple(point for point in self.injection_points if not point.is_variadic)

    @property
    def variadic_point(self) -> Optional[InjectionPoint]:
        for point in self.injection_points:
            if point.is_variadic:
                return point
        return None

    @property
    def is_variadic(self) -> bool:
        return self.variadic_point is not None

    def build_call(self, arguments: Sequence[Any]) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
        """Lay resolved arguments out as a positional tuple and keyword mapping.

        Args:
            arguments: Resolved values, aligned with ``injection_points``; the
                variadic slot holds a tuple.

        Returns:
            ``(args, kwargs)`` ready for ``owner(*args, **kwargs)``. Positional
            parameters that are not injection points get their default value.
        """
        by_name = {point.name: arguments[point.index] for point in self.injection_points}
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}

        for parameter in self.parameters:
            if parameter.kind in _POSITIONAL_KINDS:
                args.append(by_name[parameter.name] if parameter.name in by_name else parameter.default)
            elif parameter.kind == inspect.Parameter.VAR_POSITIONAL:
                args.extend(by_name.get(parameter.name, ()))
            elif parameter.kind == inspect.Parameter.KEYWORD_ONLY and parameter.name in by_name:
                kwargs[parameter.name] = by_name[parameter.name]

        return tuple(args), kwargs


def inspect_constructor(cls: Type) -> ConstructorSignature:
    """Inspect the constructor of a class.

    Every parameter without a default becomes an injection point, and so does an
    annotated ``*args``. Parameters with defaults and ``**kwargs`` are left alone.

    Args:
        cls: The class to inspect.

    Returns:
        The constructor's signature.

    Raises:
        InvalidConstructorError: If the signature cannot be read or a required
            parameter lacks a type hint.

    Example:
        >>> class Foo:
        ...     def __init__(self, bar: Bar, *names: str):
        ...         ...
        >>> inspect_constructor(Foo).description
        'Foo(Bar, *str)'
    """
    if not isinstance(cls, type):
        raise InvalidConstructorError(cls, "Only classes can be instantiated.")

    if cls.__init__ is object.__init__:
        return ConstructorSignature(owner=cls, description=describe_constructor(cls, ()))

    try:
        signature = inspect.signature(cls.__init__)
        type_hints = get_type_hints(cls.__init__, include_extras=True)
    except (TypeError, ValueError, NameError) as e:
        raise InvalidConstructorError(cls, str(e)) from e

    parameters = list(signature.parameters.values())[1:]
    points: List[InjectionPoint] = []

    for parameter in parameters:
        if parameter.kind == inspect.Parameter.VAR_KEYWORD:
            continue
        if parameter.default is not inspect.Parameter.empty:
            continue

        is_variadic = parameter.kind == inspect.Parameter.VAR_POSITIONAL
        if parameter.name not in type_hints:
            if is_variadic:
                continue
            raise InvalidConstructorError(
                cls,
                f"Parameter '{parameter.name}' lacks type hint and has no default value.",
            )

        declared_type = type_hints[parameter.name]
        _, annotations = split_annotated(declared_type)
        points.append(
            InjectionPoint(
                declared_type=declared_type,
                index=len(points),
                name=parameter.name,
                annotations=annotations,
                is_variadic=is_variadic,
                is_keyword_only=parameter.kind == inspect.Parameter.KEYWORD_ONLY,
            )
        )

    return ConstructorSignature(
        owner=cls,
        parameters=tuple(parameters),
        injection_points=tuple(points),
        description=describe_constructor(cls, points),
    )


def describe_constructor(cls: Type, points: Sequence[InjectionPoint]) -> str:
    """Return a friendly constructor description such as ``Foo(Bar, int, *str)``."""
    parameter_types = []
    for point in points:
        name = type_name(point.declared_type)
        parameter_types.append(f"*{name}" if point.is_variadic else name)
    return f"{cls.__name__}({', '.join(parameter_types)})"


class SignatureParameterNames(IParameterNameResolver):
    """Reads injection point names from the constructor signature."""

    def parameter_name(self, owner: Type, index: int) -> Optional[str]:
        try:
            points = inspect_constructor(owner).injection_points
        except InvalidConstructorError:
            return None
        if 0 <= index < len(points):
            return points[index].name
        return None
