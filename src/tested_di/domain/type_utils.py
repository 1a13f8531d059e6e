"""Helpers for reasoning about declared parameter types."""

import types
from collections.abc import Callable as AbcCallable
from enum import Enum
from typing import Annotated, Any, Tuple, get_args, get_origin

_TYPE_NAME_PREFIXES = ("typing.", "collections.abc.", "builtins.")


def is_runtime_class(candidate: object) -> bool:
    """Return True when candidate is a runtime class safe for ``issubclass``."""
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def split_annotated(declared_type: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """Split ``Annotated[T, *metadata]`` into ``(T, metadata)``.

    Args:
        declared_type: Any type annotation.

    Returns:
        The bare type and the (possibly empty) metadata tuple.
    """
    if get_origin(declared_type) is Annotated:
        args = get_args(declared_type)
        return args[0], tuple(args[1:])
    return declared_type, ()


def is_provider_type(declared_type: Any) -> bool:
    """Return True for zero-argument callable types such as ``Callable[[], T]``."""
    bare, _ = split_annotated(declared_type)
    if get_origin(bare) is not AbcCallable:
        return False
    args = get_args(bare)
    return len(args) == 2 and args[0] == []


def provided_type(declared_type: Any) -> Any:
    """Return the type an injection point ultimately needs.

    ``Annotated`` metadata is dropped and ``Callable[[], T]`` is unwrapped to ``T``.
    """
    bare, _ = split_annotated(declared_type)
    if is_provider_type(bare):
        inner, _ = split_annotated(get_args(bare)[1])
        return inner
    return bare


def wrap_in_provider_if_needed(declared_type: Any, value: Any) -> Any:
    """Adapt a resolved value to the declared type of its injection point.

    Args:
        declared_type: The declared type of the parameter or variadic element.
        value: The resolved value.

    Returns:
        A zero-argument callable returning ``value`` when the declared type is
        ``Callable[[], T]``, otherwise ``value`` itself.
    """
    if is_provider_type(declared_type):
        return lambda: value
    return value


def is_assignable(target_type: Any, candidate_type: Any) -> bool:
    """Return True when a value declared as ``candidate_type`` can fill ``target_type``."""
    target = provided_type(target_type)
    candidate, _ = split_annotated(candidate_type)

    if target is Any or target is object:
        return True
    if target == candidate:
        return True
    if is_runtime_class(target) and is_runtime_class(candidate):
        return issubclass(candidate, target)
    return False


def is_value_type(declared_type: Any) -> bool:
    """Return True when a type cannot be fabricated as a nested tested object.

    Builtins (``int``, ``str``, ``list``...), enums, unions, generic aliases and
    other non-class annotations can only come from registered injectables.
    """
    target = provided_type(declared_type)
    if target is Any or not is_runtime_class(target):
        return True
    if target.__module__ == "builtins":
        return True
    return issubclass(target, Enum)


def type_name(declared_type: Any) -> str:
    """Return a short human-readable name for a type annotation."""
    bare, _ = split_annotated(declared_type)
    if bare is type(None):
        return "None"
    if is_runtime_class(bare):
        return bare.__name__
    name = repr(bare)
    for prefix in _TYPE_NAME_PREFIXES:
        name = name.replace(prefix, "")
    return name
