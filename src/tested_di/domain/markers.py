from typing import Any, NamedTuple, Optional, Sequence


class Named(NamedTuple):
    """Qualify an injection point or injectable by name.

    Attach ``Named`` metadata to ``typing.Annotated`` so that, among several
    candidates of the same type, the one registered under that name is chosen.

    Example:
        >>> class Service:
        ...     def __init__(self, primary: Annotated[Database, Named("primary")]):
        ...         self.primary = primary
    """

    value: str


def get_qualified_name(annotations: Sequence[Any]) -> Optional[str]:
    """Return the qualifier carried by the first ``Named`` marker, if any."""
    for annotation in annotations:
        if isinstance(annotation, Named):
            return annotation.value
    return None
