from enum import Enum


class ProviderKind(str, Enum):
    """Defines where an injection point gets its value from.

    Attributes:
        DIRECT: Value comes straight from the candidate pool.
        NESTED: Value is a sub-object, reused or built by the fallback provider.
    """

    DIRECT = "direct"
    NESTED = "nested"

    def __str__(self) -> str:
        return self.value


class LookupOutcome(str, Enum):
    """Defines the three possible results of a value lookup.

    Attributes:
        PRESENT: A non-null value was found.
        NULL: The value was found and is intentionally null.
        ABSENT: No value is available.
    """

    PRESENT = "present"
    NULL = "null"
    ABSENT = "absent"

    def __str__(self) -> str:
        return self.value
