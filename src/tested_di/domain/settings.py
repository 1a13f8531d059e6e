from pydantic import BaseModel, ConfigDict, Field


class InjectionSettings(BaseModel):
    """Configuration of a tested-object initializer.

    Attributes:
        full_injection: Build missing sub-objects automatically instead of failing.
        reuse_created_instances: Share automatically built instances between parameters
            of the same type and qualifier.
    """

    model_config = ConfigDict(frozen=True)

    full_injection: bool = Field(
        default=True,
        description="Whether missing sub-objects are built automatically.",
    )
    reuse_created_instances: bool = Field(
        default=True,
        description="Whether automatically built instances are reused.",
    )
