from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base for mutable domain objects with identity.

    Assignments are validated so state changes go through the same
    coercion rules as construction.
    """

    model_config = ConfigDict(validate_assignment=True)
