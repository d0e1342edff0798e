from dataclasses import dataclass
from typing import Any, dataclass_transform


@dataclass_transform()
class Service:
    """Base for domain services.

    Collaborators are declared as annotated class attributes; every subclass
    is turned into a dataclass so the DI container can read its constructor.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        dataclass(cls)
