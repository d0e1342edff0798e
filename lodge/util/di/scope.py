"""Custom Dishka scopes for lodge."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Lodge dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (singletons)
    - UOW: Unit of Work (one request or one scheduled run)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
