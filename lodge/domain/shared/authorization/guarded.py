"""Guarded[T]: a loaded resource that must pass ResourcePolicy before use."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from lodge.domain.shared.authorization.resource import Operation, Protected

if TYPE_CHECKING:
    from lodge.domain.auth.model.principal import Principal
    from lodge.domain.shared.authorization.policy import ResourcePolicy

T = TypeVar("T", bound=Protected)


class Guarded(Generic[T]):
    """Holds a document, program or member until an operation is authorized.

    There is no attribute passthrough. Callers unwrap with
    ``check(Operation.UPDATE)`` and get the resource back only if the policy
    allows it for the principal that loaded it.
    """

    __slots__ = ("_item", "_principal", "_policy")

    def __init__(self, item: T, principal: Principal, policy: ResourcePolicy) -> None:
        self._item = item
        self._principal = principal
        self._policy = policy

    def check(self, operation: Operation) -> T:
        """Return the resource, or raise AuthorizationError."""
        target = self._item.as_target()
        self._policy.guard(self._principal, target.kind, operation, target)
        return self._item
