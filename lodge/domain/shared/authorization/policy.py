"""ResourcePolicy: the single allow/deny entry point for resource operations.

Evaluation order for every decision:
1. Superadmin is allowed.
2. A blanket ``<operation>_<kind>`` grant allows.
3. The per-kind fallback (grade visibility, ownership, state) decides.
4. Anything else is denied.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeVar

from lodge.domain.auth.model.grade import GENERAL_CATEGORY, at_least
from lodge.domain.auth.model.principal import Principal
from lodge.domain.document.model.value import DocumentStatus
from lodge.domain.shared.authorization.capability import Capability
from lodge.domain.shared.authorization.resolver import PermissionResolver
from lodge.domain.shared.authorization.resource import (
    Operation,
    Protected,
    ResourceKind,
    ResourceTarget,
    blanket_capability,
)
from lodge.domain.shared.error import AuthorizationError

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=Protected)

# Capability required to create each kind when no blanket grant applies
_CREATE_REQUIRES = {
    ResourceKind.MEMBERS: Capability.MANAGE_MEMBERS,
    ResourceKind.DOCUMENTS: Capability.UPLOAD_DOCUMENTS,
    ResourceKind.PROGRAMS: Capability.CREATE_PROGRAMS,
}


@dataclass(frozen=True)
class AccessibleResources:
    """What a principal may do without naming a specific target."""

    operations: Mapping[ResourceKind, frozenset[Operation]]
    can_approve_submissions: bool

    def allows(self, kind: ResourceKind, operation: Operation) -> bool:
        return operation in self.operations.get(kind, frozenset())


class ResourcePolicy:
    """Combines the resolver with per-kind ownership and visibility rules."""

    def __init__(self, resolver: PermissionResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> PermissionResolver:
        return self._resolver

    def authorize(
        self,
        principal: Principal,
        kind: ResourceKind | str,
        operation: Operation | str,
        target: ResourceTarget | None = None,
    ) -> bool:
        """Decide and audit-log a single operation."""
        allowed = self._decide(principal, kind, operation, target)
        action = f"{operation}:{kind}"
        if allowed:
            logger.info("Authorization allowed: principal=%s action=%s", principal.id, action)
        else:
            logger.warning("Authorization denied: principal=%s action=%s", principal.id, action)
        return allowed

    def guard(
        self,
        principal: Principal,
        kind: ResourceKind | str,
        operation: Operation | str,
        target: ResourceTarget | None = None,
    ) -> None:
        """Raise AuthorizationError unless ``authorize`` allows."""
        if not self.authorize(principal, kind, operation, target):
            raise AuthorizationError(f"Access denied: {operation}:{kind}", code="access_denied")

    def require(self, principal: Principal, capability: Capability) -> None:
        """Raise AuthorizationError unless the principal holds ``capability``."""
        if self._resolver.has(principal, capability):
            logger.info("Authorization allowed: principal=%s action=%s", principal.id, capability)
            return
        logger.warning("Authorization denied: principal=%s action=%s", principal.id, capability)
        raise AuthorizationError(f"Access denied: {capability}", code="access_denied")

    def visible(self, principal: Principal, items: Iterable[P]) -> list[P]:
        """Keep only the items ``principal`` may read, preserving order."""
        kept: list[P] = []
        dropped = 0
        for item in items:
            target = item.as_target()
            if self._decide(principal, target.kind, Operation.READ, target):
                kept.append(item)
            else:
                dropped += 1
        if dropped:
            logger.debug("Filtered %d unreadable items for principal=%s", dropped, principal.id)
        return kept

    def accessible_resources(self, principal: Principal) -> AccessibleResources:
        """Per-kind operations open without a target.

        Update and delete appear only with a blanket grant; ownership-based
        edits are decided per item.
        """
        operations = {
            kind: frozenset(op for op in Operation if self._decide(principal, kind, op, None))
            for kind in ResourceKind
        }
        return AccessibleResources(
            operations=MappingProxyType(operations),
            can_approve_submissions=self._resolver.has(principal, Capability.APPROVE_SUBMISSIONS),
        )

    # ------------------------------------------------------------------

    def _decide(
        self,
        principal: Principal,
        kind: ResourceKind | str,
        operation: Operation | str,
        target: ResourceTarget | None,
    ) -> bool:
        if principal.is_superadmin:
            return True
        try:
            kind = ResourceKind(kind)
            operation = Operation(operation)
        except ValueError:
            logger.error("Unknown resource operation %s:%s, denying", operation, kind)
            return False

        if self._resolver.has(principal, blanket_capability(operation, kind)):
            return True

        if operation is Operation.READ:
            return self._can_read(principal, kind, target)
        if operation is Operation.CREATE:
            return self._resolver.has(principal, _CREATE_REQUIRES[kind])

        match kind:
            case ResourceKind.MEMBERS:
                # Members are never self-managed
                return self._resolver.has(principal, Capability.MANAGE_MEMBERS)
            case ResourceKind.DOCUMENTS:
                if self._resolver.has(principal, Capability.MANAGE_ALL_DOCUMENTS):
                    return True
                return (
                    target is not None
                    and principal.owns(target.owner_id)
                    and target.state == DocumentStatus.PENDING
                )
            case ResourceKind.PROGRAMS:
                if self._resolver.has(principal, Capability.MANAGE_ALL_PROGRAMS):
                    return True
                return target is not None and principal.owns(target.owner_id)
        return False

    def _can_read(
        self,
        principal: Principal,
        kind: ResourceKind,
        target: ResourceTarget | None,
    ) -> bool:
        # Collection-level reads are open; items are filtered by visible()
        if target is None:
            return True
        if kind is ResourceKind.MEMBERS:
            if principal.owns(target.owner_id) and self._resolver.has(
                principal, Capability.READ_OWN_PROFILE
            ):
                return True
            return at_least(principal.grade, target.label)
        if target.label == GENERAL_CATEGORY:
            return True
        return at_least(principal.grade, target.label)
