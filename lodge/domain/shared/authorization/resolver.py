"""PermissionResolver: merges catalog rows into an effective capability set."""

from __future__ import annotations

import logging

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.principal import Principal
from lodge.domain.auth.model.tier import Tier
from lodge.domain.shared.authorization.capability import Capability
from lodge.domain.shared.authorization.catalog import CATALOG, PermissionCatalog
from lodge.domain.shared.error import UnknownGradeError, UnknownOfficeError

logger = logging.getLogger(__name__)

_ALL = frozenset(Capability)


class PermissionResolver:
    """Pure point-queries over the catalog. No I/O, safe to share."""

    def __init__(self, catalog: PermissionCatalog = CATALOG) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> PermissionCatalog:
        return self._catalog

    def effective(self, principal: Principal) -> frozenset[Capability]:
        """Union of grade, office and (for admins) tier grants.

        Superadmin resolves to every capability. Grade or office values the
        catalog does not know contribute nothing.
        """
        if principal.is_superadmin:
            return _ALL

        grants: set[Capability] = set()
        if principal.grade is not None:
            grants |= self._grade_grants(principal)
        if principal.office is not None:
            grants |= self._office_grants(principal)
        if principal.tier == Tier.ADMIN:
            grants |= self._catalog.tier_grants.get(Tier.ADMIN, frozenset())
        return frozenset(grants)

    def has(self, principal: Principal, capability: Capability | str) -> bool:
        if principal.is_superadmin:
            return True
        if not isinstance(capability, Capability):
            capability = Capability.lookup(capability)
            if capability is None:
                return False
        return capability in self.effective(principal)

    def _grade_grants(self, principal: Principal) -> frozenset[Capability]:
        try:
            grade = Grade.parse(principal.grade)
        except UnknownGradeError as e:
            logger.error("Ignoring grade grants for principal=%s: %s", principal.id, e.message)
            return frozenset()
        return self._lookup(self._catalog.grade_grants, grade, principal)

    def _office_grants(self, principal: Principal) -> frozenset[Capability]:
        try:
            office = Office.parse(principal.office)
        except UnknownOfficeError as e:
            logger.error("Ignoring office grants for principal=%s: %s", principal.id, e.message)
            return frozenset()
        return self._lookup(self._catalog.office_grants, office, principal)

    @staticmethod
    def _lookup(table, key, principal: Principal) -> frozenset[Capability]:
        grants = table.get(key)
        if grants is None:
            logger.error("Catalog has no row for %s (principal=%s)", key, principal.id)
            return frozenset()
        return grants
