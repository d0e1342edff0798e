"""PermissionCatalog: static grant tables per tier, grade and office.

Built once at import time and never mutated. A future editable-roles
feature should swap in a new catalog instance rather than edit this one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.tier import Tier
from lodge.domain.shared.authorization.capability import Capability as C
from lodge.domain.shared.error import ConfigurationError


def _freeze(table: Mapping) -> Mapping:
    return MappingProxyType({key: frozenset(grants) for key, grants in table.items()})


@dataclass(frozen=True)
class PermissionCatalog:
    """Read-only lookup tables mapping one axis value to its grants.

    SUPERADMIN has no row: it is a wildcard checked before any lookup.
    """

    tier_grants: Mapping[Tier, frozenset[C]]
    grade_grants: Mapping[Grade, frozenset[C]]
    office_grants: Mapping[Office, frozenset[C]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "tier_grants", _freeze(self.tier_grants))
        object.__setattr__(self, "grade_grants", _freeze(self.grade_grants))
        object.__setattr__(self, "office_grants", _freeze(self.office_grants))

    def offices_granting(self, capability: C) -> frozenset[Office]:
        """Offices whose grant row contains ``capability``."""
        return frozenset(
            office for office, grants in self.office_grants.items() if capability in grants
        )

    def validate_coverage(self) -> None:
        """Startup check: every grade, office and non-wildcard tier has a row."""
        problems: list[str] = []

        if Tier.SUPERADMIN in self.tier_grants:
            problems.append("superadmin must not have a tier row (it is a wildcard)")
        missing_tiers = {t for t in Tier if t != Tier.SUPERADMIN} - set(self.tier_grants)
        if missing_tiers:
            problems.append(f"tiers without grants: {sorted(str(t) for t in missing_tiers)}")
        missing_grades = set(Grade) - set(self.grade_grants)
        if missing_grades:
            problems.append(f"grades without grants: {sorted(g.label for g in missing_grades)}")
        missing_offices = set(Office) - set(self.office_grants)
        if missing_offices:
            problems.append(f"offices without grants: {sorted(str(o) for o in missing_offices)}")

        if problems:
            raise ConfigurationError("Permission catalog incomplete: " + "; ".join(problems))


CATALOG = PermissionCatalog(
    tier_grants={
        Tier.GENERAL: set(),
        Tier.ADMIN: {
            C.MANAGE_MEMBERS,
            C.MANAGE_USERS,
            C.MANAGE_ALL_DOCUMENTS,
            C.MANAGE_ALL_PROGRAMS,
            C.VIEW_ALL_REPORTS,
            C.SYSTEM_CONFIGURATION,
            C.BACKUP_RESTORE,
            C.AUDIT_LOGS,
            # Administrators see every grade's content
            C.READ_MEMBERS,
            C.READ_DOCUMENTS,
            C.READ_PROGRAMS,
        },
    },
    grade_grants={
        Grade.APPRENTICE: {
            C.READ_OWN_PROFILE,
            C.CONFIRM_ATTENDANCE,
        },
        Grade.COMPANION: {
            C.READ_OWN_PROFILE,
            C.CONFIRM_ATTENDANCE,
        },
        Grade.MASTER: {
            C.READ_MEMBERS,
            C.READ_DOCUMENTS,
            C.READ_PROGRAMS,
            C.UPLOAD_DOCUMENTS,
            C.CREATE_PROGRAMS,
            C.MANAGE_ATTENDANCE,
            C.CONFIRM_ATTENDANCE,
        },
    },
    office_grants={
        Office.PRESIDING_OFFICER: {
            C.APPROVE_SUBMISSIONS,
            C.MANAGE_ALL_PROGRAMS,
            C.VIEW_ALL_REPORTS,
            C.SEND_NOTIFICATIONS,
        },
        Office.SENIOR_WARDEN: {
            C.MANAGE_APPRENTICE_PROGRAMS,
            C.MANAGE_APPRENTICE_ATTENDANCE,
        },
        Office.JUNIOR_WARDEN: {
            C.MANAGE_COMPANION_PROGRAMS,
            C.MANAGE_COMPANION_ATTENDANCE,
        },
        Office.SECRETARY: {
            C.MANAGE_MEMBERS,
            C.MANAGE_ATTENDANCE,
            C.EXPORT_REPORTS,
            C.SEND_NOTIFICATIONS,
        },
        Office.TREASURER: {
            C.VIEW_FINANCIAL_REPORTS,
            C.MANAGE_MEMBER_STATUS,
        },
        Office.ORATOR: {
            C.UPLOAD_DOCUMENTS,
            C.APPROVE_SUBMISSIONS,
        },
        Office.MASTER_OF_CEREMONIES: {
            C.MANAGE_PROGRAMS,
            C.COORDINATE_EVENTS,
        },
        Office.HOSPITALLER: {
            C.VIEW_MEMBER_HEALTH,
            C.SEND_HEALTH_NOTIFICATIONS,
        },
    },
)
