"""NotificationTargetResolver: turns a targeting spec into a recipient set."""

import logging

from lodge.domain.auth.model.grade import GENERAL_CATEGORY, Grade, grades_at_or_above
from lodge.domain.auth.model.tier import Tier
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.notification.model.target import (
    AdministrativeCohort,
    Broadcast,
    GradeCohort,
    Single,
    TargetSpec,
)
from lodge.domain.notification.port.directory import PrincipalDirectory
from lodge.domain.shared.authorization.capability import Capability
from lodge.domain.shared.authorization.catalog import CATALOG, PermissionCatalog
from lodge.domain.shared.error import UnknownGradeError
from lodge.domain.shared.service import Service

logger = logging.getLogger(__name__)

_ADMIN_TIERS = frozenset({Tier.ADMIN, Tier.SUPERADMIN})


class NotificationTargetResolver(Service):
    """Computes who receives an event. One directory query per spec."""

    directory: PrincipalDirectory
    catalog: PermissionCatalog = CATALOG

    async def resolve(self, spec: TargetSpec) -> frozenset[PrincipalId]:
        match spec:
            case Single(principal_id=principal_id):
                return frozenset({principal_id})
            case Broadcast():
                ids = await self.directory.active_ids()
            case GradeCohort(grade=grade):
                if grade.strip().lower() == GENERAL_CATEGORY:
                    ids = await self.directory.active_ids()
                else:
                    try:
                        cohort = grades_at_or_above(Grade.parse(grade))
                    except UnknownGradeError as e:
                        logger.error("Grade cohort resolved to nobody: %s", e.message)
                        return frozenset()
                    ids = await self.directory.active_ids(grades=cohort)
            case AdministrativeCohort():
                ids = await self.directory.active_ids(
                    tiers=_ADMIN_TIERS,
                    offices=self.catalog.offices_granting(Capability.SEND_NOTIFICATIONS),
                )
            case _:
                raise TypeError(f"Unsupported target spec: {spec!r}")

        recipients = frozenset(ids)
        if spec.exclude is not None:
            recipients -= {spec.exclude}
        logger.debug("Resolved %s to %d recipients", spec.type, len(recipients))
        return recipients
