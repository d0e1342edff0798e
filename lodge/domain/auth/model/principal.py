"""Principal: authenticated actor presented to the authorization engine."""

from dataclasses import dataclass

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.tier import Tier
from lodge.domain.auth.model.value import PrincipalId


@dataclass(frozen=True)
class Principal:
    """The authenticated identity of the current requester.

    Produced upstream from a verified credential and immutable for the
    duration of a decision. ``grade`` may be None for accounts not tied to
    a member record; such principals see only ``general`` content.
    """

    id: PrincipalId
    tier: Tier = Tier.GENERAL
    grade: Grade | None = None
    office: Office | None = None
    active: bool = True

    @property
    def is_superadmin(self) -> bool:
        return self.tier == Tier.SUPERADMIN

    def owns(self, owner_id: PrincipalId | None) -> bool:
        return owner_id is not None and owner_id == self.id
