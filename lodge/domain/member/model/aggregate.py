from __future__ import annotations

from datetime import datetime

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.shared.authorization.resource import ResourceKind, ResourceTarget
from lodge.domain.shared.model.aggregate import Aggregate


class Member(Aggregate):
    """Member record. Its id is the id of the principal that logs in as it."""

    id: PrincipalId
    full_name: str
    grade: Grade
    office: Office | None = None
    email: str | None = None
    joined_at: datetime | None = None

    def as_target(self) -> ResourceTarget:
        return ResourceTarget(
            kind=ResourceKind.MEMBERS,
            owner_id=self.id,
            label=self.grade.label,
        )
