from __future__ import annotations

from datetime import UTC, datetime

from pydantic import field_validator

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.auth.model.grade import normalize_category
from lodge.domain.program.model.value import ProgramId
from lodge.domain.shared.authorization.resource import ResourceKind, ResourceTarget
from lodge.domain.shared.error import ValidationError
from lodge.domain.shared.model.aggregate import Aggregate


class Program(Aggregate):
    """A scheduled meeting or event, scoped to a grade or open to all."""

    id: ProgramId
    topic: str
    scheduled_for: datetime
    grade: str
    owner_id: PrincipalId
    location: str | None = None
    description: str | None = None
    created_at: datetime

    @field_validator("grade", mode="before")
    @classmethod
    def _canonical_grade(cls, value: object) -> str:
        return normalize_category(value)

    @classmethod
    def create(
        cls,
        *,
        topic: str,
        scheduled_for: datetime,
        grade: str,
        owner_id: PrincipalId,
        location: str | None = None,
        description: str | None = None,
    ) -> Program:
        if not topic.strip():
            raise ValidationError("Program topic must not be empty", field="topic")
        if scheduled_for.tzinfo is None:
            scheduled_for = scheduled_for.replace(tzinfo=UTC)
        return cls(
            id=ProgramId.generate(),
            topic=topic.strip(),
            scheduled_for=scheduled_for,
            grade=grade,
            owner_id=owner_id,
            location=location,
            description=description,
            created_at=datetime.now(UTC),
        )

    def days_remaining(self, now: datetime) -> int:
        """Whole calendar days from ``now`` until the program date."""
        return (self.scheduled_for.date() - now.date()).days

    def as_target(self) -> ResourceTarget:
        return ResourceTarget(
            kind=ResourceKind.PROGRAMS,
            owner_id=self.owner_id,
            label=self.grade,
        )
