from typing import Any
from uuid import UUID

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.program.model.aggregate import Program
from lodge.domain.program.model.value import ProgramId
from lodge.infrastructure.persistence.mappers._time import as_utc


def row_to_program(row: dict[str, Any]) -> Program:
    return Program(
        id=ProgramId(UUID(row["id"])),
        topic=row["topic"],
        scheduled_for=as_utc(row["scheduled_for"]),
        grade=row["grade"],
        owner_id=PrincipalId(UUID(row["owner_id"])),
        location=row.get("location"),
        description=row.get("description"),
        created_at=as_utc(row["created_at"]),
    )


def program_to_dict(program: Program) -> dict[str, Any]:
    return {
        "id": str(program.id),
        "topic": program.topic,
        "scheduled_for": program.scheduled_for,
        "grade": program.grade,
        "owner_id": str(program.owner_id),
        "location": program.location,
        "description": program.description,
        "created_at": program.created_at,
    }
