from typing import Any
from uuid import UUID

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.principal import Principal
from lodge.domain.auth.model.tier import Tier
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.shared.error import UnknownGradeError, UnknownOfficeError


def row_to_principal(row: dict[str, Any]) -> Principal:
    """Convert database row to Principal.

    Unknown grade or office labels are passed through as raw strings so
    the resolver can log them and fail closed.
    """
    grade: Any = row.get("grade")
    if grade is not None:
        try:
            grade = Grade.parse(grade)
        except UnknownGradeError:
            pass
    office: Any = row.get("office")
    if office is not None:
        try:
            office = Office.parse(office)
        except UnknownOfficeError:
            pass
    return Principal(
        id=PrincipalId(UUID(row["id"])),
        tier=Tier(row["tier"]),
        grade=grade,
        office=office,
        active=bool(row["active"]),
    )


def principal_to_dict(principal: Principal) -> dict[str, Any]:
    return {
        "id": str(principal.id),
        "tier": str(principal.tier),
        "grade": principal.grade.label if isinstance(principal.grade, Grade) else principal.grade,
        "office": str(principal.office) if principal.office is not None else None,
        "active": principal.active,
    }
