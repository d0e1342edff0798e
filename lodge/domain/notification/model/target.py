"""Targeting specs: who an event is addressed to, before resolution."""

from typing import Annotated, Literal

from pydantic import Field

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.shared.model.value import ValueObject


class Broadcast(ValueObject):
    """Every active principal."""

    type: Literal["broadcast"] = "broadcast"
    exclude: PrincipalId | None = None


class GradeCohort(ValueObject):
    """Active principals allowed to view content of ``grade``.

    ``grade`` is a grade label or ``general`` (everyone).
    """

    type: Literal["grade_cohort"] = "grade_cohort"
    grade: str
    exclude: PrincipalId | None = None


class AdministrativeCohort(ValueObject):
    """Administrators plus office holders who may send notifications."""

    type: Literal["administrative_cohort"] = "administrative_cohort"
    exclude: PrincipalId | None = None


class Single(ValueObject):
    type: Literal["single"] = "single"
    principal_id: PrincipalId


TargetSpec = Annotated[
    Broadcast | GradeCohort | AdministrativeCohort | Single,
    Field(discriminator="type"),
]
