"""Elected/appointed offices, orthogonal to grade."""

from enum import StrEnum

from lodge.domain.shared.error import UnknownOfficeError


class Office(StrEnum):
    PRESIDING_OFFICER = "presiding_officer"
    SENIOR_WARDEN = "senior_warden"
    JUNIOR_WARDEN = "junior_warden"
    SECRETARY = "secretary"
    TREASURER = "treasurer"
    ORATOR = "orator"
    MASTER_OF_CEREMONIES = "master_of_ceremonies"
    HOSPITALLER = "hospitaller"

    @classmethod
    def parse(cls, value: object) -> "Office":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownOfficeError(value) from None
