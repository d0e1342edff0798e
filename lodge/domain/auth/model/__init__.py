"""Auth domain models."""

from .grade import (
    GENERAL_CATEGORY,
    Grade,
    at_least,
    grades_at_or_above,
    normalize_category,
)
from .office import Office
from .principal import Principal
from .tier import Tier
from .value import PrincipalId

__all__ = [
    "GENERAL_CATEGORY",
    "Grade",
    "Office",
    "Principal",
    "PrincipalId",
    "Tier",
    "at_least",
    "grades_at_or_above",
    "normalize_category",
]
