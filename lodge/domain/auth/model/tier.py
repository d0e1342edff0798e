"""Coarse system tiers."""

from enum import StrEnum


class Tier(StrEnum):
    """System tier of a principal.

    SUPERADMIN is total authority and bypasses every other check.
    """

    GENERAL = "general"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @property
    def is_administrative(self) -> bool:
        return self in (Tier.ADMIN, Tier.SUPERADMIN)
