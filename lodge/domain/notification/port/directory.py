from __future__ import annotations

from abc import abstractmethod
from collections.abc import Collection
from typing import Protocol

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.tier import Tier
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.shared.port import Port


class PrincipalDirectory(Port, Protocol):
    """Read-only enumeration of active principals for notification targeting."""

    @abstractmethod
    async def active_ids(
        self,
        *,
        grades: Collection[Grade] | None = None,
        tiers: Collection[Tier] | None = None,
        offices: Collection[Office] | None = None,
    ) -> set[PrincipalId]:
        """Ids of active principals matching the filters.

        ``grades`` restricts the population. ``tiers`` and ``offices`` are
        alternatives: a principal matches if its tier is in ``tiers`` or its
        office is in ``offices``. Omitted filters do not restrict.
        """
        ...
