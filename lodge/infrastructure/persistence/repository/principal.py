from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import insert, or_, select, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.principal import Principal
from lodge.domain.auth.model.tier import Tier
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.auth.port.repository import PrincipalRepository
from lodge.domain.notification.port.directory import PrincipalDirectory
from lodge.domain.shared.error import StorageUnavailableError
from lodge.infrastructure.persistence.mappers.principal import (
    principal_to_dict,
    row_to_principal,
)
from lodge.infrastructure.persistence.tables import principals_table


class SqlPrincipalRepository(PrincipalRepository, PrincipalDirectory):
    """Principal storage and the active-principal directory, in one table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, id: PrincipalId) -> Principal | None:
        stmt = select(principals_table).where(principals_table.c.id == str(id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_principal(dict(row)) if row else None

    async def save(self, principal: Principal) -> None:
        values = principal_to_dict(principal)

        stmt = select(principals_table.c.id).where(principals_table.c.id == values["id"])
        existing = (await self.session.execute(stmt)).first()

        if existing:
            stmt = (
                update(principals_table)
                .where(principals_table.c.id == values["id"])
                .values(**values)
            )
        else:
            stmt = insert(principals_table).values(**values)

        await self.session.execute(stmt)
        await self.session.flush()

    async def active_ids(
        self,
        *,
        grades: Collection[Grade] | None = None,
        tiers: Collection[Tier] | None = None,
        offices: Collection[Office] | None = None,
    ) -> set[PrincipalId]:
        stmt = select(principals_table.c.id).where(principals_table.c.active.is_(True))
        if grades is not None:
            stmt = stmt.where(principals_table.c.grade.in_([g.label for g in grades]))

        alternatives = []
        if tiers is not None:
            alternatives.append(principals_table.c.tier.in_([str(t) for t in tiers]))
        if offices is not None:
            alternatives.append(principals_table.c.office.in_([str(o) for o in offices]))
        if alternatives:
            stmt = stmt.where(or_(*alternatives))

        try:
            result = await self.session.execute(stmt)
        except OperationalError as e:
            raise StorageUnavailableError(f"Could not query active principals: {e}") from e
        return {PrincipalId(r) for r in result.scalars().all()}
