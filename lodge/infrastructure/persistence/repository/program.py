from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lodge.domain.program.model.aggregate import Program
from lodge.domain.program.model.value import ProgramId
from lodge.domain.program.port.repository import ProgramRepository
from lodge.infrastructure.persistence.mappers.program import program_to_dict, row_to_program
from lodge.infrastructure.persistence.tables import programs_table


class SqlProgramRepository(ProgramRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, id: ProgramId) -> Program | None:
        stmt = select(programs_table).where(programs_table.c.id == str(id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_program(dict(row)) if row else None

    async def save(self, program: Program) -> None:
        values = program_to_dict(program)

        stmt = select(programs_table.c.id).where(programs_table.c.id == values["id"])
        existing = (await self.session.execute(stmt)).first()

        if existing:
            stmt = update(programs_table).where(programs_table.c.id == values["id"]).values(**values)
        else:
            stmt = insert(programs_table).values(**values)

        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, id: ProgramId) -> bool:
        stmt = delete(programs_table).where(programs_table.c.id == str(id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def list_between(self, start: datetime, end: datetime) -> List[Program]:
        stmt = (
            select(programs_table)
            .where(programs_table.c.scheduled_for >= start)
            .where(programs_table.c.scheduled_for < end)
            .order_by(programs_table.c.scheduled_for.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_program(dict(r)) for r in result.mappings().all()]
