from __future__ import annotations

from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentId, DocumentStatus
from lodge.domain.document.port.repository import DocumentRepository
from lodge.infrastructure.persistence.mappers.document import (
    document_to_dict,
    row_to_document,
)
from lodge.infrastructure.persistence.tables import documents_table


class SqlDocumentRepository(DocumentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, id: DocumentId) -> Document | None:
        stmt = select(documents_table).where(documents_table.c.id == str(id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_document(dict(row)) if row else None

    async def save(self, document: Document) -> None:
        values = document_to_dict(document)

        stmt = select(documents_table.c.id).where(documents_table.c.id == values["id"])
        existing = (await self.session.execute(stmt)).first()

        if existing:
            stmt = (
                update(documents_table)
                .where(documents_table.c.id == values["id"])
                .values(**values)
            )
        else:
            stmt = insert(documents_table).values(**values)

        await self.session.execute(stmt)
        await self.session.flush()

    async def save_moderation(self, document: Document) -> bool:
        values = document_to_dict(document)
        stmt = (
            update(documents_table)
            .where(documents_table.c.id == values["id"])
            .where(documents_table.c.status == str(DocumentStatus.PENDING))
            .values(
                status=values["status"],
                moderated_by=values["moderated_by"],
                moderated_at=values["moderated_at"],
                moderation_comments=values["moderation_comments"],
                updated_at=values["updated_at"],
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete(self, id: DocumentId) -> bool:
        stmt = delete(documents_table).where(documents_table.c.id == str(id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def list(
        self,
        *,
        status: DocumentStatus | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[Document]:
        stmt = select(documents_table).order_by(documents_table.c.created_at.desc())
        if status is not None:
            stmt = stmt.where(documents_table.c.status == str(status))
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_document(dict(r)) for r in result.mappings().all()]
