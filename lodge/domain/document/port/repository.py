from __future__ import annotations

from abc import abstractmethod
from typing import List, Protocol

from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentId, DocumentStatus
from lodge.domain.shared.port import Port


class DocumentRepository(Port, Protocol):
    @abstractmethod
    async def get(self, id: DocumentId) -> Document | None: ...

    @abstractmethod
    async def save(self, document: Document) -> None: ...

    @abstractmethod
    async def save_moderation(self, document: Document) -> bool:
        """Store a moderation decision only if the stored document is still pending.

        Returns False when the stored row has already been decided.
        """

    @abstractmethod
    async def delete(self, id: DocumentId) -> bool: ...

    @abstractmethod
    async def list(
        self,
        *,
        status: DocumentStatus | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[Document]: ...
