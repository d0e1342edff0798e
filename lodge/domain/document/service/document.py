import logging

from lodge.domain.auth.model.principal import Principal
from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentId, DocumentKind
from lodge.domain.document.port.repository import DocumentRepository
from lodge.domain.notification.service.notification import NotificationService
from lodge.domain.shared.authorization.guarded import Guarded
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.domain.shared.authorization.resource import Operation, ResourceKind
from lodge.domain.shared.error import LodgeError, NotFoundError
from lodge.domain.shared.service import Service
from lodge.domain.shared.uow import UnitOfWork

logger = logging.getLogger(__name__)


class DocumentService(Service):
    document_repo: DocumentRepository
    policy: ResourcePolicy
    notifications: NotificationService
    uow: UnitOfWork

    async def upload(
        self,
        principal: Principal,
        *,
        title: str,
        kind: DocumentKind,
        category: str,
        description: str | None = None,
    ) -> Document:
        self.policy.guard(principal, ResourceKind.DOCUMENTS, Operation.CREATE)
        document = Document.create(
            title=title,
            kind=kind,
            category=category,
            owner_id=principal.id,
            description=description,
        )
        await self.document_repo.save(document)
        await self.uow.commit()
        logger.info(
            "Document uploaded: id=%s kind=%s status=%s", document.id, kind, document.status
        )

        try:
            await self.notifications.notify_document_uploaded(document)
        except LodgeError as e:
            logger.warning("Upload notification for document %s failed: %s", document.id, e)
        return document

    async def load(self, principal: Principal, id: DocumentId) -> Guarded[Document]:
        document = await self.document_repo.get(id)
        if document is None:
            raise NotFoundError(f"Document not found: {id}")
        return Guarded(document, principal, self.policy)

    async def get(self, principal: Principal, id: DocumentId) -> Document:
        return (await self.load(principal, id)).check(Operation.READ)

    async def list_visible(
        self,
        principal: Principal,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Document]:
        self.policy.guard(principal, ResourceKind.DOCUMENTS, Operation.READ)
        documents = await self.document_repo.list(limit=limit, offset=offset)
        return self.policy.visible(principal, documents)

    async def revise(
        self,
        principal: Principal,
        id: DocumentId,
        *,
        title: str | None = None,
        description: str | None = None,
    ) -> Document:
        document = (await self.load(principal, id)).check(Operation.UPDATE)
        document.revise(title=title, description=description)
        await self.document_repo.save(document)
        return document

    async def delete(self, principal: Principal, id: DocumentId) -> None:
        document = (await self.load(principal, id)).check(Operation.DELETE)
        await self.document_repo.delete(document.id)
        logger.info("Document deleted: id=%s by=%s", document.id, principal.id)
