"""DocumentModerationWorkflow: pending submissions become approved or rejected."""

import logging

from lodge.domain.auth.model.principal import Principal
from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentStatus
from lodge.domain.document.port.repository import DocumentRepository
from lodge.domain.notification.service.notification import NotificationService
from lodge.domain.shared.authorization.capability import Capability
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.domain.shared.error import InvalidStateTransition, LodgeError
from lodge.domain.shared.service import Service
from lodge.domain.shared.uow import UnitOfWork

logger = logging.getLogger(__name__)


class DocumentModerationWorkflow(Service):
    document_repo: DocumentRepository
    policy: ResourcePolicy
    notifications: NotificationService
    uow: UnitOfWork

    async def transition(
        self,
        document: Document,
        new_status: DocumentStatus,
        moderator: Principal,
        comments: str | None = None,
    ) -> Document:
        """Approve or reject a pending document.

        Raises:
            AuthorizationError: moderator lacks approve_submissions.
            InvalidStateTransition: document is not pending, or was decided by
                another moderator since it was loaded, or new_status is pending.
        """
        self.policy.require(moderator, Capability.APPROVE_SUBMISSIONS)
        document.moderate(new_status, moderator.id, comments)
        if not await self.document_repo.save_moderation(document):
            await self.uow.rollback()
            raise InvalidStateTransition(
                f"Document {document.id} was already moderated; only pending documents can be"
                " moderated"
            )
        await self.uow.commit()
        logger.info(
            "Document moderated: id=%s status=%s moderator=%s",
            document.id,
            document.status,
            moderator.id,
        )

        # The transition stands even if the author cannot be told
        try:
            await self.notifications.notify_document_moderated(document)
        except LodgeError as e:
            logger.warning("Moderation notification for document %s failed: %s", document.id, e)
        return document

    async def approve(
        self, document: Document, moderator: Principal, comments: str | None = None
    ) -> Document:
        return await self.transition(document, DocumentStatus.APPROVED, moderator, comments)

    async def reject(
        self, document: Document, moderator: Principal, comments: str | None = None
    ) -> Document:
        return await self.transition(document, DocumentStatus.REJECTED, moderator, comments)
