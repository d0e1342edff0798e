"""Two moderators deciding the same submission from separate sessions."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.principal import Principal
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentKind, DocumentStatus
from lodge.domain.document.service.moderation import DocumentModerationWorkflow
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.domain.shared.authorization.resolver import PermissionResolver
from lodge.domain.shared.error import InvalidStateTransition
from lodge.infrastructure.persistence.repository.document import SqlDocumentRepository
from lodge.infrastructure.persistence.repository.principal import SqlPrincipalRepository
from lodge.infrastructure.persistence.uow import SqlUnitOfWork


def _make_workflow(session: AsyncSession, notifications: AsyncMock) -> DocumentModerationWorkflow:
    return DocumentModerationWorkflow(
        document_repo=SqlDocumentRepository(session),
        policy=ResourcePolicy(PermissionResolver()),
        notifications=notifications,
        uow=SqlUnitOfWork(session),
    )


def _make_moderator(office: Office) -> Principal:
    return Principal(id=PrincipalId.generate(), grade=Grade.MASTER, office=office)


@pytest.mark.asyncio
async def test_second_moderator_cannot_overwrite_decision(
    session_factory: async_sessionmaker[AsyncSession],
):
    author = Principal(id=PrincipalId.generate(), grade=Grade.COMPANION)
    submission = Document.create(
        title="The winding staircase",
        kind=DocumentKind.SUBMISSION,
        category="companion",
        owner_id=author.id,
    )
    async with session_factory() as session:
        await SqlPrincipalRepository(session).save(author)
        await SqlDocumentRepository(session).save(submission)
        await session.commit()

    notifications = AsyncMock()
    async with session_factory() as first, session_factory() as second:
        stale_first = await SqlDocumentRepository(first).get(submission.id)
        stale_second = await SqlDocumentRepository(second).get(submission.id)
        assert stale_first is not None and stale_second is not None

        await _make_workflow(first, notifications).approve(
            stale_first, _make_moderator(Office.ORATOR)
        )
        with pytest.raises(InvalidStateTransition):
            await _make_workflow(second, notifications).reject(
                stale_second, _make_moderator(Office.PRESIDING_OFFICER)
            )

    async with session_factory() as session:
        stored = await SqlDocumentRepository(session).get(submission.id)

    assert stored is not None
    assert stored.status == DocumentStatus.APPROVED
    notifications.notify_document_moderated.assert_awaited_once()
