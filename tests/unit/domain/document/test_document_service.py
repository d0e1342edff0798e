"""Tests for DocumentService: guarded CRUD and upload announcements."""

from unittest.mock import AsyncMock

import pytest

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.principal import Principal
from lodge.domain.auth.model.tier import Tier
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentId, DocumentKind, DocumentStatus
from lodge.domain.document.service.document import DocumentService
from lodge.domain.notification.service.fanout import NotificationFanoutService
from lodge.domain.notification.service.notification import NotificationService
from lodge.domain.notification.service.targeting import NotificationTargetResolver
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.domain.shared.authorization.resolver import PermissionResolver
from lodge.domain.shared.error import AuthorizationError, NotFoundError, StorageUnavailableError


def _make_principal(grade: Grade | None = Grade.MASTER, tier: Tier = Tier.GENERAL) -> Principal:
    return Principal(id=PrincipalId.generate(), tier=tier, grade=grade)


def _make_document(owner_id: PrincipalId, category: str = "apprentice") -> Document:
    return Document.create(
        title="Working tools",
        kind=DocumentKind.SUBMISSION,
        category=category,
        owner_id=owner_id,
    )


@pytest.fixture
def document_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def notifications() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(document_repo: AsyncMock, notifications: AsyncMock) -> DocumentService:
    return DocumentService(
        document_repo=document_repo,
        policy=ResourcePolicy(PermissionResolver()),
        notifications=notifications,
        uow=AsyncMock(),
    )


class TestUpload:
    @pytest.mark.asyncio
    async def test_master_uploads_and_announces(
        self, service: DocumentService, document_repo: AsyncMock, notifications: AsyncMock
    ) -> None:
        master = _make_principal(Grade.MASTER)

        document = await service.upload(
            master, title="Lecture notes", kind=DocumentKind.REFERENCE, category="companion"
        )

        assert document.owner_id == master.id
        assert document.status == DocumentStatus.APPROVED
        document_repo.save.assert_awaited_once_with(document)
        notifications.notify_document_uploaded.assert_awaited_once_with(document)

    @pytest.mark.asyncio
    async def test_apprentice_cannot_upload(
        self, service: DocumentService, document_repo: AsyncMock
    ) -> None:
        with pytest.raises(AuthorizationError):
            await service.upload(
                _make_principal(Grade.APPRENTICE),
                title="Essay",
                kind=DocumentKind.SUBMISSION,
                category="apprentice",
            )
        document_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_announcement_failure_does_not_fail_upload(
        self, service: DocumentService, notifications: AsyncMock
    ) -> None:
        notifications.notify_document_uploaded.side_effect = StorageUnavailableError("db down")

        document = await service.upload(
            _make_principal(Grade.MASTER),
            title="Essay",
            kind=DocumentKind.SUBMISSION,
            category="general",
        )

        assert document.status == DocumentStatus.PENDING

    @pytest.mark.asyncio
    async def test_commits_before_announcing(self) -> None:
        calls = AsyncMock()
        service = DocumentService(
            document_repo=calls.document_repo,
            policy=ResourcePolicy(PermissionResolver()),
            notifications=calls.notifications,
            uow=calls.uow,
        )

        await service.upload(
            _make_principal(), title="Minutes", kind=DocumentKind.MINUTES, category="master"
        )

        order = [name for name, *_ in calls.mock_calls]
        assert order == [
            "document_repo.save",
            "uow.commit",
            "notifications.notify_document_uploaded",
        ]

    @pytest.mark.asyncio
    async def test_directory_outage_does_not_fail_upload(self, document_repo: AsyncMock) -> None:
        directory = AsyncMock()
        directory.active_ids.side_effect = StorageUnavailableError("database is locked")
        policy = ResourcePolicy(PermissionResolver())
        uow = AsyncMock()
        service = DocumentService(
            document_repo=document_repo,
            policy=policy,
            notifications=NotificationService(
                target_resolver=NotificationTargetResolver(directory=directory),
                fanout=NotificationFanoutService(notification_repo=AsyncMock()),
                policy=policy,
            ),
            uow=uow,
        )

        document = await service.upload(
            _make_principal(), title="Minutes", kind=DocumentKind.MINUTES, category="master"
        )

        uow.commit.assert_awaited_once()
        directory.active_ids.assert_awaited_once()
        assert document.status == DocumentStatus.APPROVED


class TestReadAndList:
    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(
        self, service: DocumentService, document_repo: AsyncMock
    ) -> None:
        document_repo.get.return_value = None

        with pytest.raises(NotFoundError):
            await service.get(_make_principal(), DocumentId.generate())

    @pytest.mark.asyncio
    async def test_get_higher_grade_is_denied(
        self, service: DocumentService, document_repo: AsyncMock
    ) -> None:
        document_repo.get.return_value = _make_document(PrincipalId.generate(), category="master")

        with pytest.raises(AuthorizationError):
            await service.get(_make_principal(Grade.COMPANION), DocumentId.generate())

    @pytest.mark.asyncio
    async def test_list_visible_filters_items(
        self, service: DocumentService, document_repo: AsyncMock
    ) -> None:
        owner = PrincipalId.generate()
        visible = _make_document(owner, category="apprentice")
        hidden = _make_document(owner, category="master")
        document_repo.list.return_value = [hidden, visible]

        result = await service.list_visible(_make_principal(Grade.APPRENTICE))

        assert result == [visible]


class TestReviseAndDelete:
    @pytest.mark.asyncio
    async def test_owner_revises_pending_submission(
        self, service: DocumentService, document_repo: AsyncMock
    ) -> None:
        author = _make_principal(Grade.APPRENTICE)
        document = _make_document(author.id)
        document_repo.get.return_value = document

        result = await service.revise(author, document.id, title="Working tools, revised")

        assert result.title == "Working tools, revised"
        document_repo.save.assert_awaited_once_with(document)

    @pytest.mark.asyncio
    async def test_owner_cannot_delete_after_approval(
        self, service: DocumentService, document_repo: AsyncMock
    ) -> None:
        author = _make_principal(Grade.APPRENTICE)
        document = _make_document(author.id)
        document.moderate(DocumentStatus.APPROVED, PrincipalId.generate())
        document_repo.get.return_value = document

        with pytest.raises(AuthorizationError):
            await service.delete(author, document.id)
        document_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_deletes_any_document(
        self, service: DocumentService, document_repo: AsyncMock
    ) -> None:
        document = _make_document(PrincipalId.generate(), category="master")
        document.moderate(DocumentStatus.REJECTED, PrincipalId.generate())
        document_repo.get.return_value = document

        await service.delete(_make_principal(Grade.APPRENTICE, tier=Tier.ADMIN), document.id)

        document_repo.delete.assert_awaited_once_with(document.id)
