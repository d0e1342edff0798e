from __future__ import annotations

from datetime import UTC, datetime

from pydantic import field_validator

from lodge.domain.auth.model.grade import normalize_category
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.document.model.value import DocumentId, DocumentKind, DocumentStatus
from lodge.domain.shared.authorization.resource import ResourceKind, ResourceTarget
from lodge.domain.shared.error import InvalidStateTransition, ValidationError
from lodge.domain.shared.model.aggregate import Aggregate


class Document(Aggregate):
    id: DocumentId
    title: str
    kind: DocumentKind
    category: str
    owner_id: PrincipalId
    status: DocumentStatus
    description: str | None = None
    moderated_by: PrincipalId | None = None
    moderated_at: datetime | None = None
    moderation_comments: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("category", mode="before")
    @classmethod
    def _canonical_category(cls, value: object) -> str:
        return normalize_category(value)

    @classmethod
    def create(
        cls,
        *,
        title: str,
        kind: DocumentKind,
        category: str,
        owner_id: PrincipalId,
        description: str | None = None,
    ) -> Document:
        """New document in its entry state.

        Submissions start ``pending``; every other kind is published directly.
        """
        if not title.strip():
            raise ValidationError("Document title must not be empty", field="title")
        now = datetime.now(UTC)
        return cls(
            id=DocumentId.generate(),
            title=title.strip(),
            kind=kind,
            category=category,
            owner_id=owner_id,
            status=DocumentStatus.PENDING if kind.requires_moderation else DocumentStatus.APPROVED,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def _require_pending(self) -> None:
        if self.status != DocumentStatus.PENDING:
            raise InvalidStateTransition(
                f"Document {self.id} is {self.status}; only pending documents can be moderated"
            )

    def moderate(
        self,
        new_status: DocumentStatus,
        moderator_id: PrincipalId,
        comments: str | None = None,
    ) -> None:
        self._require_pending()
        if new_status == DocumentStatus.PENDING:
            raise InvalidStateTransition("Moderation must approve or reject the document")
        now = datetime.now(UTC)
        self.status = new_status
        self.moderated_by = moderator_id
        self.moderated_at = now
        self.moderation_comments = comments or None
        self.updated_at = now

    def revise(self, *, title: str | None = None, description: str | None = None) -> None:
        if title is not None:
            if not title.strip():
                raise ValidationError("Document title must not be empty", field="title")
            self.title = title.strip()
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)

    def as_target(self) -> ResourceTarget:
        return ResourceTarget(
            kind=ResourceKind.DOCUMENTS,
            owner_id=self.owner_id,
            label=self.category,
            state=self.status,
        )
