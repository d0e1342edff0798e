from typing import Any
from uuid import UUID

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentId, DocumentKind, DocumentStatus
from lodge.infrastructure.persistence.mappers._time import as_utc


def row_to_document(row: dict[str, Any]) -> Document:
    moderated_by = row.get("moderated_by")
    return Document(
        id=DocumentId(UUID(row["id"])),
        title=row["title"],
        kind=DocumentKind(row["kind"]),
        category=row["category"],
        owner_id=PrincipalId(UUID(row["owner_id"])),
        status=DocumentStatus(row["status"]),
        description=row.get("description"),
        moderated_by=PrincipalId(UUID(moderated_by)) if moderated_by else None,
        moderated_at=as_utc(row.get("moderated_at")),
        moderation_comments=row.get("moderation_comments"),
        created_at=as_utc(row["created_at"]),
        updated_at=as_utc(row["updated_at"]),
    )


def document_to_dict(document: Document) -> dict[str, Any]:
    return {
        "id": str(document.id),
        "title": document.title,
        "kind": str(document.kind),
        "category": document.category,
        "owner_id": str(document.owner_id),
        "status": str(document.status),
        "description": document.description,
        "moderated_by": str(document.moderated_by) if document.moderated_by else None,
        "moderated_at": document.moderated_at,
        "moderation_comments": document.moderation_comments,
        "created_at": document.created_at,
        "updated_at": document.updated_at,
    }
