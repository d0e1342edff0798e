from enum import StrEnum

from lodge.domain.shared.model.value import Identifier


class DocumentId(Identifier):
    pass


class DocumentStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DocumentKind(StrEnum):
    """Kinds of document. Only member submissions go through moderation."""

    SUBMISSION = "submission"
    REFERENCE = "reference"
    MINUTES = "minutes"
    RITUAL = "ritual"

    @property
    def requires_moderation(self) -> bool:
        return self is DocumentKind.SUBMISSION
