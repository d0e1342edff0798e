"""Tests for the Document aggregate lifecycle."""

import pytest

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentKind, DocumentStatus
from lodge.domain.shared.authorization.resource import ResourceKind
from lodge.domain.shared.error import (
    InvalidStateError,
    InvalidStateTransition,
    UnknownGradeError,
    ValidationError,
)


def _make_document(kind: DocumentKind = DocumentKind.SUBMISSION, category: str = "companion") -> Document:
    return Document.create(
        title="Symbolism of the pillars",
        kind=kind,
        category=category,
        owner_id=PrincipalId.generate(),
    )


class TestEntryState:
    def test_submission_enters_pending(self) -> None:
        assert _make_document(DocumentKind.SUBMISSION).status == DocumentStatus.PENDING

    @pytest.mark.parametrize(
        "kind", [DocumentKind.REFERENCE, DocumentKind.MINUTES, DocumentKind.RITUAL]
    )
    def test_other_kinds_enter_approved(self, kind: DocumentKind) -> None:
        assert _make_document(kind).status == DocumentStatus.APPROVED

    def test_category_is_canonicalized(self) -> None:
        assert _make_document(category="General").category == "general"
        assert _make_document(category="MASTER").category == "master"

    def test_unknown_category_is_rejected(self) -> None:
        with pytest.raises(UnknownGradeError):
            _make_document(category="fourth")

    def test_blank_title_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Document.create(
                title="  ",
                kind=DocumentKind.REFERENCE,
                category="general",
                owner_id=PrincipalId.generate(),
            )


class TestModerate:
    def test_approve_records_moderation(self) -> None:
        document = _make_document()
        moderator = PrincipalId.generate()

        document.moderate(DocumentStatus.APPROVED, moderator, "Well argued")

        assert document.status == DocumentStatus.APPROVED
        assert document.moderated_by == moderator
        assert document.moderated_at is not None
        assert document.moderation_comments == "Well argued"

    def test_empty_comments_are_stored_as_none(self) -> None:
        document = _make_document()
        document.moderate(DocumentStatus.REJECTED, PrincipalId.generate(), "")
        assert document.moderation_comments is None

    @pytest.mark.parametrize("terminal", [DocumentStatus.APPROVED, DocumentStatus.REJECTED])
    def test_terminal_states_cannot_be_left(self, terminal: DocumentStatus) -> None:
        document = _make_document()
        document.moderate(terminal, PrincipalId.generate())

        with pytest.raises(InvalidStateTransition) as exc_info:
            document.moderate(DocumentStatus.APPROVED, PrincipalId.generate())

        assert exc_info.value.code == "invalid_state_transition"
        assert isinstance(exc_info.value, InvalidStateError)

    def test_cannot_moderate_to_pending(self) -> None:
        with pytest.raises(InvalidStateTransition):
            _make_document().moderate(DocumentStatus.PENDING, PrincipalId.generate())

    def test_published_reference_is_not_moderatable(self) -> None:
        with pytest.raises(InvalidStateTransition):
            _make_document(DocumentKind.REFERENCE).moderate(
                DocumentStatus.REJECTED, PrincipalId.generate()
            )


class TestAsTarget:
    def test_target_carries_policy_inputs(self) -> None:
        document = _make_document(category="apprentice")

        target = document.as_target()

        assert target.kind == ResourceKind.DOCUMENTS
        assert target.owner_id == document.owner_id
        assert target.label == "apprentice"
        assert target.state == DocumentStatus.PENDING
