"""Tests that ResourcePolicy emits audit log entries for allow and deny decisions."""

import logging

import pytest

from lodge.domain.auth.model.grade import Grade
from lodge.domain.auth.model.office import Office
from lodge.domain.auth.model.principal import Principal
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.shared.authorization.capability import Capability
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.domain.shared.authorization.resolver import PermissionResolver
from lodge.domain.shared.authorization.resource import Operation, ResourceKind
from lodge.domain.shared.error import AuthorizationError

LOGGER = "lodge.domain.shared.authorization.policy"


def _make_principal(grade: Grade = Grade.APPRENTICE, office: Office | None = None) -> Principal:
    return Principal(id=PrincipalId.generate(), grade=grade, office=office)


@pytest.fixture
def policy() -> ResourcePolicy:
    return ResourcePolicy(PermissionResolver())


class TestAuthorizationAuditLogging:
    def test_guard_logs_allow(self, policy: ResourcePolicy, caplog: pytest.LogCaptureFixture) -> None:
        principal = _make_principal(grade=Grade.MASTER)

        with caplog.at_level(logging.DEBUG, logger=LOGGER):
            policy.guard(principal, ResourceKind.DOCUMENTS, Operation.CREATE)

        allow_messages = [r for r in caplog.records if "allowed" in r.message.lower()]
        assert len(allow_messages) == 1
        record = allow_messages[0]
        assert record.levelno == logging.INFO
        assert str(principal.id) in record.message
        assert "create:documents" in record.message

    def test_guard_logs_deny(self, policy: ResourcePolicy, caplog: pytest.LogCaptureFixture) -> None:
        principal = _make_principal(grade=Grade.APPRENTICE)

        with caplog.at_level(logging.DEBUG, logger=LOGGER):
            with pytest.raises(AuthorizationError):
                policy.guard(principal, ResourceKind.PROGRAMS, Operation.CREATE)

        deny_messages = [r for r in caplog.records if "denied" in r.message.lower()]
        assert len(deny_messages) == 1
        record = deny_messages[0]
        assert record.levelno == logging.WARNING
        assert str(principal.id) in record.message
        assert "create:programs" in record.message

    def test_require_logs_capability(
        self, policy: ResourcePolicy, caplog: pytest.LogCaptureFixture
    ) -> None:
        principal = _make_principal(office=Office.TREASURER)

        with caplog.at_level(logging.DEBUG, logger=LOGGER):
            with pytest.raises(AuthorizationError):
                policy.require(principal, Capability.SEND_NOTIFICATIONS)

        assert any(
            "denied" in r.message.lower() and "send_notifications" in r.message
            for r in caplog.records
        )

    def test_visible_does_not_audit_each_item(
        self, policy: ResourcePolicy, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger=LOGGER):
            policy.visible(_make_principal(), [])

        assert caplog.records == []
