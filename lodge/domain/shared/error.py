"""Error hierarchy for the lodge back office.

Error layers:
- LodgeError: Base class for all lodge errors
- DomainError: Business rule violations, denied access, bad input (4xx responses)
- InfrastructureError: Storage failures, misconfiguration, partial delivery (503 responses)

Every error carries a human message and a machine-readable ``code`` so the
surrounding CRUD layer can map it without string matching.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lodge.domain.auth.model.value import PrincipalId


class LodgeError(Exception):
    """Base class for all lodge errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(LodgeError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class InvalidStateTransition(InvalidStateError):
    """A lifecycle transition was attempted from a state that does not allow it.

    Surfaced as a client error and never retried.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code="invalid_state_transition")


class AuthorizationError(DomainError):
    """Principal not authorized for this operation. Never retried."""


class UnknownGradeError(DomainError):
    """A grade label outside the closed hierarchy reached the engine.

    This is a data-integrity defect, not a user error. Decision functions
    catch it, log it and fail closed.
    """

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown grade: {value!r}", code="unknown_grade")
        self.value = value


class UnknownOfficeError(DomainError):
    """An office label outside the closed set reached the engine."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown office: {value!r}", code="unknown_office")
        self.value = value


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(LodgeError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database) is unavailable."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""


class PartialDispatchFailure(InfrastructureError):
    """Some per-recipient notification writes failed.

    Records already written are kept. ``failed`` holds the recipients that
    can be retried; duplicates on retry are tolerated.
    """

    def __init__(
        self,
        created: int,
        requested: int,
        failed: Iterable["PrincipalId"],
    ) -> None:
        self.created = created
        self.requested = requested
        self.failed: frozenset[PrincipalId] = frozenset(failed)
        super().__init__(
            f"Notification dispatch incomplete: {created}/{requested} delivered, "
            f"{len(self.failed)} failed",
            code="partial_dispatch_failure",
        )
