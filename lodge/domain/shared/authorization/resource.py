"""Resource kinds, operations and the target descriptor the policy decides on."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from lodge.domain.auth.model.value import PrincipalId


class ResourceKind(StrEnum):
    """Resource families the policy decides on.

    Programs are what members call events, so ``event`` and ``events`` parse
    as PROGRAMS. Singular spellings of every kind are accepted too.
    """

    MEMBERS = "members"
    DOCUMENTS = "documents"
    PROGRAMS = "programs"

    @classmethod
    def _missing_(cls, value: object) -> "ResourceKind | None":
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        key = _KIND_ALIASES.get(key, key)
        for kind in cls:
            if key in (kind.value, kind.value[:-1]):
                return kind
        return None


_KIND_ALIASES = {"event": "programs", "events": "programs"}


class Operation(StrEnum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_write(self) -> bool:
        return self is not Operation.READ


def blanket_capability(operation: Operation, kind: ResourceKind) -> str:
    """Token of the generic grant covering ``operation`` on every ``kind``."""
    return f"{operation}_{kind}"


@dataclass(frozen=True)
class ResourceTarget:
    """The object being acted on, reduced to what authorization needs.

    ``label`` is a grade label or the ``general`` category. ``state`` is the
    lifecycle state for stateful kinds (documents), otherwise None.
    """

    kind: ResourceKind
    owner_id: "PrincipalId | None" = None
    label: str | None = None
    state: str | None = None


class Protected(Protocol):
    """Anything that can describe itself as a ResourceTarget."""

    def as_target(self) -> ResourceTarget: ...
