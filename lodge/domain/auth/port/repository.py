from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from lodge.domain.auth.model.principal import Principal
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.shared.port import Port


class PrincipalRepository(Port, Protocol):
    @abstractmethod
    async def get(self, id: PrincipalId) -> Principal | None: ...

    @abstractmethod
    async def save(self, principal: Principal) -> None: ...
