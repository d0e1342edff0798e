from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import List, Protocol

from lodge.domain.program.model.aggregate import Program
from lodge.domain.program.model.value import ProgramId
from lodge.domain.shared.port import Port


class ProgramRepository(Port, Protocol):
    @abstractmethod
    async def get(self, id: ProgramId) -> Program | None: ...

    @abstractmethod
    async def save(self, program: Program) -> None: ...

    @abstractmethod
    async def delete(self, id: ProgramId) -> bool: ...

    @abstractmethod
    async def list_between(self, start: datetime, end: datetime) -> List[Program]:
        """Programs scheduled in ``[start, end)``, earliest first."""
        ...
