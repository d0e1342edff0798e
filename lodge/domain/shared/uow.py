from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Transaction boundary of the current unit of work.

    Services commit once an aggregate change must be durable before side
    effects that run in their own transactions, such as notification fan-out.
    """

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...
