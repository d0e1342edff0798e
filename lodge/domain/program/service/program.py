import logging
from datetime import datetime

from lodge.domain.auth.model.principal import Principal
from lodge.domain.notification.service.notification import NotificationService
from lodge.domain.program.model.aggregate import Program
from lodge.domain.program.model.value import ProgramId
from lodge.domain.program.port.repository import ProgramRepository
from lodge.domain.shared.authorization.guarded import Guarded
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.domain.shared.authorization.resource import Operation, ResourceKind
from lodge.domain.shared.error import LodgeError, NotFoundError
from lodge.domain.shared.service import Service
from lodge.domain.shared.uow import UnitOfWork

logger = logging.getLogger(__name__)


class ProgramService(Service):
    program_repo: ProgramRepository
    policy: ResourcePolicy
    notifications: NotificationService
    uow: UnitOfWork

    async def schedule(
        self,
        principal: Principal,
        *,
        topic: str,
        scheduled_for: datetime,
        grade: str,
        location: str | None = None,
        description: str | None = None,
    ) -> Program:
        self.policy.guard(principal, ResourceKind.PROGRAMS, Operation.CREATE)
        program = Program.create(
            topic=topic,
            scheduled_for=scheduled_for,
            grade=grade,
            owner_id=principal.id,
            location=location,
            description=description,
        )
        await self.program_repo.save(program)
        await self.uow.commit()
        logger.info("Program scheduled: id=%s grade=%s", program.id, program.grade)

        try:
            await self.notifications.notify_program_scheduled(program)
        except LodgeError as e:
            logger.warning("Announcement for program %s failed: %s", program.id, e)
        return program

    async def load(self, principal: Principal, id: ProgramId) -> Guarded[Program]:
        program = await self.program_repo.get(id)
        if program is None:
            raise NotFoundError(f"Program not found: {id}")
        return Guarded(program, principal, self.policy)

    async def cancel(self, principal: Principal, id: ProgramId) -> None:
        program = (await self.load(principal, id)).check(Operation.DELETE)
        await self.program_repo.delete(program.id)
        logger.info("Program cancelled: id=%s by=%s", program.id, principal.id)
