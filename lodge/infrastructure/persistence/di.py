from typing import AsyncIterable

from dishka import alias, from_context, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from lodge.config import Config
from lodge.domain.auth.port.repository import PrincipalRepository
from lodge.domain.document.port.repository import DocumentRepository
from lodge.domain.notification.port.directory import PrincipalDirectory
from lodge.domain.notification.port.repository import NotificationRepository
from lodge.domain.program.port.repository import ProgramRepository
from lodge.domain.shared.uow import UnitOfWork
from lodge.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from lodge.infrastructure.persistence.repository.document import SqlDocumentRepository
from lodge.infrastructure.persistence.repository.notification import (
    SqlNotificationRepository,
)
from lodge.infrastructure.persistence.repository.principal import SqlPrincipalRepository
from lodge.infrastructure.persistence.repository.program import SqlProgramRepository
from lodge.infrastructure.persistence.uow import SqlUnitOfWork
from lodge.util.di.base import Provider
from lodge.util.di.scope import Scope


class PersistenceProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    # APP-scoped factories
    @provide(scope=Scope.APP)
    def get_engine(self, config: Config) -> AsyncEngine:
        return create_db_engine(config.database)

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # UOW-scoped repositories
    principal_repo = provide(SqlPrincipalRepository, scope=Scope.UOW)
    principal_repo_port = alias(source=SqlPrincipalRepository, provides=PrincipalRepository)
    principal_directory = alias(source=SqlPrincipalRepository, provides=PrincipalDirectory)
    document_repo = provide(SqlDocumentRepository, scope=Scope.UOW, provides=DocumentRepository)
    program_repo = provide(SqlProgramRepository, scope=Scope.UOW, provides=ProgramRepository)
    uow = provide(SqlUnitOfWork, scope=Scope.UOW, provides=UnitOfWork)

    # Notification writes own their transactions, so the repository lives for the app
    @provide(scope=Scope.APP)
    def get_notification_repo(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> NotificationRepository:
        return SqlNotificationRepository(session_factory)
