from dishka import AsyncContainer, make_async_container

from lodge.config import Config
from lodge.domain.auth.util.di import AuthProvider
from lodge.domain.document.util.di import DocumentProvider
from lodge.domain.notification.util.di import NotificationProvider
from lodge.domain.program.util.di import ProgramProvider
from lodge.infrastructure.persistence import PersistenceProvider
from lodge.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        PersistenceProvider(),
        AuthProvider(),
        DocumentProvider(),
        ProgramProvider(),
        NotificationProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
