from dishka import provide

from lodge.domain.program.service.program import ProgramService
from lodge.util.di.base import Provider
from lodge.util.di.scope import Scope


class ProgramProvider(Provider):
    program_service = provide(ProgramService, scope=Scope.UOW)
