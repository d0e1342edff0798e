from dishka import provide

from lodge.domain.document.service.document import DocumentService
from lodge.domain.document.service.moderation import DocumentModerationWorkflow
from lodge.util.di.base import Provider
from lodge.util.di.scope import Scope


class DocumentProvider(Provider):
    document_service = provide(DocumentService, scope=Scope.UOW)
    moderation_workflow = provide(DocumentModerationWorkflow, scope=Scope.UOW)
