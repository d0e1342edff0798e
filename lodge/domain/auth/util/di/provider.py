"""DI provider for the authorization engine."""

from dishka import provide

from lodge.domain.shared.authorization.catalog import CATALOG, PermissionCatalog
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.domain.shared.authorization.resolver import PermissionResolver
from lodge.domain.shared.authorization.startup import validate_authorization
from lodge.util.di.base import Provider
from lodge.util.di.scope import Scope


class AuthProvider(Provider):
    @provide(scope=Scope.APP)
    def get_catalog(self) -> PermissionCatalog:
        validate_authorization(CATALOG)
        return CATALOG

    @provide(scope=Scope.APP)
    def get_resolver(self, catalog: PermissionCatalog) -> PermissionResolver:
        return PermissionResolver(catalog)

    @provide(scope=Scope.APP)
    def get_policy(self, resolver: PermissionResolver) -> ResourcePolicy:
        return ResourcePolicy(resolver)
