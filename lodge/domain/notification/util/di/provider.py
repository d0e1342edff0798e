from dishka import provide

from lodge.config import Config
from lodge.domain.notification.port.directory import PrincipalDirectory
from lodge.domain.notification.port.repository import NotificationRepository
from lodge.domain.notification.schedule import (
    ExpiredNotificationSweep,
    ProgramReminderSchedule,
)
from lodge.domain.notification.service.fanout import NotificationFanoutService
from lodge.domain.notification.service.inbox import InboxService
from lodge.domain.notification.service.notification import NotificationService
from lodge.domain.notification.service.targeting import NotificationTargetResolver
from lodge.domain.program.port.repository import ProgramRepository
from lodge.domain.shared.authorization.catalog import PermissionCatalog
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.util.di.base import Provider
from lodge.util.di.scope import Scope


class NotificationProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_target_resolver(
        self,
        directory: PrincipalDirectory,
        catalog: PermissionCatalog,
    ) -> NotificationTargetResolver:
        return NotificationTargetResolver(directory=directory, catalog=catalog)

    @provide(scope=Scope.APP)
    def get_fanout(
        self,
        notification_repo: NotificationRepository,
        config: Config,
    ) -> NotificationFanoutService:
        return NotificationFanoutService(
            notification_repo=notification_repo,
            max_concurrency=config.notifications.max_concurrency,
        )

    @provide(scope=Scope.UOW)
    def get_notification_service(
        self,
        target_resolver: NotificationTargetResolver,
        fanout: NotificationFanoutService,
        policy: ResourcePolicy,
    ) -> NotificationService:
        return NotificationService(target_resolver=target_resolver, fanout=fanout, policy=policy)

    @provide(scope=Scope.UOW)
    def get_inbox_service(self, notification_repo: NotificationRepository) -> InboxService:
        return InboxService(notification_repo=notification_repo)

    # Schedules
    @provide(scope=Scope.UOW)
    def get_expired_sweep(self, inbox: InboxService) -> ExpiredNotificationSweep:
        return ExpiredNotificationSweep(inbox=inbox)

    @provide(scope=Scope.UOW)
    def get_program_reminders(
        self,
        programs: ProgramRepository,
        notifications: NotificationService,
        config: Config,
    ) -> ProgramReminderSchedule:
        return ProgramReminderSchedule(
            programs=programs,
            notifications=notifications,
            days_before=tuple(config.notifications.reminder_days),
        )
