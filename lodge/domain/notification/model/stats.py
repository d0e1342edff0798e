from lodge.domain.notification.model.value import NotificationCategory
from lodge.domain.shared.model.value import ValueObject


class InboxStats(ValueObject):
    total: int
    unread: int
    unread_by_category: dict[NotificationCategory, int] = {}
