from .provider import NotificationProvider

__all__ = ["NotificationProvider"]
