"""Game Hub clients."""

from .client import HttpNotificationHub, LoggingNotificationHub, NotificationHub

__all__ = ["HttpNotificationHub", "LoggingNotificationHub", "NotificationHub"]
