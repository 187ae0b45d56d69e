"""Business logic services package."""

from healarr_notify.services.config_cache import ConfigCache
from healarr_notify.services.delivery_log_service import DeliveryLogService
from healarr_notify.services.notification_service import NotificationService
from healarr_notify.services.throttle import ThrottleGate
from healarr_notify.services.transport import ShoutrrrTransport, Transport

__all__ = [
    "ConfigCache",
    "DeliveryLogService",
    "NotificationService",
    "ShoutrrrTransport",
    "ThrottleGate",
    "Transport",
]
