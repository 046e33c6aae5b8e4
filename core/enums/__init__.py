"""Enumerations for the core app."""

from core.enums.health_status import HealthStatus
from core.enums.notification import (
    EligibilityRule,
    NotificationEvent,
    NotificationFlag,
    SkipReason,
)

__all__ = [
    "EligibilityRule",
    "HealthStatus",
    "NotificationEvent",
    "NotificationFlag",
    "SkipReason",
]
