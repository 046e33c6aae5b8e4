"""Notification preference and account schemas."""

from core.schemas.preferences.account_deletion_response import (
    AccountDeletionResponse,
)
from core.schemas.preferences.group_notification_settings import (
    GroupNotificationSettingsRequest,
    GroupNotificationSettingsResponse,
)
from core.schemas.preferences.notification_preferences import (
    NotificationPreferencesRequest,
    NotificationPreferencesResponse,
)

__all__ = [
    "AccountDeletionResponse",
    "GroupNotificationSettingsRequest",
    "GroupNotificationSettingsResponse",
    "NotificationPreferencesRequest",
    "NotificationPreferencesResponse",
]
