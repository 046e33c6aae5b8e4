"""Schemas for the core app."""

from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.schemas.identity import IdentityUser, IdentityUserPage
from core.schemas.notification import (
    AnswerNotificationRequest,
    CheckinNotificationRequest,
    DailyQuestionsSummary,
    DailyReminderSummary,
    InviteRequest,
    MessageNotificationRequest,
    NotificationSummary,
)
from core.schemas.preferences import (
    AccountDeletionResponse,
    GroupNotificationSettingsRequest,
    NotificationPreferencesRequest,
)

__all__ = [
    "AccountDeletionResponse",
    "AnswerNotificationRequest",
    "CheckinNotificationRequest",
    "DailyQuestionsSummary",
    "DailyReminderSummary",
    "DependencyHealth",
    "GroupNotificationSettingsRequest",
    "IdentityUser",
    "IdentityUserPage",
    "InviteRequest",
    "LivenessResponse",
    "MessageNotificationRequest",
    "NotificationPreferencesRequest",
    "NotificationSummary",
    "ReadinessResponse",
]
