"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    AccountView,
    AnswerNotificationView,
    CheckinNotificationView,
    DailyQuestionsJobView,
    DailyReminderJobView,
    FeedbackView,
    GroupMembershipView,
    GroupNotificationSettingsView,
    InviteView,
    LivenessCheckView,
    MessageNotificationView,
    NotificationPreferencesView,
    ReadinessCheckView,
    SmsTestView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Event notification endpoints
    path(
        "notifications/answer",
        AnswerNotificationView.as_view(),
        name="notify-answer",
    ),
    path(
        "notifications/checkin",
        CheckinNotificationView.as_view(),
        name="notify-checkin",
    ),
    path(
        "notifications/message",
        MessageNotificationView.as_view(),
        name="notify-message",
    ),
    path("notifications/invites", InviteView.as_view(), name="send-invites"),
    path("notifications/test-sms", SmsTestView.as_view(), name="test-sms"),
    path("notifications/feedback", FeedbackView.as_view(), name="send-feedback"),
    # Scheduled job endpoints
    path(
        "jobs/daily-questions",
        DailyQuestionsJobView.as_view(),
        name="job-daily-questions",
    ),
    path(
        "jobs/daily-reminder",
        DailyReminderJobView.as_view(),
        name="job-daily-reminder",
    ),
    # Preference and account endpoints
    path(
        "groups/<uuid:group_id>/notification-settings",
        GroupNotificationSettingsView.as_view(),
        name="group-notification-settings",
    ),
    path(
        "groups/<uuid:group_id>/membership",
        GroupMembershipView.as_view(),
        name="group-membership",
    ),
    path(
        "users/me/notification-preferences",
        NotificationPreferencesView.as_view(),
        name="notification-preferences",
    ),
    path("users/me", AccountView.as_view(), name="account"),
]
