"""Unit tests for URL configuration."""

from uuid import uuid4

from django.test import SimpleTestCase
from django.urls import resolve, reverse

from core.views import (
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

PREFIX = "/api/v1/checkin"


class TestCoreURLPatterns(SimpleTestCase):
    """Tests for core app URL patterns."""

    def test_routes_resolve_to_views(self):
        """Test that each route resolves to its view."""
        group_id = uuid4()
        routes = {
            "/health/live": LivenessCheckView,
            "/health/ready": ReadinessCheckView,
            "/notifications/answer": AnswerNotificationView,
            "/notifications/checkin": CheckinNotificationView,
            "/notifications/message": MessageNotificationView,
            "/notifications/invites": InviteView,
            "/notifications/test-sms": SmsTestView,
            "/notifications/feedback": FeedbackView,
            "/jobs/daily-questions": DailyQuestionsJobView,
            "/jobs/daily-reminder": DailyReminderJobView,
            f"/groups/{group_id}/notification-settings": GroupNotificationSettingsView,
            f"/groups/{group_id}/membership": GroupMembershipView,
            "/users/me/notification-preferences": NotificationPreferencesView,
            "/users/me": AccountView,
        }
        for path, view in routes.items():
            with self.subTest(path=path):
                self.assertEqual(resolve(f"{PREFIX}{path}").func.cls, view)

    def test_group_id_is_converted_to_uuid(self):
        """Test the uuid path converter."""
        group_id = uuid4()

        match = resolve(f"{PREFIX}/groups/{group_id}/membership")

        self.assertEqual(match.kwargs["group_id"], group_id)

    def test_reverse_lookup(self):
        """Test named routes."""
        self.assertEqual(reverse("job-daily-reminder"), f"{PREFIX}/jobs/daily-reminder")
