"""Component tests for the scheduled job endpoints."""

from datetime import UTC, datetime
from unittest.mock import patch

from django.test import Client, TestCase, override_settings

from core.models import DailyQuestion, DailyReminder
from tests.component.helpers import empty_identity_directory, fake_twilio
from tests.factories import ProfileFactory, make_group

PREFIX = "/api/v1/checkin"
CRON_HEADERS = {"HTTP_AUTHORIZATION": "Bearer test-cron-secret"}


@override_settings(NOTIFICATION_TIMEZONE="America/New_York")
class TestDailyQuestionsJobEndpoint(TestCase):
    """Component tests for /jobs/daily-questions."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()
        self.url = f"{PREFIX}/jobs/daily-questions"
        self.group = make_group(ProfileFactory(), ProfileFactory())
        self.create = fake_twilio(self)
        empty_identity_directory(self)

    def test_get_runs_job_once_per_day(self):
        """Test that a repeated trigger does not send twice."""
        first = self.client.get(self.url, **CRON_HEADERS)
        second = self.client.get(self.url, **CRON_HEADERS)

        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["created"], 1)
        self.assertEqual(first.json()["sent"], 2)
        self.assertEqual(second.json()["skipped"], 1)
        self.assertEqual(second.json()["sent"], 0)
        self.assertEqual(DailyQuestion.objects.count(), 1)
        self.assertEqual(self.create.call_count, 2)

    def test_post_overrides_question(self):
        """Test the POST body overrides."""
        response = self.client.post(
            self.url,
            {"questionText": "Best snack?", "answerOptions": ["chips", "fruit"]},
            content_type="application/json",
            **CRON_HEADERS,
        )

        self.assertEqual(response.status_code, 200)
        question = DailyQuestion.objects.get()
        self.assertEqual(question.question_text, "Best snack?")

    def test_wrong_secret_is_rejected(self):
        """Test that the endpoint requires the cron secret."""
        response = self.client.get(self.url, HTTP_AUTHORIZATION="Bearer nope")

        self.assertEqual(response.status_code, 401)
        self.create.assert_not_called()

    def test_user_bearer_token_is_not_a_cron_secret(self):
        """Test that requests without the secret never run the job."""
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 401)
        self.assertFalse(DailyQuestion.objects.exists())

    @override_settings(CRON_SECRET="")
    def test_unset_secret_is_configuration_error(self):
        """Test that an unset secret does not open the endpoint."""
        response = self.client.get(self.url, **CRON_HEADERS)

        self.assertEqual(response.status_code, 500)
        self.assertFalse(DailyQuestion.objects.exists())


@override_settings(
    NOTIFICATION_TIMEZONE="America/New_York",
    DAILY_REMINDER_HOUR=12,
    DAILY_REMINDER_MINUTE=0,
    DAILY_REMINDER_WINDOW_MINUTES=10,
)
class TestDailyReminderJobEndpoint(TestCase):
    """Component tests for /jobs/daily-reminder."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()
        self.url = f"{PREFIX}/jobs/daily-reminder"
        self.profile = ProfileFactory()
        self.create = fake_twilio(self)
        empty_identity_directory(self)

    def _at(self, now):
        patcher = patch("core.services.sms_notification_service.timezone.now")
        mock_now = patcher.start()
        self.addCleanup(patcher.stop)
        mock_now.return_value = now

    def test_outside_window_is_a_no_op(self):
        """Test that 13:00 local sends nothing."""
        self._at(datetime(2024, 7, 1, 17, 0, tzinfo=UTC))

        response = self.client.get(self.url, **CRON_HEADERS)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["reason"], "outside_window")
        self.create.assert_not_called()

    def test_inside_window_reminds_once(self):
        """Test that 12:05 local sends and a retrigger does not."""
        self._at(datetime(2024, 7, 1, 16, 5, tzinfo=UTC))

        first = self.client.post(self.url, **CRON_HEADERS)
        second = self.client.post(self.url, **CRON_HEADERS)

        self.assertEqual(first.json()["sent"], 1)
        self.assertEqual(second.json()["already_sent"], 1)
        self.assertEqual(DailyReminder.objects.count(), 1)
        self.create.assert_called_once()
