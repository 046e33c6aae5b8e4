"""Tests for the schedule_daily_jobs management command."""

from io import StringIO
from unittest.mock import Mock, patch

from django.core.management import call_command
from django.test import SimpleTestCase

from core.constants import DAILY_QUESTIONS_JOB_ID, DAILY_REMINDER_JOB_ID
from core.jobs.sms_jobs import daily_questions_job, daily_reminder_job


class TestScheduleDailyJobs(SimpleTestCase):
    """Test suite for schedule_daily_jobs."""

    @patch("core.management.commands.schedule_daily_jobs.django_rq")
    def test_replaces_existing_jobs_and_registers_crons(self, mock_django_rq):
        """Test that stale registrations are cancelled and both crons added."""
        scheduler = mock_django_rq.get_scheduler.return_value
        stale = Mock(id=DAILY_REMINDER_JOB_ID)
        unrelated = Mock(id="other-job")
        scheduler.get_jobs.return_value = [stale, unrelated]
        out = StringIO()

        call_command("schedule_daily_jobs", stdout=out)

        mock_django_rq.get_scheduler.assert_called_once_with("default")
        scheduler.cancel.assert_called_once_with(stale)
        scheduler.cron.assert_any_call(
            "0 * * * *",
            func=daily_questions_job,
            id=DAILY_QUESTIONS_JOB_ID,
            queue_name="default",
        )
        scheduler.cron.assert_any_call(
            "*/10 * * * *",
            func=daily_reminder_job,
            id=DAILY_REMINDER_JOB_ID,
            queue_name="default",
        )
        self.assertIn(DAILY_QUESTIONS_JOB_ID, out.getvalue())

    @patch("core.management.commands.schedule_daily_jobs.django_rq")
    def test_custom_cron_expressions(self, mock_django_rq):
        """Test that cron options are passed through."""
        scheduler = mock_django_rq.get_scheduler.return_value
        scheduler.get_jobs.return_value = []

        call_command(
            "schedule_daily_jobs",
            "--questions-cron=5 4 * * *",
            "--reminder-cron=*/5 16 * * *",
            stdout=StringIO(),
        )

        crons = [call.args[0] for call in scheduler.cron.call_args_list]
        self.assertEqual(crons, ["5 4 * * *", "*/5 16 * * *"])
