"""Unit tests for the daily dedup guard and local-time helpers."""

from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase, TestCase, override_settings

from core.models import DailyQuestion, DailyReminder
from core.services.dedup_guard import (
    DedupGuard,
    is_within_window,
    local_date,
    local_midnight_utc,
)
from tests.factories import GroupFactory, ProfileFactory

NEW_YORK = ZoneInfo("America/New_York")


def utc(*args):
    """Build an aware UTC datetime."""
    return datetime(*args, tzinfo=UTC)


@override_settings(NOTIFICATION_TIMEZONE="America/New_York")
class TestLocalDate(SimpleTestCase):
    """Tests for local_date."""

    def test_evening_utc_is_previous_local_day(self):
        """Test that 03:30 UTC is still the previous evening in New York."""
        self.assertEqual(local_date(utc(2024, 3, 10, 3, 30)), date(2024, 3, 9))

    def test_midday_utc_is_same_local_day(self):
        """Test that midday UTC maps to the same local date."""
        self.assertEqual(local_date(utc(2024, 7, 4, 16, 0)), date(2024, 7, 4))

    def test_naive_datetime_is_treated_as_utc(self):
        """Test that naive input is interpreted as UTC."""
        self.assertEqual(local_date(datetime(2024, 3, 10, 3, 30)), date(2024, 3, 9))

    def test_explicit_timezone_overrides_setting(self):
        """Test that a timezone argument wins over the setting."""
        tokyo = ZoneInfo("Asia/Tokyo")

        self.assertEqual(local_date(utc(2024, 3, 9, 20, 0), tokyo), date(2024, 3, 10))


class TestLocalMidnightUtc(SimpleTestCase):
    """Tests for local_midnight_utc across daylight-saving changes."""

    def test_midnight_before_spring_forward_uses_standard_offset(self):
        """Test that midnight on 2024-03-10 is still EST (UTC-5)."""
        midnight = local_midnight_utc(utc(2024, 3, 10, 16, 0), NEW_YORK)

        self.assertEqual(midnight, utc(2024, 3, 10, 5, 0))

    def test_midnight_after_spring_forward_uses_daylight_offset(self):
        """Test that midnight on 2024-03-11 is EDT (UTC-4)."""
        midnight = local_midnight_utc(utc(2024, 3, 11, 16, 0), NEW_YORK)

        self.assertEqual(midnight, utc(2024, 3, 11, 4, 0))

    def test_midnight_on_fall_back_day_uses_daylight_offset(self):
        """Test that midnight on 2024-11-03 is still EDT (UTC-4)."""
        midnight = local_midnight_utc(utc(2024, 11, 3, 18, 0), NEW_YORK)

        self.assertEqual(midnight, utc(2024, 11, 3, 4, 0))


@override_settings(
    NOTIFICATION_TIMEZONE="America/New_York",
    DAILY_REMINDER_HOUR=12,
    DAILY_REMINDER_MINUTE=0,
    DAILY_REMINDER_WINDOW_MINUTES=10,
)
class TestIsWithinWindow(SimpleTestCase):
    """Tests for the reminder window check."""

    def test_spring_forward_day_window_follows_daylight_time(self):
        """Test that noon on 2024-03-10 is 16:00 UTC."""
        self.assertTrue(is_within_window(utc(2024, 3, 10, 16, 0)))
        self.assertTrue(is_within_window(utc(2024, 3, 10, 16, 9)))
        self.assertFalse(is_within_window(utc(2024, 3, 10, 17, 0)))

    def test_day_before_spring_forward_uses_standard_time(self):
        """Test that noon on 2024-03-09 is 17:00 UTC."""
        self.assertTrue(is_within_window(utc(2024, 3, 9, 17, 5)))
        self.assertFalse(is_within_window(utc(2024, 3, 9, 16, 5)))

    def test_fall_back_day_window_follows_standard_time(self):
        """Test that noon on 2024-11-03 is 17:00 UTC."""
        self.assertTrue(is_within_window(utc(2024, 11, 3, 17, 0)))
        self.assertFalse(is_within_window(utc(2024, 11, 3, 16, 0)))

    def test_window_end_is_exclusive(self):
        """Test that 12:10 local is outside the window."""
        self.assertFalse(is_within_window(utc(2024, 7, 1, 16, 10)))
        self.assertTrue(is_within_window(utc(2024, 7, 1, 16, 9, 59)))

    def test_custom_window(self):
        """Test explicit start and length arguments."""
        now = utc(2024, 7, 1, 13, 25)

        self.assertTrue(is_within_window(now, NEW_YORK, time(9, 15), 15))
        self.assertFalse(is_within_window(now, NEW_YORK, time(9, 30), 15))

    def test_window_spanning_midnight(self):
        """Test a 23:55 start with 10 minutes on both sides of midnight."""
        start = time(23, 55)

        self.assertTrue(is_within_window(utc(2024, 7, 2, 3, 57), NEW_YORK, start, 10))
        self.assertTrue(is_within_window(utc(2024, 7, 2, 4, 2), NEW_YORK, start, 10))
        self.assertFalse(is_within_window(utc(2024, 7, 2, 4, 5), NEW_YORK, start, 10))
        self.assertFalse(is_within_window(utc(2024, 7, 2, 3, 50), NEW_YORK, start, 10))


class TestDedupGuard(TestCase):
    """Tests for DedupGuard against the artifact tables."""

    def setUp(self):
        """Set up test fixtures."""
        self.group = GroupFactory()
        self.day = date(2024, 3, 10)
        self.guard = DedupGuard(DailyQuestion, "group_id")

    def test_should_run_until_claimed(self):
        """Test that should_run flips once an artifact exists."""
        self.assertTrue(self.guard.should_run(self.group.id, self.day))

        self.guard.claim(self.group.id, self.day, question_text="Q?")

        self.assertFalse(self.guard.should_run(self.group.id, self.day))

    def test_second_claim_returns_existing_artifact(self):
        """Test that a repeated claim is a no-op returning the first row."""
        first, created_first = self.guard.claim(
            self.group.id, self.day, question_text="First?"
        )
        second, created_second = self.guard.claim(
            self.group.id, self.day, question_text="Second?"
        )

        self.assertTrue(created_first)
        self.assertFalse(created_second)
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(second.question_text, "First?")
        self.assertEqual(DailyQuestion.objects.count(), 1)

    def test_claim_loses_to_insert_after_should_run(self):
        """Test that a row inserted after the check still wins the day."""
        self.assertTrue(self.guard.should_run(self.group.id, self.day))
        DailyQuestion.objects.create(
            group=self.group, date_et=self.day, question_text="Other run?"
        )

        artifact, created = self.guard.claim(
            self.group.id, self.day, question_text="This run?"
        )

        self.assertFalse(created)
        self.assertEqual(artifact.question_text, "Other run?")
        self.assertEqual(DailyQuestion.objects.count(), 1)

    def test_claims_are_per_day(self):
        """Test that a new local date can be claimed again."""
        self.guard.claim(self.group.id, self.day, question_text="Q?")
        _, created = self.guard.claim(
            self.group.id, date(2024, 3, 11), question_text="Q?"
        )

        self.assertTrue(created)
        self.assertEqual(DailyQuestion.objects.count(), 2)

    def test_mark_done_is_idempotent_for_reminders(self):
        """Test mark_done on the reminder table."""
        profile = ProfileFactory()
        guard = DedupGuard(DailyReminder, "user_id")

        guard.mark_done(profile.id, self.day)
        guard.mark_done(profile.id, self.day)

        self.assertEqual(
            DailyReminder.objects.filter(user=profile, date_et=self.day).count(), 1
        )
