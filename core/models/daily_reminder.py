"""DailyReminder model."""

from typing import ClassVar

from django.db import models


class DailyReminder(models.Model):
    """Marker that a user's check-in reminder went out for a local date."""

    user = models.ForeignKey(
        "core.Profile",
        on_delete=models.CASCADE,
        related_name="daily_reminders",
        db_column="user_id",
    )
    date_et = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "daily_reminders"
        managed = False  # Schema is managed externally
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=["user", "date_et"], name="unique_daily_reminder_per_day"
            ),
        ]

    def __repr__(self) -> str:
        """Return detailed representation of daily reminder."""
        return f"<DailyReminder(user={self.user_id}, date_et={self.date_et})>"
