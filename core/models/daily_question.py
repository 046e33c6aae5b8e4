"""DailyQuestion model."""

import uuid
from typing import ClassVar

from django.db import models


class DailyQuestion(models.Model):
    """The question of the day for a group.

    At most one row exists per (group, local date); the unique constraint is
    what makes the daily question job idempotent.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(
        "core.Group",
        on_delete=models.CASCADE,
        related_name="daily_questions",
        db_column="group_id",
    )
    date_et = models.DateField()
    question_text = models.TextField()
    answer_options = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "daily_questions"
        managed = False  # Schema is managed externally
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=["group", "date_et"], name="unique_daily_question_per_day"
            ),
        ]
        ordering: ClassVar[list[str]] = ["-date_et"]

    def __repr__(self) -> str:
        """Return detailed representation of daily question."""
        return f"<DailyQuestion(group={self.group_id}, date_et={self.date_et})>"
