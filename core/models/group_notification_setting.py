"""GroupNotificationSetting model."""

from typing import ClassVar

from django.db import models


class GroupNotificationSetting(models.Model):
    """Per-user, per-group SMS preferences.

    A missing row means every flag is enabled.
    """

    user = models.ForeignKey(
        "core.Profile",
        on_delete=models.CASCADE,
        related_name="group_notification_settings",
        db_column="user_id",
    )
    group = models.ForeignKey(
        "core.Group",
        on_delete=models.CASCADE,
        related_name="notification_settings",
        db_column="group_id",
    )
    daily_question_sms = models.BooleanField(default=True)
    message_sms = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "group_notification_settings"
        managed = False  # Schema is managed externally
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=["user", "group"], name="unique_group_notification_setting"
            ),
        ]

    def __repr__(self) -> str:
        """Return detailed representation of the setting row."""
        return (
            f"<GroupNotificationSetting(user={self.user_id}, group={self.group_id}, "
            f"daily_question_sms={self.daily_question_sms}, "
            f"message_sms={self.message_sms})>"
        )
