"""Database models for core application."""

from core.models.daily_question import DailyQuestion
from core.models.daily_reminder import DailyReminder
from core.models.group import Group
from core.models.group_membership import GroupMembership
from core.models.group_notification_setting import GroupNotificationSetting
from core.models.profile import Profile

__all__ = [
    "DailyQuestion",
    "DailyReminder",
    "Group",
    "GroupMembership",
    "GroupNotificationSetting",
    "Profile",
]
