"""Notification-related enumerations.

This module contains the events this service reacts to, the per-group
preference flags that gate them, and the summary reasons reported when a
run sends nothing.
"""

from enum import Enum


class NotificationEvent(str, Enum):
    """Events that can produce an SMS.

    Each event maps to a flag and an eligibility rule in the
    eligibility resolver's policy table.
    """

    NEW_ANSWER = "NEW_ANSWER"
    NEW_CHECKIN = "NEW_CHECKIN"
    NEW_MESSAGE = "NEW_MESSAGE"
    DAILY_QUESTION_READY = "DAILY_QUESTION_READY"
    DAILY_REMINDER_DUE = "DAILY_REMINDER_DUE"


class NotificationFlag(str, Enum):
    """Per-group SMS preference flags.

    Values match the boolean field names on GroupNotificationSetting.
    """

    DAILY_QUESTION_SMS = "daily_question_sms"
    MESSAGE_SMS = "message_sms"


class EligibilityRule(str, Enum):
    """How a flag is evaluated when an event spans several groups."""

    SINGLE_GROUP = "SINGLE_GROUP"
    ANY_GROUP = "ANY_GROUP"


class SkipReason(str, Enum):
    """Reasons reported in a summary when nothing was sent."""

    NO_GROUPS = "no_groups"
    NO_OTHER_MEMBERS = "no_other_members"
    NO_ELIGIBLE_USERS = "no_eligible_users"
    OUTSIDE_WINDOW = "outside_window"
