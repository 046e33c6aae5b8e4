"""SMS body templates.

A centralized registry mapping each outbound message kind to its body
template. Bodies are rendered by the notification service before dispatch;
the dispatcher never builds content.
"""

from typing import Any, TypedDict

from django.conf import settings

# Longest body the SMS provider accepts
SMS_MAX_LENGTH = 1600


class SmsTemplateConfig(TypedDict):
    """Configuration for an SMS template."""

    body: str


SMS_TEMPLATES: dict[str, SmsTemplateConfig] = {
    # Group events
    "NEW_ANSWER": {
        "body": "{actor_name} answered today's poll in {group_name}!\n\n"
        "{app_url}/groups/{group_id}",
    },
    "NEW_CHECKIN": {
        "body": "{actor_name} is at a {checkin_number} today. "
        "{app_url}/groups/{group_id}",
    },
    "NEW_MESSAGE": {
        "body": "{actor_name} sent a message in {group_name}\n\n"
        "{app_url}/groups/{group_id}",
    },
    # Daily jobs
    "DAILY_QUESTION_READY": {
        "body": 'Your group "{group_name}" has a new question!\n\n'
        "{app_url}/groups/{group_id}",
    },
    "DAILY_REMINDER_DUE": {
        "body": "How was your day today? {app_url}/checkin",
    },
    # Direct sends
    "GROUP_INVITE": {
        "body": '{inviter_text} to join "{group_name}" on {app_name}!{join_text}',
    },
    "TEST_SMS": {
        "body": "Hey! This is {app_name}. Your SMS notifications are working!",
    },
    "FEEDBACK": {
        "body": "{app_name} feedback from {user_name} ({user_phone}):\n\n"
        '"{feedback}"',
    },
}


def get_sms_template(kind: str) -> SmsTemplateConfig:
    """Get the template configuration for a message kind.

    Raises:
        KeyError: If the kind is not found in SMS_TEMPLATES.
    """
    return SMS_TEMPLATES[kind]


def render_sms(kind: str, **context: Any) -> str:
    """Render the body for a message kind.

    ``app_url`` and ``app_name`` default to the configured values.

    Args:
        kind: Template key in SMS_TEMPLATES
        **context: Template parameters

    Returns:
        Rendered message body
    """
    context.setdefault("app_url", settings.APP_URL)
    context.setdefault("app_name", settings.APP_NAME)
    return get_sms_template(kind)["body"].format(**context)
