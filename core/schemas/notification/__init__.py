"""Notification schemas."""

from core.schemas.notification.request.answer_notification_request import (
    AnswerNotificationRequest,
)
from core.schemas.notification.request.checkin_notification_request import (
    CheckinNotificationRequest,
)
from core.schemas.notification.request.daily_questions_job_request import (
    DailyQuestionsJobRequest,
)
from core.schemas.notification.request.feedback_request import FeedbackRequest
from core.schemas.notification.request.invite_request import InviteRequest
from core.schemas.notification.request.message_notification_request import (
    MessageNotificationRequest,
)
from core.schemas.notification.request.sms_test_request import SmsTestRequest
from core.schemas.notification.response.daily_job_summary import (
    DailyQuestionsSummary,
    DailyReminderSummary,
    UnitFailure,
)
from core.schemas.notification.response.feedback_response import FeedbackResponse
from core.schemas.notification.response.notification_summary import (
    NotificationSummary,
    SendFailure,
)
from core.schemas.notification.response.sms_test_response import SmsTestResponse

__all__ = [
    "AnswerNotificationRequest",
    "CheckinNotificationRequest",
    "DailyQuestionsJobRequest",
    "DailyQuestionsSummary",
    "DailyReminderSummary",
    "FeedbackRequest",
    "FeedbackResponse",
    "InviteRequest",
    "MessageNotificationRequest",
    "NotificationSummary",
    "SendFailure",
    "SmsTestRequest",
    "SmsTestResponse",
    "UnitFailure",
]
