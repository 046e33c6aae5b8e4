"""API views for core application."""

from uuid import UUID

import structlog
from pydantic import BaseModel, ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.auth.cron import CronSecretAuthentication
from core.auth.oauth2 import ADMIN_SCOPE, USER_SCOPE, OAuth2Authentication
from core.schemas.notification import (
    AnswerNotificationRequest,
    CheckinNotificationRequest,
    DailyQuestionsJobRequest,
    FeedbackRequest,
    InviteRequest,
    MessageNotificationRequest,
    SmsTestRequest,
)
from core.schemas.preferences import (
    GroupNotificationSettingsRequest,
    NotificationPreferencesRequest,
)
from core.services.account_service import account_service
from core.services.health_service import health_service
from core.services.sms_notification_service import sms_notification_service

logger = structlog.get_logger(__name__)


def _forbidden(detail: str) -> Response:
    return Response(
        {
            "error": "forbidden",
            "message": "You do not have permission to perform this action",
            "detail": detail,
        },
        status=status.HTTP_403_FORBIDDEN,
    )


def _require_scope(request, *scopes: str) -> Response | None:
    """Return a 403 response unless the caller holds one of ``scopes``."""
    if any(request.user.has_scope(scope) for scope in scopes):
        return None
    logger.warning(
        "caller_lacks_required_scope",
        user_id=request.user.user_id,
        scopes=request.user.scopes,
        required=list(scopes),
    )
    return _forbidden(f"Requires {' or '.join(scopes)} scope")


def _parse_body(
    schema: type[BaseModel], data
) -> tuple[BaseModel | None, Response | None]:
    """Validate a request body, returning (model, None) or (None, 400 response)."""
    if data is None or data == "":
        data = {}
    if not isinstance(data, dict):
        return None, Response(
            {"error": "bad_request", "message": "Request body must be a JSON object"},
            status=status.HTTP_400_BAD_REQUEST,
        )
    try:
        return schema(**data), None
    except ValidationError as e:
        logger.warning(
            "invalid_request_body",
            schema=schema.__name__,
            validation_errors=e.errors(include_url=False, include_context=False),
        )
        return None, Response(
            {
                "error": "bad_request",
                "message": "Invalid request parameters",
                "errors": e.errors(include_url=False, include_context=False),
            },
            status=status.HTTP_400_BAD_REQUEST,
        )


def _caller_uuid(request) -> UUID | None:
    """Return the caller's user id as a UUID, or None for non-user tokens."""
    try:
        return UUID(str(request.user.user_id))
    except ValueError:
        return None


class LivenessCheckView(APIView):
    """Liveness probe endpoint.

    Returns 200 if the process is alive; dependencies are not checked.
    Exempt from authentication so orchestrator probes can reach it.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint.

    Returns 200 with a degraded status when a dependency is unavailable.
    Exempt from authentication so orchestrator probes can reach it.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(), status=status.HTTP_200_OK)


class AnswerNotificationView(APIView):
    """Texts group members when someone answers today's question.

    Requires notification:user or notification:admin scope. Users may only
    report their own answers.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to send new answer notifications.

        Returns:
            200 OK with NotificationSummary
            400 Bad Request if validation fails
            403 Forbidden if scope or acting user check fails
            404 Not Found if the group doesn't exist
            500 Internal Server Error if SMS is not configured
        """
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        body, error = _parse_body(AnswerNotificationRequest, request.data)
        if error:
            return error

        summary = sms_notification_service.notify_new_answer(body, caller=request.user)
        return Response(summary.model_dump(), status=status.HTTP_200_OK)


class CheckinNotificationView(APIView):
    """Texts members of the groups a check-in was shared with.

    Requires notification:user or notification:admin scope.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to send new check-in notifications."""
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        body, error = _parse_body(CheckinNotificationRequest, request.data)
        if error:
            return error

        summary = sms_notification_service.notify_new_checkin(
            body, caller=request.user
        )
        return Response(summary.model_dump(), status=status.HTTP_200_OK)


class MessageNotificationView(APIView):
    """Texts group members when someone posts a message.

    Requires notification:user or notification:admin scope.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to send new message notifications."""
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        body, error = _parse_body(MessageNotificationRequest, request.data)
        if error:
            return error

        summary = sms_notification_service.notify_new_message(
            body, caller=request.user
        )
        return Response(summary.model_dump(), status=status.HTTP_200_OK)


class InviteView(APIView):
    """Texts group invites to phone numbers.

    Requires notification:user or notification:admin scope.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to send invites."""
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        body, error = _parse_body(InviteRequest, request.data)
        if error:
            return error

        summary = sms_notification_service.send_invites(body)
        return Response(summary.model_dump(), status=status.HTTP_200_OK)


class SmsTestView(APIView):
    """Sends the delivery self-test message to one phone.

    Requires notification:user or notification:admin scope.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to send a test SMS.

        Returns:
            200 OK with the provider message SID
            502 Bad Gateway if the provider rejects the message
        """
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        body, error = _parse_body(SmsTestRequest, request.data)
        if error:
            return error

        result = sms_notification_service.send_test_sms(body.phone)
        return Response(result.model_dump(), status=status.HTTP_200_OK)


class FeedbackView(APIView):
    """Texts user feedback to the admin phone.

    Requires notification:user or notification:admin scope.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Handle POST request to send feedback.

        Returns:
            200 OK with the provider message SID
            400 Bad Request if the feedback is missing or blank
            502 Bad Gateway if the provider rejects the message
        """
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        body, error = _parse_body(FeedbackRequest, request.data)
        if error:
            return error

        result = sms_notification_service.send_feedback(body)
        return Response(result.model_dump(), status=status.HTTP_200_OK)


class DailyQuestionsJobView(APIView):
    """Scheduled trigger for the daily questions run.

    Authenticated with the shared cron secret. GET runs with defaults; POST
    may override the question text and answer options.
    """

    authentication_classes = (CronSecretAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, _request):
        """Run the daily questions job with defaults."""
        summary = sms_notification_service.run_daily_questions()
        return Response(summary.model_dump(), status=status.HTTP_200_OK)

    def post(self, request):
        """Run the daily questions job with optional overrides."""
        body, error = _parse_body(DailyQuestionsJobRequest, request.data)
        if error:
            return error

        summary = sms_notification_service.run_daily_questions(
            question_text=body.question_text, answer_options=body.answer_options
        )
        return Response(summary.model_dump(), status=status.HTTP_200_OK)


class DailyReminderJobView(APIView):
    """Scheduled trigger for the daily check-in reminder.

    Authenticated with the shared cron secret. Runs outside the local
    reminder window return a summary with reason ``outside_window``.
    """

    authentication_classes = (CronSecretAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, _request):
        """Run the daily reminder job."""
        summary = sms_notification_service.run_daily_reminders()
        return Response(summary.model_dump(), status=status.HTTP_200_OK)

    def post(self, request):
        """Run the daily reminder job."""
        return self.get(request)


class GroupNotificationSettingsView(APIView):
    """Updates the caller's SMS flags for one group."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def put(self, request, group_id: UUID):
        """Handle PUT request to upsert group notification settings.

        Returns:
            200 OK with the stored flags
            403 Forbidden if the caller is not a member of the group
            404 Not Found if the group doesn't exist
        """
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        user_id = _caller_uuid(request)
        if user_id is None:
            return _forbidden("Requires a user token")

        body, error = _parse_body(GroupNotificationSettingsRequest, request.data)
        if error:
            return error

        result = account_service.update_group_settings(user_id, group_id, body)
        return Response(result.model_dump(), status=status.HTTP_200_OK)


class GroupMembershipView(APIView):
    """Lets the caller leave a group."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def delete(self, request, group_id: UUID):
        """Handle DELETE request to leave a group (204 on success)."""
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        user_id = _caller_uuid(request)
        if user_id is None:
            return _forbidden("Requires a user token")

        account_service.leave_group(user_id, group_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationPreferencesView(APIView):
    """Updates the caller's global mute and daily reminder opt-in."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def put(self, request):
        """Handle PUT request to update notification preferences."""
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        user_id = _caller_uuid(request)
        if user_id is None:
            return _forbidden("Requires a user token")

        body, error = _parse_body(NotificationPreferencesRequest, request.data)
        if error:
            return error

        result = account_service.update_preferences(user_id, body)
        return Response(result.model_dump(), status=status.HTTP_200_OK)


class AccountView(APIView):
    """Deletes the caller's account."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def delete(self, request):
        """Handle DELETE request to remove the caller's data and identity."""
        forbidden = _require_scope(request, USER_SCOPE, ADMIN_SCOPE)
        if forbidden:
            return forbidden

        user_id = _caller_uuid(request)
        if user_id is None:
            return _forbidden("Requires a user token")

        logger.info("account_deletion_requested", user_id=str(user_id))
        result = account_service.delete_account(user_id)
        return Response(result.model_dump(), status=status.HTTP_200_OK)
