"""SMS notification service for group events and the daily jobs.

Every flow follows the same pipeline: (daily jobs only) claim today's
artifact, resolve eligible members, resolve their phones, render the body
and dispatch. Runs return a summary with counts instead of raising for
per-recipient or per-group failures.
"""

from collections.abc import Iterable
from uuid import UUID

from django.conf import settings
from django.utils import timezone

import structlog
from rest_framework.exceptions import PermissionDenied
from twilio.base.exceptions import TwilioRestException

from core.auth.oauth2 import OAuth2User
from core.enums import NotificationEvent, SkipReason
from core.exceptions import ConfigurationError, SmsDeliveryError
from core.models import DailyQuestion, DailyReminder
from core.repositories.notification_repository import NotificationRepository
from core.schemas.notification import (
    AnswerNotificationRequest,
    CheckinNotificationRequest,
    DailyQuestionsSummary,
    DailyReminderSummary,
    FeedbackRequest,
    FeedbackResponse,
    InviteRequest,
    MessageNotificationRequest,
    NotificationSummary,
    SendFailure,
    SmsTestResponse,
    UnitFailure,
)
from core.services.contact_resolver import ContactResolver, normalize_phone
from core.services.dedup_guard import DedupGuard, is_within_window, local_date
from core.services.downstream.identity_client import IdentityClient
from core.services.eligibility_resolver import (
    EligibilityResolver,
    resolve_reminder_eligible,
)
from core.services.sms_client import SmsClient, mask_phone
from core.services.sms_dispatcher import DispatchResult, OutboundSms, SmsDispatcher
from core.services.sms_templates import SMS_MAX_LENGTH, render_sms

logger = structlog.get_logger(__name__)

DEFAULT_ACTOR_NAME = "Someone"
DEFAULT_FEEDBACK_PHONE = "no phone"
DEFAULT_QUESTION_TEXT = "What's something that made you smile today?"


class SmsNotificationService:
    """Service for SMS notification business logic.

    Collaborators can be injected for tests; by default each one is built
    from settings on use, so settings changes apply without a restart.
    """

    def __init__(
        self,
        sms_client: SmsClient | None = None,
        identity_client: IdentityClient | None = None,
        repository: NotificationRepository | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            sms_client: SMS provider client
            identity_client: Identity provider client
            repository: Query source for eligibility and contacts
            max_workers: Dispatch concurrency cap
        """
        self._sms_client = sms_client
        self._identity_client = identity_client
        self.repository = repository or NotificationRepository()
        self.max_workers = max_workers
        self.question_guard = DedupGuard(DailyQuestion, "group_id")
        self.reminder_guard = DedupGuard(DailyReminder, "user_id")

    @property
    def sms_client(self) -> SmsClient:
        """SMS client in use."""
        return self._sms_client or SmsClient.from_settings()

    @property
    def identity_client(self) -> IdentityClient:
        """Identity client in use."""
        return self._identity_client or IdentityClient.from_settings()

    def _pipeline(self) -> tuple[ContactResolver, SmsDispatcher]:
        """Check SMS credentials and build the resolver and dispatcher.

        Raises:
            ConfigurationError: If SMS credentials are missing
        """
        sms_client = self.sms_client
        sms_client.ensure_configured()
        contact_resolver = ContactResolver(self.identity_client, self.repository)
        dispatcher = SmsDispatcher(sms_client, self.max_workers)
        return contact_resolver, dispatcher

    @staticmethod
    def _ensure_can_act_for(caller: OAuth2User | None, user_id: UUID) -> None:
        if caller is not None and not caller.can_act_for(user_id):
            logger.warning(
                "caller_cannot_act_for_user",
                caller_id=caller.user_id,
                user_id=str(user_id),
            )
            raise PermissionDenied(
                detail="Requires notification:admin scope to act for another user"
            )

    @staticmethod
    def _send_failures(result: DispatchResult) -> list[SendFailure]:
        return [
            SendFailure(to=mask_phone(failure.to), error=failure.error)
            for failure in result.failures
        ]

    def _notify_group_event(
        self,
        event: NotificationEvent,
        group_ids: list[UUID],
        acting_user_id: UUID,
        body: str,
    ) -> NotificationSummary:
        contact_resolver, dispatcher = self._pipeline()

        if not group_ids:
            logger.info(
                "group_event_skipped",
                notification_event=event.value,
                reason=SkipReason.NO_GROUPS.value,
            )
            return NotificationSummary(reason=SkipReason.NO_GROUPS)

        eligibility = EligibilityResolver(self.repository).resolve(
            event, group_ids, acting_user_id
        )
        if not eligibility.member_ids:
            logger.info(
                "group_event_skipped",
                notification_event=event.value,
                reason=SkipReason.NO_OTHER_MEMBERS.value,
            )
            return NotificationSummary(reason=SkipReason.NO_OTHER_MEMBERS)

        contacts = contact_resolver.resolve_contacts(
            sorted(eligibility.eligible_ids, key=str)
        )
        if not contacts:
            logger.info(
                "group_event_skipped",
                notification_event=event.value,
                reason=SkipReason.NO_ELIGIBLE_USERS.value,
                member_count=len(eligibility.member_ids),
            )
            return NotificationSummary(reason=SkipReason.NO_ELIGIBLE_USERS)

        result = dispatcher.dispatch(
            [OutboundSms(to=phone, body=body) for phone in contacts.values()]
        )
        logger.info(
            "group_event_notified",
            notification_event=event.value,
            group_count=len(group_ids),
            eligible=len(contacts),
            sent=result.sent,
            failed=result.failed,
        )
        return NotificationSummary(
            sent=result.sent,
            eligible=len(contacts),
            failed=result.failed,
            failures=self._send_failures(result),
        )

    def notify_new_answer(
        self, request: AnswerNotificationRequest, caller: OAuth2User | None = None
    ) -> NotificationSummary:
        """Tell the group that a member answered today's question.

        Raises:
            ConfigurationError: If SMS credentials are missing
            GroupNotFoundError: If the group does not exist
            PermissionDenied: If the caller may not act for the answering user
        """
        self._ensure_can_act_for(caller, request.answer_user_id)
        group = self.repository.get_group(request.group_id)
        body = render_sms(
            NotificationEvent.NEW_ANSWER.value,
            actor_name=request.answer_user_name or DEFAULT_ACTOR_NAME,
            group_name=group.name,
            group_id=group.id,
        )
        return self._notify_group_event(
            NotificationEvent.NEW_ANSWER, [group.id], request.answer_user_id, body
        )

    def notify_new_message(
        self, request: MessageNotificationRequest, caller: OAuth2User | None = None
    ) -> NotificationSummary:
        """Tell the group that a member posted a message.

        Raises:
            ConfigurationError: If SMS credentials are missing
            GroupNotFoundError: If the group does not exist
            PermissionDenied: If the caller may not act for the sender
        """
        self._ensure_can_act_for(caller, request.sender_user_id)
        group = self.repository.get_group(request.group_id)
        body = render_sms(
            NotificationEvent.NEW_MESSAGE.value,
            actor_name=request.sender_name or DEFAULT_ACTOR_NAME,
            group_name=group.name,
            group_id=group.id,
        )
        return self._notify_group_event(
            NotificationEvent.NEW_MESSAGE, [group.id], request.sender_user_id, body
        )

    def notify_new_checkin(
        self, request: CheckinNotificationRequest, caller: OAuth2User | None = None
    ) -> NotificationSummary:
        """Tell every group a check-in was shared with.

        A member of several of those groups is notified once, unless they
        turned message SMS off in all of them. The link points at the first
        group.

        Raises:
            ConfigurationError: If SMS credentials are missing
            PermissionDenied: If the caller may not act for the user
        """
        self._ensure_can_act_for(caller, request.user_id)
        group_ids = list(dict.fromkeys(request.group_ids))
        body = ""
        if group_ids:
            body = render_sms(
                NotificationEvent.NEW_CHECKIN.value,
                actor_name=request.user_name or DEFAULT_ACTOR_NAME,
                checkin_number=request.checkin_number,
                group_id=group_ids[0],
            )
        return self._notify_group_event(
            NotificationEvent.NEW_CHECKIN, group_ids, request.user_id, body
        )

    def run_daily_questions(
        self,
        now=None,
        question_text: str | None = None,
        answer_options: list[str] | None = None,
    ) -> DailyQuestionsSummary:
        """Create today's question for every group and announce it.

        Groups that already have a question for the local date are skipped,
        so repeated runs on the same day send nothing new. A failure while
        processing one group is recorded and the run moves on.

        Raises:
            ConfigurationError: If SMS credentials are missing
        """
        contact_resolver, dispatcher = self._pipeline()
        day = local_date(now)
        text = question_text or DEFAULT_QUESTION_TEXT
        summary = DailyQuestionsSummary(date_et=day)
        resolver = EligibilityResolver(self.repository)

        announcements: list[tuple] = []
        for group in self.repository.get_all_groups():
            summary.groups += 1
            try:
                _, created = self.question_guard.claim(
                    group.id, day, question_text=text, answer_options=answer_options
                )
                if not created:
                    summary.skipped += 1
                    continue
                summary.created += 1
                eligibility = resolver.resolve(
                    NotificationEvent.DAILY_QUESTION_READY, [group.id]
                )
                announcements.append((group, eligibility.eligible_ids))
            except Exception as e:
                logger.exception(
                    "daily_question_group_failed", group_id=str(group.id), error=str(e)
                )
                summary.failures.append(
                    UnitFailure(scope_id=str(group.id), error=str(e))
                )

        recipients = set().union(*(user_ids for _, user_ids in announcements))
        contacts = contact_resolver.resolve_contacts(sorted(recipients, key=str))

        for group, user_ids in announcements:
            body = render_sms(
                NotificationEvent.DAILY_QUESTION_READY.value,
                group_name=group.name,
                group_id=group.id,
            )
            messages = [
                OutboundSms(to=contacts[user_id], body=body)
                for user_id in sorted(user_ids, key=str)
                if user_id in contacts
            ]
            result = dispatcher.dispatch(messages)
            summary.sent += result.sent
            summary.failures.extend(
                UnitFailure(
                    scope_id=str(group.id),
                    error=f"{mask_phone(failure.to)}: {failure.error}",
                )
                for failure in result.failures
            )

        summary.failed = len(summary.failures)
        logger.info(
            "daily_questions_completed",
            date=day.isoformat(),
            groups=summary.groups,
            created=summary.created,
            skipped=summary.skipped,
            sent=summary.sent,
            failed=summary.failed,
        )
        return summary

    def run_daily_reminders(
        self, now=None, enforce_window: bool = True
    ) -> DailyReminderSummary:
        """Send the daily check-in reminder to every opted-in user.

        Outside the configured local window nothing happens. Each user is
        reminded at most once per local date.

        Raises:
            ConfigurationError: If SMS credentials are missing
        """
        contact_resolver, dispatcher = self._pipeline()
        now = now or timezone.now()
        day = local_date(now)
        summary = DailyReminderSummary(date_et=day)

        if enforce_window and not is_within_window(now):
            logger.info("daily_reminder_outside_window", now=now.isoformat())
            summary.reason = SkipReason.OUTSIDE_WINDOW
            return summary

        user_ids = resolve_reminder_eligible(self.repository.get_reminder_candidates())
        contacts = contact_resolver.resolve_contacts(sorted(user_ids, key=str))
        summary.eligible = len(contacts)
        if not contacts:
            summary.reason = SkipReason.NO_ELIGIBLE_USERS
            return summary

        body = render_sms(NotificationEvent.DAILY_REMINDER_DUE.value)
        messages = []
        for user_id, phone in contacts.items():
            try:
                _, created = self.reminder_guard.claim(user_id, day)
            except Exception as e:
                logger.exception(
                    "daily_reminder_user_failed", user_id=str(user_id), error=str(e)
                )
                summary.failures.append(
                    UnitFailure(scope_id=str(user_id), error=str(e))
                )
                continue
            if created:
                messages.append(OutboundSms(to=phone, body=body))
            else:
                summary.already_sent += 1

        result = dispatcher.dispatch(messages)
        summary.sent = result.sent
        summary.failures.extend(
            UnitFailure(scope_id=mask_phone(failure.to), error=failure.error)
            for failure in result.failures
        )
        summary.failed = len(summary.failures)
        logger.info(
            "daily_reminder_completed",
            date=day.isoformat(),
            eligible=summary.eligible,
            already_sent=summary.already_sent,
            sent=summary.sent,
            failed=summary.failed,
        )
        return summary

    def send_invites(self, request: InviteRequest) -> NotificationSummary:
        """Text a group invite to each phone number.

        Raises:
            ConfigurationError: If SMS credentials are missing
        """
        _, dispatcher = self._pipeline()
        inviter_text = (
            f"{request.inviter_name} invited you"
            if request.inviter_name
            else "You're invited"
        )
        join_text = f" Tap to join: {request.app_url}" if request.app_url else ""
        body = render_sms(
            "GROUP_INVITE",
            inviter_text=inviter_text,
            group_name=request.group_name,
            join_text=join_text,
        )
        phones = _unique_phones(request.phones)
        result = dispatcher.dispatch(
            [OutboundSms(to=phone, body=body) for phone in phones]
        )
        logger.info(
            "invites_sent",
            requested=len(phones),
            sent=result.sent,
            failed=result.failed,
        )
        return NotificationSummary(
            sent=result.sent,
            eligible=len(phones),
            failed=result.failed,
            failures=self._send_failures(result),
        )

    def send_test_sms(self, phone: str) -> SmsTestResponse:
        """Send the delivery self-test message to one phone.

        Raises:
            ConfigurationError: If SMS credentials are missing
            SmsDeliveryError: If the provider rejects the message
        """
        sms_client = self.sms_client
        sms_client.ensure_configured()
        to = normalize_phone(phone)
        try:
            sid = sms_client.send_sms(to, render_sms("TEST_SMS"))
        except TwilioRestException as e:
            logger.warning("test_sms_failed", to=mask_phone(to), error=e.msg)
            raise SmsDeliveryError(e.msg, provider_code=e.code) from e
        return SmsTestResponse(sid=sid)

    def send_feedback(self, request: FeedbackRequest) -> FeedbackResponse:
        """Text user feedback to the admin phone.

        The body is cut to the provider's SMS length limit.

        Raises:
            ConfigurationError: If SMS credentials or FEEDBACK_ADMIN_PHONE are
                missing
            SmsDeliveryError: If the provider rejects the message
        """
        sms_client = self.sms_client
        sms_client.ensure_configured()
        admin_phone = normalize_phone(settings.FEEDBACK_ADMIN_PHONE)
        if not admin_phone:
            logger.error("feedback_admin_phone_not_configured")
            raise ConfigurationError("FEEDBACK_ADMIN_PHONE")

        body = render_sms(
            "FEEDBACK",
            user_name=request.user_name or DEFAULT_ACTOR_NAME,
            user_phone=request.user_phone or DEFAULT_FEEDBACK_PHONE,
            feedback=request.feedback,
        )[:SMS_MAX_LENGTH]
        try:
            sid = sms_client.send_sms(admin_phone, body)
        except TwilioRestException as e:
            logger.warning("feedback_sms_failed", error=e.msg)
            raise SmsDeliveryError(e.msg, provider_code=e.code) from e

        logger.info("feedback_sent", length=len(body))
        return FeedbackResponse(sid=sid)


def _unique_phones(phones: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(p for p in map(normalize_phone, phones) if p))


# Global service instance
sms_notification_service = SmsNotificationService()
