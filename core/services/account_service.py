"""Account-level notification preferences, group leave and account deletion."""

from uuid import UUID

from django.apps import apps
from django.db import transaction

import requests
import structlog

from core.exceptions import (
    ConfigurationError,
    DownstreamServiceError,
    IdentityUserNotFoundError,
    NotGroupMemberError,
    ProfileNotFoundError,
)
from core.models import GroupMembership, GroupNotificationSetting, Profile
from core.repositories.notification_repository import NotificationRepository
from core.schemas.preferences import (
    AccountDeletionResponse,
    GroupNotificationSettingsRequest,
    GroupNotificationSettingsResponse,
    NotificationPreferencesRequest,
    NotificationPreferencesResponse,
)
from core.services.downstream.identity_client import IdentityClient

logger = structlog.get_logger(__name__)


class AccountService:
    """Service for preference writes and account lifecycle."""

    def __init__(
        self,
        identity_client: IdentityClient | None = None,
        repository: NotificationRepository | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            identity_client: Identity provider client (defaults to settings)
            repository: Group and membership queries
        """
        self._identity_client = identity_client
        self.repository = repository or NotificationRepository()

    @property
    def identity_client(self) -> IdentityClient:
        """Identity client in use."""
        return self._identity_client or IdentityClient.from_settings()

    def update_group_settings(
        self,
        user_id: UUID,
        group_id: UUID,
        request: GroupNotificationSettingsRequest,
    ) -> GroupNotificationSettingsResponse:
        """Upsert the user's SMS flags for a group.

        Raises:
            GroupNotFoundError: If the group does not exist
            NotGroupMemberError: If the user is not a member of the group
        """
        self.repository.get_group(group_id)
        if not self.repository.is_member(user_id, group_id):
            raise NotGroupMemberError(user_id, group_id)

        setting, created = GroupNotificationSetting.objects.update_or_create(
            user_id=user_id,
            group_id=group_id,
            defaults=request.model_dump(exclude_none=True),
        )
        logger.info(
            "group_notification_settings_saved",
            user_id=str(user_id),
            group_id=str(group_id),
            created=created,
            daily_question_sms=setting.daily_question_sms,
            message_sms=setting.message_sms,
        )
        return GroupNotificationSettingsResponse(
            user_id=user_id,
            group_id=group_id,
            daily_question_sms=setting.daily_question_sms,
            message_sms=setting.message_sms,
        )

    def leave_group(self, user_id: UUID, group_id: UUID) -> None:
        """Remove the membership and the group settings of a user.

        Raises:
            GroupNotFoundError: If the group does not exist
            NotGroupMemberError: If the user is not a member of the group
        """
        self.repository.get_group(group_id)
        with transaction.atomic():
            removed, _ = GroupMembership.objects.filter(
                user_id=user_id, group_id=group_id
            ).delete()
            if not removed:
                raise NotGroupMemberError(user_id, group_id)
            GroupNotificationSetting.objects.filter(
                user_id=user_id, group_id=group_id
            ).delete()
        logger.info("group_left", user_id=str(user_id), group_id=str(group_id))

    def update_preferences(
        self, user_id: UUID, request: NotificationPreferencesRequest
    ) -> NotificationPreferencesResponse:
        """Update the global mute and the daily reminder opt-in.

        Muting also turns the daily reminder off; turning the daily reminder
        on also unmutes.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        try:
            profile = Profile.objects.get(id=user_id)
        except Profile.DoesNotExist as e:
            raise ProfileNotFoundError(user_id) from e

        if request.notifications_muted is not None:
            profile.notifications_muted = request.notifications_muted
            if request.notifications_muted:
                profile.daily_sms_enabled = False
        if request.daily_sms_enabled is not None:
            profile.daily_sms_enabled = request.daily_sms_enabled
            if request.daily_sms_enabled:
                profile.notifications_muted = False

        profile.save(update_fields=["notifications_muted", "daily_sms_enabled"])
        logger.info(
            "notification_preferences_saved",
            user_id=str(user_id),
            notifications_muted=profile.notifications_muted,
            daily_sms_enabled=profile.daily_sms_enabled,
        )
        return NotificationPreferencesResponse(
            user_id=profile.id,
            notifications_muted=profile.notifications_muted,
            daily_sms_enabled=profile.daily_sms_enabled,
        )

    def delete_account(self, user_id: UUID) -> AccountDeletionResponse:
        """Delete a user's data and their identity record.

        Owned groups go with the profile, along with their memberships,
        settings and daily questions. Identity deletion runs last; its
        outcome is reported rather than raised so the caller learns what
        was removed.
        """
        with transaction.atomic():
            _, per_model = Profile.objects.filter(id=user_id).delete()

        deleted = {
            apps.get_model(label)._meta.db_table: count
            for label, count in per_model.items()
            if count
        }

        try:
            self.identity_client.delete_user(user_id)
            identity_user = "deleted"
        except IdentityUserNotFoundError:
            identity_user = "not_found"
        except (
            ConfigurationError,
            DownstreamServiceError,
            requests.RequestException,
        ) as e:
            logger.error(
                "identity_user_delete_failed", user_id=str(user_id), error=str(e)
            )
            identity_user = f"error: {e}"

        logger.info(
            "account_deleted",
            user_id=str(user_id),
            deleted=deleted,
            identity_user=identity_user,
        )
        return AccountDeletionResponse(
            user_id=user_id, deleted=deleted, identity_user=identity_user
        )


# Global service instance
account_service = AccountService()
