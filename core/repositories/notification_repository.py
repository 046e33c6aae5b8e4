"""Repository for the queries behind eligibility and contact resolution."""

from collections.abc import Iterable
from uuid import UUID

from django.db.models import QuerySet

from core.enums import NotificationFlag
from core.exceptions import GroupNotFoundError
from core.models import Group, GroupMembership, GroupNotificationSetting, Profile


class NotificationRepository:
    """Repository for encapsulating notification database queries.

    Every method returns plain values (tuples, dicts, sets) so the resolvers
    built on top stay free of ORM details and can be tested with literals.
    """

    @staticmethod
    def get_group(group_id: UUID) -> Group:
        """Fetch a group by id.

        Raises:
            GroupNotFoundError: If the group does not exist
        """
        try:
            return Group.objects.get(id=group_id)
        except Group.DoesNotExist as e:
            raise GroupNotFoundError(group_id) from e

    @staticmethod
    def get_all_groups() -> QuerySet[Group]:
        """Return every group, oldest first."""
        return Group.objects.all().order_by("created_at")

    @staticmethod
    def get_memberships(group_ids: Iterable[UUID]) -> list[tuple[UUID, UUID]]:
        """Return (user_id, group_id) pairs for members of the given groups.

        Args:
            group_ids: Groups to look up

        Returns:
            List of (user_id, group_id) tuples
        """
        return list(
            GroupMembership.objects.filter(group_id__in=list(group_ids)).values_list(
                "user_id", "group_id"
            )
        )

    @staticmethod
    def is_member(user_id: UUID, group_id: UUID) -> bool:
        """Check whether a user belongs to a group."""
        return GroupMembership.objects.filter(
            user_id=user_id, group_id=group_id
        ).exists()

    @staticmethod
    def get_flag_settings(
        group_ids: Iterable[UUID],
        user_ids: Iterable[UUID],
        flag: NotificationFlag,
    ) -> dict[tuple[UUID, UUID], bool]:
        """Return stored values of one flag keyed by (user_id, group_id).

        Pairs without a settings row are absent from the result; callers
        treat them as enabled.
        """
        rows = GroupNotificationSetting.objects.filter(
            group_id__in=list(group_ids), user_id__in=list(user_ids)
        ).values_list("user_id", "group_id", flag.value)
        return {(user_id, group_id): value for user_id, group_id, value in rows}

    @staticmethod
    def get_muted_user_ids(user_ids: Iterable[UUID]) -> set[UUID]:
        """Return the subset of users with notifications muted globally."""
        return set(
            Profile.objects.filter(
                id__in=list(user_ids), notifications_muted=True
            ).values_list("id", flat=True)
        )

    @staticmethod
    def get_profile_phones(user_ids: Iterable[UUID]) -> dict[UUID, str | None]:
        """Return the profile phone number of each known user."""
        return dict(
            Profile.objects.filter(id__in=list(user_ids)).values_list(
                "id", "phone_number"
            )
        )

    @staticmethod
    def get_reminder_candidates() -> QuerySet[Profile]:
        """Return profiles that have not muted notifications."""
        return Profile.objects.filter(notifications_muted=False).order_by("created_at")
