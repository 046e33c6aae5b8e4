"""Unit tests for AccountService."""

from unittest.mock import Mock
from uuid import uuid4

from django.test import TestCase

import requests

from core.exceptions import (
    GroupNotFoundError,
    IdentityUserNotFoundError,
    NotGroupMemberError,
    ProfileNotFoundError,
)
from core.models import (
    DailyQuestion,
    Group,
    GroupMembership,
    GroupNotificationSetting,
    Profile,
)
from core.schemas.preferences import (
    GroupNotificationSettingsRequest,
    NotificationPreferencesRequest,
)
from core.services.account_service import AccountService
from tests.factories import (
    DailyQuestionFactory,
    GroupNotificationSettingFactory,
    ProfileFactory,
    make_group,
)


class AccountServiceTestCase(TestCase):
    """Shared fixtures for account service tests."""

    def setUp(self):
        """Set up test fixtures."""
        self.identity_client = Mock()
        self.service = AccountService(identity_client=self.identity_client)
        self.owner = ProfileFactory()
        self.member = ProfileFactory()
        self.group = make_group(self.owner, self.member)


class TestUpdateGroupSettings(AccountServiceTestCase):
    """Tests for update_group_settings."""

    def test_creates_row_with_default_for_omitted_flag(self):
        """Test that the first write keeps omitted flags enabled."""
        result = self.service.update_group_settings(
            self.member.id,
            self.group.id,
            GroupNotificationSettingsRequest(message_sms=False),
        )

        self.assertFalse(result.message_sms)
        self.assertTrue(result.daily_question_sms)
        self.assertEqual(GroupNotificationSetting.objects.count(), 1)

    def test_updates_existing_row_partially(self):
        """Test that a later write only changes the provided flag."""
        GroupNotificationSettingFactory(
            user=self.member, group=self.group, message_sms=False
        )

        result = self.service.update_group_settings(
            self.member.id,
            self.group.id,
            GroupNotificationSettingsRequest(daily_question_sms=False),
        )

        self.assertFalse(result.message_sms)
        self.assertFalse(result.daily_question_sms)
        self.assertEqual(GroupNotificationSetting.objects.count(), 1)

    def test_non_member_is_rejected(self):
        """Test that only members may store settings for a group."""
        outsider = ProfileFactory()

        with self.assertRaises(NotGroupMemberError):
            self.service.update_group_settings(
                outsider.id,
                self.group.id,
                GroupNotificationSettingsRequest(message_sms=False),
            )

    def test_unknown_group_is_rejected(self):
        """Test that a missing group is not found."""
        with self.assertRaises(GroupNotFoundError):
            self.service.update_group_settings(
                self.member.id,
                uuid4(),
                GroupNotificationSettingsRequest(message_sms=False),
            )


class TestLeaveGroup(AccountServiceTestCase):
    """Tests for leave_group."""

    def test_removes_membership_and_settings(self):
        """Test that leaving also clears the group's settings row."""
        GroupNotificationSettingFactory(user=self.member, group=self.group)

        self.service.leave_group(self.member.id, self.group.id)

        self.assertFalse(
            GroupMembership.objects.filter(user=self.member, group=self.group).exists()
        )
        self.assertFalse(
            GroupNotificationSetting.objects.filter(user=self.member).exists()
        )

    def test_leaving_twice_raises(self):
        """Test that a non-member cannot leave."""
        self.service.leave_group(self.member.id, self.group.id)

        with self.assertRaises(NotGroupMemberError):
            self.service.leave_group(self.member.id, self.group.id)


class TestUpdatePreferences(AccountServiceTestCase):
    """Tests for update_preferences."""

    def test_muting_turns_daily_reminder_off(self):
        """Test the mute side effect."""
        result = self.service.update_preferences(
            self.member.id, NotificationPreferencesRequest(notifications_muted=True)
        )

        self.assertTrue(result.notifications_muted)
        self.assertFalse(result.daily_sms_enabled)

    def test_enabling_daily_reminder_unmutes(self):
        """Test the opt-in side effect."""
        self.member.notifications_muted = True
        self.member.daily_sms_enabled = False
        self.member.save()

        result = self.service.update_preferences(
            self.member.id, NotificationPreferencesRequest(daily_sms_enabled=True)
        )

        self.assertFalse(result.notifications_muted)
        self.assertTrue(result.daily_sms_enabled)
        self.member.refresh_from_db()
        self.assertFalse(self.member.notifications_muted)

    def test_unknown_profile_raises(self):
        """Test that a missing profile is not found."""
        with self.assertRaises(ProfileNotFoundError):
            self.service.update_preferences(
                uuid4(), NotificationPreferencesRequest(notifications_muted=False)
            )


class TestDeleteAccount(AccountServiceTestCase):
    """Tests for delete_account."""

    def test_deletes_owned_groups_and_identity(self):
        """Test cascade over owned data and the identity record."""
        DailyQuestionFactory(group=self.group)

        result = self.service.delete_account(self.owner.id)

        self.assertEqual(result.identity_user, "deleted")
        self.identity_client.delete_user.assert_called_once_with(self.owner.id)
        self.assertFalse(Profile.objects.filter(id=self.owner.id).exists())
        self.assertFalse(Group.objects.filter(id=self.group.id).exists())
        self.assertFalse(DailyQuestion.objects.exists())
        self.assertEqual(result.deleted["profiles"], 1)
        self.assertEqual(result.deleted["groups"], 1)
        self.assertTrue(Profile.objects.filter(id=self.member.id).exists())

    def test_member_deletion_keeps_group(self):
        """Test that deleting a member only removes their membership."""
        result = self.service.delete_account(self.member.id)

        self.assertTrue(Group.objects.filter(id=self.group.id).exists())
        self.assertEqual(result.deleted["group_memberships"], 1)

    def test_missing_identity_user_is_reported(self):
        """Test that a 404 from the identity provider is not an error."""
        self.identity_client.delete_user.side_effect = IdentityUserNotFoundError(
            str(self.member.id)
        )

        result = self.service.delete_account(self.member.id)

        self.assertEqual(result.identity_user, "not_found")

    def test_identity_failure_is_reported_after_data_deletion(self):
        """Test that identity errors do not undo the data deletion."""
        self.identity_client.delete_user.side_effect = requests.ConnectionError(
            "refused"
        )

        result = self.service.delete_account(self.member.id)

        self.assertTrue(result.identity_user.startswith("error: "))
        self.assertFalse(Profile.objects.filter(id=self.member.id).exists())
