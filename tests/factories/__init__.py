"""Factory classes for test data generation."""

import factory
from factory.django import DjangoModelFactory
from faker import Faker

from core.models import (
    DailyQuestion,
    DailyReminder,
    Group,
    GroupMembership,
    GroupNotificationSetting,
    Profile,
)

fake = Faker()


class ProfileFactory(DjangoModelFactory):
    """Factory for Profile model."""

    class Meta:
        model = Profile

    phone_number = factory.Sequence(lambda n: f"+1555{n:07d}")
    display_name = factory.LazyAttribute(lambda _: fake.first_name())
    notifications_muted = False
    daily_sms_enabled = True


class GroupFactory(DjangoModelFactory):
    """Factory for Group model."""

    class Meta:
        model = Group

    name = factory.LazyAttribute(lambda _: f"{fake.word().title()} Crew")
    owner = factory.SubFactory(ProfileFactory)


class GroupMembershipFactory(DjangoModelFactory):
    """Factory for GroupMembership model."""

    class Meta:
        model = GroupMembership

    group = factory.SubFactory(GroupFactory)
    user = factory.SubFactory(ProfileFactory)
    role = "member"


class GroupNotificationSettingFactory(DjangoModelFactory):
    """Factory for GroupNotificationSetting model."""

    class Meta:
        model = GroupNotificationSetting

    user = factory.SubFactory(ProfileFactory)
    group = factory.SubFactory(GroupFactory)
    daily_question_sms = True
    message_sms = True


class DailyQuestionFactory(DjangoModelFactory):
    """Factory for DailyQuestion model."""

    class Meta:
        model = DailyQuestion

    group = factory.SubFactory(GroupFactory)
    date_et = factory.LazyAttribute(lambda _: fake.date_object())
    question_text = "What's something that made you smile today?"


class DailyReminderFactory(DjangoModelFactory):
    """Factory for DailyReminder model."""

    class Meta:
        model = DailyReminder

    user = factory.SubFactory(ProfileFactory)
    date_et = factory.LazyAttribute(lambda _: fake.date_object())


def make_group(*members, name=None):
    """Create a group whose members are ``members`` (profiles)."""
    owner = members[0] if members else ProfileFactory()
    group = GroupFactory(owner=owner, **({"name": name} if name else {}))
    for member in members:
        GroupMembershipFactory(group=group, user=member)
    return group
