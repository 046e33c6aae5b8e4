"""Eligibility resolution for group notification events.

One resolver serves every event. ``EVENT_POLICIES`` maps each event to the
per-group flag that gates it and to the rule used when the event spans more
than one group:

- ``SINGLE_GROUP``: a member is excluded when the flag is off for the
  (member, group) pair.
- ``ANY_GROUP``: a member is excluded only when the flag is off for every
  event group they belong to.

A missing settings row counts as enabled. Muted users and the acting user
are never eligible. Phone reachability is checked later by the contact
resolver.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from uuid import UUID

import structlog

from core.enums import EligibilityRule, NotificationEvent, NotificationFlag
from core.repositories.notification_repository import NotificationRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EventPolicy:
    """Flag and multi-group rule governing one event."""

    flag: NotificationFlag
    rule: EligibilityRule


EVENT_POLICIES: dict[NotificationEvent, EventPolicy] = {
    NotificationEvent.NEW_ANSWER: EventPolicy(
        NotificationFlag.MESSAGE_SMS, EligibilityRule.SINGLE_GROUP
    ),
    NotificationEvent.NEW_MESSAGE: EventPolicy(
        NotificationFlag.MESSAGE_SMS, EligibilityRule.SINGLE_GROUP
    ),
    NotificationEvent.NEW_CHECKIN: EventPolicy(
        NotificationFlag.MESSAGE_SMS, EligibilityRule.ANY_GROUP
    ),
    NotificationEvent.DAILY_QUESTION_READY: EventPolicy(
        NotificationFlag.DAILY_QUESTION_SMS, EligibilityRule.SINGLE_GROUP
    ),
}


def resolve_eligible(
    group_ids: Iterable[UUID],
    acting_user_id: UUID | None,
    flag: NotificationFlag,
    memberships: Iterable[tuple[UUID, UUID]],
    settings: Mapping[tuple[UUID, UUID], bool],
    muted_user_ids: Iterable[UUID],
    rule: EligibilityRule = EligibilityRule.SINGLE_GROUP,
) -> set[UUID]:
    """Compute the users to notify for an event.

    Args:
        group_ids: Groups the event belongs to
        acting_user_id: User who caused the event (never notified), or None
        flag: Per-group flag that gates the event (documents the lookup that
            produced ``settings``)
        memberships: (user_id, group_id) pairs for the event groups
        settings: Stored flag values keyed by (user_id, group_id)
        muted_user_ids: Users with notifications muted globally
        rule: How the flag combines across groups

    Returns:
        Set of eligible user ids
    """
    event_groups = set(group_ids)
    if not event_groups:
        return set()

    muted = set(muted_user_ids)
    shared_groups: dict[UUID, set[UUID]] = defaultdict(set)
    for user_id, group_id in memberships:
        if group_id in event_groups and user_id != acting_user_id:
            shared_groups[user_id].add(group_id)

    eligible = set()
    for user_id, groups in shared_groups.items():
        if user_id in muted:
            continue
        enabled = [settings.get((user_id, group_id), True) for group_id in groups]
        if rule is EligibilityRule.ANY_GROUP:
            if any(enabled):
                eligible.add(user_id)
        elif all(enabled):
            eligible.add(user_id)

    logger.debug(
        "eligibility_resolved",
        flag=flag.value,
        rule=rule.value,
        group_count=len(event_groups),
        member_count=len(shared_groups),
        eligible_count=len(eligible),
    )
    return eligible


def resolve_reminder_eligible(profiles: Iterable) -> set[UUID]:
    """Return ids of profiles that opted into the daily reminder.

    Args:
        profiles: Objects exposing ``id``, ``notifications_muted`` and
            ``daily_sms_enabled``
    """
    return {
        profile.id
        for profile in profiles
        if not profile.notifications_muted and profile.daily_sms_enabled
    }


@dataclass
class EligibilityResult:
    """Outcome of a repository-backed resolution.

    ``member_ids`` holds every member of the event groups other than the
    actor, so callers can tell "nobody else is here" apart from "everybody
    opted out".
    """

    member_ids: set[UUID] = field(default_factory=set)
    eligible_ids: set[UUID] = field(default_factory=set)


class EligibilityResolver:
    """Loads memberships, settings and mutes, then applies the event policy."""

    def __init__(self, repository: NotificationRepository | None = None) -> None:
        """Initialize the resolver.

        Args:
            repository: Query source (defaults to NotificationRepository)
        """
        self.repository = repository or NotificationRepository()

    def resolve(
        self,
        event: NotificationEvent,
        group_ids: Iterable[UUID],
        acting_user_id: UUID | None = None,
    ) -> EligibilityResult:
        """Resolve the eligible users for an event.

        Raises:
            KeyError: If the event has no group policy (daily reminders are
                resolved with ``resolve_reminder_eligible``)
        """
        policy = EVENT_POLICIES[event]
        group_ids = list(dict.fromkeys(group_ids))
        if not group_ids:
            return EligibilityResult()

        memberships = self.repository.get_memberships(group_ids)
        member_ids = {
            user_id for user_id, _ in memberships if user_id != acting_user_id
        }
        if not member_ids:
            return EligibilityResult()

        settings = self.repository.get_flag_settings(
            group_ids, member_ids, policy.flag
        )
        muted = self.repository.get_muted_user_ids(member_ids)

        eligible = resolve_eligible(
            group_ids,
            acting_user_id,
            policy.flag,
            memberships,
            settings,
            muted,
            policy.rule,
        )
        return EligibilityResult(member_ids=member_ids, eligible_ids=eligible)
