"""Daily deduplication and local-time helpers for the scheduled jobs.

Each daily artifact table carries a unique constraint on (scope, date_et).
``DedupGuard.claim`` inserts the row inside a savepoint; a unique violation
means another run already produced today's artifact. The existence of the
row is the only "already done" signal.

Dates and windows are computed on the wall clock of
``NOTIFICATION_TIMEZONE`` through ``zoneinfo``, so daylight-saving changes
never move the local midnight or the reminder window.
"""

from datetime import UTC, date, datetime, time
from typing import Any
from uuid import UUID
from zoneinfo import ZoneInfo

from django.conf import settings
from django.db import IntegrityError, models, transaction
from django.utils import timezone

import structlog

logger = structlog.get_logger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def get_notification_timezone() -> ZoneInfo:
    """Return the timezone whose calendar the daily jobs follow."""
    return ZoneInfo(settings.NOTIFICATION_TIMEZONE)


def _to_local(now: datetime | None, tz: ZoneInfo | None) -> datetime:
    now = now or timezone.now()
    if timezone.is_naive(now):
        now = now.replace(tzinfo=UTC)
    return now.astimezone(tz or get_notification_timezone())


def _seconds_of_day(clock: time) -> int:
    return clock.hour * 3600 + clock.minute * 60 + clock.second


def local_date(now: datetime | None = None, tz: ZoneInfo | None = None) -> date:
    """Return the calendar date of ``now`` in the notification timezone.

    Naive datetimes are taken as UTC.
    """
    return _to_local(now, tz).date()


def local_midnight_utc(
    now: datetime | None = None, tz: ZoneInfo | None = None
) -> datetime:
    """Return the UTC instant of local midnight on the local date of ``now``."""
    tz = tz or get_notification_timezone()
    midnight = datetime.combine(local_date(now, tz), time.min, tzinfo=tz)
    return midnight.astimezone(UTC)


def is_within_window(
    now: datetime | None = None,
    tz: ZoneInfo | None = None,
    start: time | None = None,
    minutes: int | None = None,
) -> bool:
    """Check whether ``now`` falls in a local wall-clock window.

    The window is ``[start, start + minutes)`` on the local clock, so a
    12:00 start with 10 minutes accepts 12:00 through 12:09. A window that
    runs past midnight continues on the next local day.

    Args:
        now: Instant to check (defaults to the current time)
        tz: Local timezone (defaults to NOTIFICATION_TIMEZONE)
        start: Window start (defaults to DAILY_REMINDER_HOUR/MINUTE)
        minutes: Window length (defaults to DAILY_REMINDER_WINDOW_MINUTES)
    """
    if start is None:
        start = time(settings.DAILY_REMINDER_HOUR, settings.DAILY_REMINDER_MINUTE)
    if minutes is None:
        minutes = settings.DAILY_REMINDER_WINDOW_MINUTES

    local = _to_local(now, tz).time()
    elapsed = (_seconds_of_day(local) - _seconds_of_day(start)) % SECONDS_PER_DAY
    return elapsed < minutes * 60


class DedupGuard:
    """At most one artifact per (scope, local date) for a daily job.

    Args:
        model: Artifact model with a ``date_et`` field and a unique
            constraint on (scope, date_et)
        scope_field: Attribute naming the scope column, e.g. ``group_id``
    """

    def __init__(self, model: type[models.Model], scope_field: str) -> None:
        """Initialize the guard for one artifact table."""
        self.model = model
        self.scope_field = scope_field

    def _lookup(self, scope_id: UUID, day: date) -> dict[str, Any]:
        return {self.scope_field: scope_id, "date_et": day}

    def should_run(self, scope_id: UUID, day: date) -> bool:
        """Return True if no artifact exists yet for the scope and day."""
        return not self.model.objects.filter(**self._lookup(scope_id, day)).exists()

    def claim(
        self, scope_id: UUID, day: date, **fields: Any
    ) -> tuple[models.Model, bool]:
        """Atomically create today's artifact.

        Returns:
            Tuple of (artifact, created). ``created`` is False when another
            run already holds the artifact for this scope and day.

        Raises:
            IntegrityError: If the insert failed for a reason other than an
                existing artifact
        """
        lookup = self._lookup(scope_id, day)
        try:
            with transaction.atomic():
                artifact = self.model.objects.create(**lookup, **fields)
        except IntegrityError:
            existing = self.model.objects.filter(**lookup).first()
            if existing is None:
                raise
            logger.info(
                "daily_artifact_already_claimed",
                artifact=self.model.__name__,
                scope_id=str(scope_id),
                date=day.isoformat(),
            )
            return existing, False

        logger.info(
            "daily_artifact_claimed",
            artifact=self.model.__name__,
            scope_id=str(scope_id),
            date=day.isoformat(),
        )
        return artifact, True

    def mark_done(self, scope_id: UUID, day: date, **fields: Any) -> models.Model:
        """Record that the job ran for the scope and day.

        Idempotent: an existing artifact is returned unchanged.
        """
        artifact, _ = self.claim(scope_id, day, **fields)
        return artifact
