"""Background jobs for the scheduled SMS runs.

These functions are enqueued by the RQ scheduler (see the
``schedule_daily_jobs`` management command). Both are safe to run more
often than needed: the daily artifacts make repeat runs on the same local
date send nothing new, and the reminder is gated to its local window.
"""

import structlog

from core.services.sms_notification_service import sms_notification_service

logger = structlog.get_logger(__name__)


def daily_questions_job() -> dict:
    """Create and announce today's question for every group.

    Returns:
        The run summary as JSON-compatible data (stored as the job result).
    """
    logger.info("daily_questions_job_started")
    summary = sms_notification_service.run_daily_questions()
    return summary.model_dump(mode="json")


def daily_reminder_job(enforce_window: bool = True) -> dict:
    """Send the daily check-in reminder when inside the local window.

    Args:
        enforce_window: Skip the run outside the configured local window.

    Returns:
        The run summary as JSON-compatible data (stored as the job result).
    """
    logger.info("daily_reminder_job_started", enforce_window=enforce_window)
    summary = sms_notification_service.run_daily_reminders(
        enforce_window=enforce_window
    )
    return summary.model_dump(mode="json")
