"""Bounded concurrent SMS dispatch with per-recipient failure isolation."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from django.conf import settings

import structlog

from core.services.sms_client import SmsClient, mask_phone

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OutboundSms:
    """One message to send."""

    to: str
    body: str


@dataclass(frozen=True)
class DispatchFailure:
    """A message that could not be sent."""

    to: str
    error: str


@dataclass
class DispatchResult:
    """Outcome of a dispatch batch."""

    sent: int = 0
    failures: list[DispatchFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        """Number of messages that failed."""
        return len(self.failures)


class SmsDispatcher:
    """Sends a batch of messages, at most ``max_workers`` at a time.

    Every exception raised while sending one message is recorded as a
    failure for that recipient; the rest of the batch is unaffected. There
    are no retries within a call.
    """

    def __init__(
        self, sms_client: SmsClient | None = None, max_workers: int | None = None
    ) -> None:
        """Initialize the dispatcher.

        Args:
            sms_client: Client used to send (defaults to one built from settings)
            max_workers: Concurrency cap (defaults to SMS_MAX_CONCURRENCY)
        """
        self.sms_client = sms_client or SmsClient.from_settings()
        self.max_workers = max(1, max_workers or settings.SMS_MAX_CONCURRENCY)

    def dispatch(self, messages: list[OutboundSms]) -> DispatchResult:
        """Send every message and report what happened.

        Args:
            messages: Messages with caller-built bodies

        Returns:
            DispatchResult with the sent count and failures in input order
        """
        result = DispatchResult()
        if not messages:
            return result

        failures: dict[int, DispatchFailure] = {}
        max_workers = min(len(messages), self.max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(self.sms_client.send_sms, message.to, message.body): i
                for i, message in enumerate(messages)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                message = messages[index]
                try:
                    future.result()
                    result.sent += 1
                except Exception as e:
                    logger.warning(
                        "sms_dispatch_failed",
                        to=mask_phone(message.to),
                        error=str(e),
                    )
                    failures[index] = DispatchFailure(to=message.to, error=str(e))

        result.failures = [failures[i] for i in sorted(failures)]
        logger.info(
            "sms_dispatch_completed",
            attempted=len(messages),
            sent=result.sent,
            failed=result.failed,
        )
        return result
