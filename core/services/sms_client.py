"""Thin wrapper around the Twilio REST client."""

from django.conf import settings

import structlog
from twilio.rest import Client

from core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


def mask_phone(phone: str | None) -> str:
    """Mask a phone number for logging, keeping the last four digits."""
    if not phone:
        return ""
    return f"***{phone[-4:]}"


class SmsClient:
    """Sends single text messages through Twilio.

    The Twilio client is created lazily so that a missing credential only
    fails the code paths that actually send.
    """

    def __init__(
        self,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str | None,
    ) -> None:
        """Initialize the SMS client.

        Args:
            account_sid: Twilio account SID
            auth_token: Twilio auth token
            from_number: Sender phone number in E.164 format
        """
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self._client: Client | None = None

    @classmethod
    def from_settings(cls) -> "SmsClient":
        """Build a client from the TWILIO_* settings."""
        return cls(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            from_number=settings.TWILIO_PHONE_NUMBER,
        )

    def ensure_configured(self) -> None:
        """Raise if any credential is missing.

        Raises:
            ConfigurationError: Naming the first missing setting
        """
        for setting_name, value in (
            ("TWILIO_ACCOUNT_SID", self.account_sid),
            ("TWILIO_AUTH_TOKEN", self.auth_token),
            ("TWILIO_PHONE_NUMBER", self.from_number),
        ):
            if not value:
                logger.error("sms_client_not_configured", missing=setting_name)
                raise ConfigurationError(setting_name)

    @property
    def client(self) -> Client:
        """Return the underlying Twilio client, creating it on first use."""
        if self._client is None:
            self.ensure_configured()
            self._client = Client(self.account_sid, self.auth_token)
        return self._client

    def send_sms(self, to: str, body: str) -> str:
        """Send one message.

        Args:
            to: Recipient phone number
            body: Message text

        Returns:
            The provider message SID

        Raises:
            ConfigurationError: If credentials are missing
            TwilioRestException: If the provider rejects the message
        """
        message = self.client.messages.create(to=to, from_=self.from_number, body=body)
        logger.info("sms_sent", to=mask_phone(to), sid=message.sid)
        return message.sid
