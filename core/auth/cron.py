"""Shared-secret authentication for the scheduled job endpoints."""

import hmac

from django.conf import settings

import structlog
from rest_framework import authentication, exceptions

from core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


class CronCaller:
    """Principal for requests carrying the cron secret."""

    user_id = "cron"
    scopes: list[str] = []
    is_authenticated = True

    def has_scope(self, _scope: str) -> bool:
        """Cron callers hold no user scopes."""
        return False

    def __str__(self):
        """String representation."""
        return "CronCaller"


class CronSecretAuthentication(authentication.BaseAuthentication):
    """Accepts ``Authorization: Bearer <CRON_SECRET>``.

    The scheduled endpoints fan out SMS to every group or user, so they are
    never open: an unset secret is a configuration error, not a bypass.
    """

    def authenticate(self, request):
        """Authenticate the request against CRON_SECRET.

        Raises:
            ConfigurationError: If CRON_SECRET is not set
            AuthenticationFailed: If the header is missing or wrong
        """
        secret = settings.CRON_SECRET
        if not secret:
            logger.error("cron_secret_not_configured")
            raise ConfigurationError("CRON_SECRET")

        auth_header = request.headers.get("authorization", "")
        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.NotAuthenticated("Missing cron secret")

        if not hmac.compare_digest(parts[1].encode(), secret.encode()):
            logger.warning("cron_secret_mismatch", path=request.path)
            raise exceptions.AuthenticationFailed("Invalid cron secret")

        return (CronCaller(), None)

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"
