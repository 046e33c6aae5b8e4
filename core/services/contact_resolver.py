"""Phone number resolution for notification recipients."""

from collections.abc import Iterable
from uuid import UUID

import requests
import structlog
from pydantic import ValidationError

from core.exceptions import ConfigurationError, DownstreamServiceError
from core.repositories.notification_repository import NotificationRepository
from core.services.downstream.identity_client import IdentityClient

logger = structlog.get_logger(__name__)


def normalize_phone(phone: str | None) -> str | None:
    """Return the phone in E.164 form, or None when blank.

    The identity provider stores numbers without the leading '+'.
    """
    if not phone:
        return None
    phone = phone.strip()
    if not phone:
        return None
    return phone if phone.startswith("+") else f"+{phone}"


class ContactResolver:
    """Maps user ids to phone numbers.

    The profile phone wins; the identity provider phone is the fallback.
    The identity directory is listed at most once per call, and only when
    some requested user has no profile phone. If the identity provider
    cannot be reached, resolution continues with profile phones alone.
    """

    def __init__(
        self,
        identity_client: IdentityClient | None = None,
        repository: NotificationRepository | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            identity_client: Identity provider client (defaults to settings)
            repository: Profile query source
        """
        self.identity_client = identity_client or IdentityClient.from_settings()
        self.repository = repository or NotificationRepository()

    def _identity_phones(self) -> dict[UUID, str]:
        try:
            users = self.identity_client.list_users()
        except (
            ConfigurationError,
            DownstreamServiceError,
            ValidationError,
            requests.RequestException,
        ) as e:
            logger.warning(
                "identity_lookup_failed_using_profile_phones_only",
                error=str(e),
                error_type=type(e).__name__,
            )
            return {}
        return {user.id: user.phone for user in users if user.phone}

    def resolve(self, user_ids: Iterable[UUID]) -> dict[UUID, str | None]:
        """Resolve a phone for each user.

        Args:
            user_ids: Users to resolve

        Returns:
            Mapping of every requested user id to a phone, or None when
            neither source has one
        """
        user_ids = list(dict.fromkeys(user_ids))
        if not user_ids:
            return {}

        profile_phones = self.repository.get_profile_phones(user_ids)
        contacts = {
            user_id: normalize_phone(profile_phones.get(user_id))
            for user_id in user_ids
        }

        missing = [user_id for user_id, phone in contacts.items() if phone is None]
        if missing:
            identity_phones = self._identity_phones()
            for user_id in missing:
                contacts[user_id] = normalize_phone(identity_phones.get(user_id))

        logger.debug(
            "contacts_resolved",
            requested=len(user_ids),
            resolved=sum(1 for phone in contacts.values() if phone),
        )
        return contacts

    def resolve_contacts(self, user_ids: Iterable[UUID]) -> dict[UUID, str]:
        """Resolve phones and drop users without one."""
        return {
            user_id: phone
            for user_id, phone in self.resolve(user_ids).items()
            if phone
        }
