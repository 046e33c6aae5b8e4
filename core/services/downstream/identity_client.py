"""Client for the identity provider (Supabase Auth) admin API."""

from uuid import UUID

from django.conf import settings

import structlog
from pydantic import ValidationError

from core.exceptions import ConfigurationError, IdentityUserNotFoundError
from core.schemas.identity import IdentityUser, IdentityUserPage
from core.services.downstream.base_downstream_client import BaseDownstreamClient

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 1000
MAX_PAGES = 50


class IdentityClient(BaseDownstreamClient):
    """Client for communicating with the identity provider admin API.

    The admin API only lists users page by page, so phone lookups fetch
    every page once and callers build their own id to phone map.
    """

    def __init__(
        self,
        base_url: str | None,
        service_key: str | None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """Initialize identity client.

        Args:
            base_url: Project URL of the identity provider
            service_key: Service-role key with admin rights
            page_size: Users requested per page
        """
        super().__init__(service_name="identity", base_url=base_url or "")
        self.service_key = service_key
        self.page_size = page_size

    @classmethod
    def from_settings(cls) -> "IdentityClient":
        """Build a client from the SUPABASE_* settings."""
        return cls(
            base_url=settings.SUPABASE_URL,
            service_key=settings.SUPABASE_SERVICE_ROLE_KEY,
        )

    def ensure_configured(self) -> None:
        """Raise if the URL or the service key is missing.

        Raises:
            ConfigurationError: Naming the missing setting
        """
        if not self.base_url:
            raise ConfigurationError("SUPABASE_URL")
        if not self.service_key:
            raise ConfigurationError("SUPABASE_SERVICE_ROLE_KEY")

    def _auth_headers(self) -> dict[str, str]:
        return {
            "apikey": self.service_key or "",
            "Authorization": f"Bearer {self.service_key}",
        }

    def list_users(self) -> list[IdentityUser]:
        """Fetch every identity user.

        Pages are requested until one comes back shorter than the page size.

        Returns:
            List of IdentityUser objects

        Raises:
            ConfigurationError: If the client is not configured
            DownstreamServiceError: For unexpected client errors
            DownstreamServiceUnavailableError: If the service is unavailable
            requests.Timeout: If a request times out
            requests.ConnectionError: If connection fails
        """
        self.ensure_configured()
        url = f"{self.base_url}/auth/v1/admin/users"

        users: list[IdentityUser] = []
        for page in range(1, MAX_PAGES + 1):
            response = self._make_request(
                "GET", url, params={"page": page, "per_page": self.page_size}
            )
            try:
                batch = IdentityUserPage.model_validate(response.json()).users
            except ValidationError as e:
                logger.error(
                    "identity_users_invalid_response",
                    page=page,
                    validation_errors=e.errors(),
                )
                raise

            users.extend(batch)
            if len(batch) < self.page_size:
                break
        else:
            logger.warning("identity_users_page_limit_reached", pages=MAX_PAGES)

        logger.info("identity_users_listed", count=len(users))
        return users

    def delete_user(self, user_id: UUID | str) -> None:
        """Delete an identity user.

        Raises:
            ConfigurationError: If the client is not configured
            IdentityUserNotFoundError: If the user does not exist
            DownstreamServiceError: For other client errors
            DownstreamServiceUnavailableError: If the service is unavailable
        """
        self.ensure_configured()
        url = f"{self.base_url}/auth/v1/admin/users/{user_id}"

        logger.info("identity_user_delete_requested", user_id=str(user_id))
        response = self._make_request("DELETE", url)

        if response.status_code == 404:
            logger.warning("identity_user_not_found", user_id=str(user_id))
            raise IdentityUserNotFoundError(user_id=str(user_id))

        logger.info("identity_user_deleted", user_id=str(user_id))
