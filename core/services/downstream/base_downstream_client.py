"""Base client for downstream service communication."""

from typing import Any

import requests
import structlog

from core.exceptions import DownstreamServiceError, DownstreamServiceUnavailableError

logger = structlog.get_logger(__name__)


class BaseDownstreamClient:
    """Base class for downstream service HTTP clients."""

    def __init__(self, service_name: str, base_url: str, timeout: int = 10):
        """Initialize base downstream client.

        Args:
            service_name: Name of the downstream service (for logging/errors)
            base_url: Base URL for the service
            timeout: Request timeout in seconds
        """
        self.service_name = service_name
        self.base_url = base_url.rstrip("/") if base_url else base_url
        self.timeout = timeout

    def _auth_headers(self) -> dict[str, str]:
        """Return credentials for each request; subclasses override."""
        return {}

    def _get_headers(self) -> dict[str, str]:
        """Get common HTTP headers for requests.

        Returns:
            Dictionary of headers
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(self._auth_headers())
        return headers

    def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        **kwargs,
    ) -> requests.Response:
        """Make HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Full URL for the request
            params: Query parameters
            json_data: JSON body data
            **kwargs: Additional arguments to pass to requests

        Returns:
            Response object (404 responses are returned to the caller)

        Raises:
            DownstreamServiceError: For client errors (4xx except 404)
            DownstreamServiceUnavailableError: For server errors (5xx)
            requests.Timeout: For timeout errors
            requests.ConnectionError: For connection errors
        """
        headers = self._get_headers()

        if "headers" in kwargs:
            headers.update(kwargs.pop("headers"))

        if "timeout" not in kwargs:
            kwargs["timeout"] = self.timeout

        logger.info(
            "downstream_request",
            service=self.service_name,
            method=method,
            url=url,
            params=params,
        )

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                **kwargs,
            )
        except requests.Timeout:
            logger.error(
                "downstream_request_timeout",
                service=self.service_name,
                method=method,
                url=url,
                timeout=kwargs["timeout"],
            )
            raise
        except requests.ConnectionError as e:
            logger.error(
                "downstream_connection_failed",
                service=self.service_name,
                method=method,
                url=url,
                error=str(e),
            )
            raise

        logger.info(
            "downstream_response",
            service=self.service_name,
            method=method,
            url=url,
            status_code=response.status_code,
        )

        if response.status_code >= 500:
            logger.error(
                "downstream_server_error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise DownstreamServiceUnavailableError(
                service_name=self.service_name,
                status_code=response.status_code,
            )

        if response.status_code >= 400 and response.status_code != 404:
            logger.error(
                "downstream_client_error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise DownstreamServiceError(
                message=(
                    f"{self.service_name} returned "
                    f"{response.status_code}: {response.text}"
                ),
                service_name=self.service_name,
                status_code=response.status_code,
            )

        return response
