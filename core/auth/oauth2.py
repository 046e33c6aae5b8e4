"""OAuth2 bearer authentication for Django REST Framework.

Supports two validation modes:
1. Token Introspection: validates tokens by calling an introspection endpoint
2. Local JWT Validation: verifies access tokens issued by the identity
   provider with the shared JWT secret

Identity provider tokens carry a ``role`` claim rather than scopes, so the
role is mapped onto this service's scopes when no ``scopes`` claim exists.
"""

from typing import Any, cast

from django.conf import settings
from django.core.cache import cache

import jwt
import requests
import structlog
from rest_framework import authentication, exceptions

logger = structlog.get_logger(__name__)

USER_SCOPE = "notification:user"
ADMIN_SCOPE = "notification:admin"

ROLE_SCOPES: dict[str, list[str]] = {
    "authenticated": [USER_SCOPE],
    "service_role": [ADMIN_SCOPE],
}


class OAuth2User:
    """Simple user object for OAuth2 authenticated requests.

    This is not a Django User model, just a container for token claims.
    """

    def __init__(self, user_id: str, client_id: str, scopes: list[str]):
        """Initialize OAuth2 user.

        Args:
            user_id: User ID from token (or client_id for client_credentials)
            client_id: OAuth2 client ID
            scopes: List of granted scopes
        """
        self.id = user_id
        self.user_id = user_id
        self.client_id = client_id
        self.scopes = scopes
        self.is_authenticated = True

    def has_scope(self, scope: str) -> bool:
        """Check if user has a specific scope."""
        return scope in self.scopes

    @property
    def is_admin(self) -> bool:
        """Whether the token may act on behalf of any user."""
        return self.has_scope(ADMIN_SCOPE)

    def can_act_for(self, user_id: Any) -> bool:
        """Check whether the token may act as ``user_id``."""
        return self.is_admin or str(user_id) == str(self.user_id)

    def __str__(self):
        """String representation."""
        return f"OAuth2User(user_id={self.user_id}, client_id={self.client_id})"


class OAuth2Authentication(authentication.BaseAuthentication):
    """OAuth2 Bearer token authentication.

    Extracts and validates Bearer tokens from Authorization header.
    Supports both introspection and local JWT validation.
    """

    def authenticate(self, request):
        """Authenticate the request using OAuth2 Bearer token.

        Args:
            request: Django request object

        Returns:
            Tuple of (user, auth) or None if authentication not attempted

        Raises:
            AuthenticationFailed: If authentication fails
        """
        if not settings.OAUTH2_SERVICE_ENABLED:
            return None

        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]

        if settings.OAUTH2_INTROSPECTION_ENABLED:
            token_data = self._validate_via_introspection(token)
        else:
            token_data = self._validate_via_jwt(token)

        user = OAuth2User(
            user_id=token_data.get("sub") or token_data.get("client_id", "unknown"),
            client_id=token_data.get("client_id") or "unknown",
            scopes=token_data.get("scopes") or [],
        )

        return (user, token)

    def _validate_via_introspection(self, token: str) -> dict[str, Any]:
        """Validate token via the introspection endpoint.

        Args:
            token: Access token to validate

        Returns:
            Token data from introspection

        Raises:
            AuthenticationFailed: If token is invalid
        """
        cache_key = f"{settings.OAUTH2_TOKEN_CACHE_PREFIX}{token[:16]}"
        cached_data = cache.get(cache_key)
        if cached_data:
            logger.debug("token_introspection_cache_hit")
            return cast("dict[str, Any]", cached_data)

        try:
            response = requests.post(
                settings.OAUTH2_INTROSPECT_URL,
                data={
                    "token": token,
                    "token_type_hint": "access_token",
                },
                auth=(settings.OAUTH2_CLIENT_ID, settings.OAUTH2_CLIENT_SECRET),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=5,
            )
        except requests.RequestException as e:
            logger.error("token_introspection_request_failed", error=str(e))
            raise exceptions.AuthenticationFailed(
                "Token validation service unavailable"
            ) from e

        if response.status_code != 200:
            logger.warning(
                "token_introspection_failed",
                status_code=response.status_code,
            )
            raise exceptions.AuthenticationFailed("Token introspection failed")

        data = response.json()
        if not data.get("active", False):
            logger.info("token_not_active")
            raise exceptions.AuthenticationFailed("Token is not active")

        scopes = data.get("scopes")
        if isinstance(data.get("scope"), str) and not scopes:
            scopes = data["scope"].split()
        data["scopes"] = scopes or []

        cache.set(cache_key, data, timeout=settings.OAUTH2_TOKEN_CACHE_TTL)
        return cast("dict[str, Any]", data)

    def _validate_via_jwt(self, token: str) -> dict[str, Any]:
        """Validate token locally by verifying the JWT signature.

        Args:
            token: JWT access token to validate

        Returns:
            Token claims normalized to the introspection shape

        Raises:
            AuthenticationFailed: If token is invalid
        """
        if not settings.JWT_SECRET:
            logger.error("jwt_secret_not_configured")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256", "HS384", "HS512"],
                audience=settings.JWT_AUDIENCE or None,
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_iat": True,
                    "verify_nbf": True,
                    "verify_aud": bool(settings.JWT_AUDIENCE),
                    "require": ["sub", "exp"],
                },
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("jwt_expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("jwt_invalid", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        scopes = payload.get("scopes") or ROLE_SCOPES.get(payload.get("role"), [])

        return {
            "active": True,
            "sub": payload.get("sub"),
            "client_id": payload.get("client_id"),
            "scopes": scopes,
            "exp": payload.get("exp"),
            "iat": payload.get("iat"),
        }

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"
