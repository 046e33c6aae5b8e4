"""Shared helpers for component tests."""

from unittest.mock import Mock, patch

from core.auth.oauth2 import ADMIN_SCOPE, USER_SCOPE, OAuth2User


def user_principal(user_id):
    """Build the principal for a user token."""
    return OAuth2User(
        user_id=str(user_id), client_id="test-client", scopes=[USER_SCOPE]
    )


def admin_principal():
    """Build the principal for a service token."""
    return OAuth2User(
        user_id="service", client_id="test-client", scopes=[ADMIN_SCOPE]
    )


def authenticate_as(test_case, principal):
    """Patch bearer authentication for the rest of the test."""
    patcher = patch(
        "core.auth.oauth2.OAuth2Authentication.authenticate",
        return_value=(principal, None),
    )
    patcher.start()
    test_case.addCleanup(patcher.stop)


def fake_twilio(test_case, sid="SM123"):
    """Replace the Twilio client; returns the messages.create mock."""
    patcher = patch("core.services.sms_client.Client")
    mock_twilio = patcher.start()
    test_case.addCleanup(patcher.stop)
    create = mock_twilio.return_value.messages.create
    create.return_value = Mock(sid=sid)
    return create


def empty_identity_directory(test_case):
    """Make the identity provider return no users."""
    patcher = patch(
        "core.services.downstream.identity_client.IdentityClient.list_users",
        return_value=[],
    )
    patcher.start()
    test_case.addCleanup(patcher.stop)
