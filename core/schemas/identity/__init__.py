"""Identity provider schemas."""

from core.schemas.identity.identity_user import IdentityUser, IdentityUserPage

__all__ = ["IdentityUser", "IdentityUserPage"]
