"""Downstream service clients package."""

from core.services.downstream.identity_client import IdentityClient

__all__ = ["IdentityClient"]
