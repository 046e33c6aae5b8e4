"""Schemas for users returned by the identity provider admin API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class IdentityUser(BaseModel):
    """The subset of an identity user this service reads."""

    model_config = ConfigDict(extra="ignore")

    id: UUID = Field(..., description="Identity user id (same as profile id)")
    phone: str | None = Field(None, description="Phone number, possibly without '+'")


class IdentityUserPage(BaseModel):
    """One page of the admin user listing."""

    model_config = ConfigDict(extra="ignore")

    users: list[IdentityUser] = Field(default_factory=list)
