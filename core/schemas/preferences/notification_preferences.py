"""Schemas for account-wide notification preferences."""

from uuid import UUID

from pydantic import Field, model_validator

from core.schemas.base_schema_model import BaseSchemaModel


class NotificationPreferencesRequest(BaseSchemaModel):
    """Partial update of the global mute and daily reminder opt-in."""

    notifications_muted: bool | None = None
    daily_sms_enabled: bool | None = None

    @model_validator(mode="after")
    def require_a_preference(self) -> "NotificationPreferencesRequest":
        """Reject bodies that change nothing or contradict themselves."""
        if self.notifications_muted is None and self.daily_sms_enabled is None:
            raise ValueError("At least one preference must be provided")
        if self.notifications_muted and self.daily_sms_enabled:
            raise ValueError("Daily SMS cannot be enabled while muting notifications")
        return self


class NotificationPreferencesResponse(BaseSchemaModel):
    """Account-wide preferences after the update."""

    user_id: UUID = Field(...)
    notifications_muted: bool = Field(...)
    daily_sms_enabled: bool = Field(...)
