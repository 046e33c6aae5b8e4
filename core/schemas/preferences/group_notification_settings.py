"""Schemas for per-group SMS settings."""

from uuid import UUID

from pydantic import Field, model_validator

from core.schemas.base_schema_model import BaseSchemaModel


class GroupNotificationSettingsRequest(BaseSchemaModel):
    """Partial update of a user's flags for one group.

    Omitted flags keep their stored value (or the enabled default).
    """

    daily_question_sms: bool | None = None
    message_sms: bool | None = None

    @model_validator(mode="after")
    def require_a_flag(self) -> "GroupNotificationSettingsRequest":
        """Reject bodies that change nothing."""
        if self.daily_question_sms is None and self.message_sms is None:
            raise ValueError("At least one setting must be provided")
        return self


class GroupNotificationSettingsResponse(BaseSchemaModel):
    """Stored flags for one (user, group) pair."""

    user_id: UUID = Field(...)
    group_id: UUID = Field(...)
    daily_question_sms: bool = Field(...)
    message_sms: bool = Field(...)
