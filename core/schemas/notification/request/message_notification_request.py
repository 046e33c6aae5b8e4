"""Request schema for new group message notifications."""

from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class MessageNotificationRequest(BaseSchemaModel):
    """Request schema for notifying a group about a new message."""

    group_id: UUID = Field(..., description="Group the message was posted in")
    sender_user_id: UUID = Field(..., description="User who sent the message")
    sender_name: str | None = Field(None, max_length=100)
