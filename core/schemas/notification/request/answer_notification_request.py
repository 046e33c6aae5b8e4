"""Request schema for new poll answer notifications."""

from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class AnswerNotificationRequest(BaseSchemaModel):
    """Request schema for notifying a group that a member answered the poll."""

    group_id: UUID = Field(..., description="Group the answer was posted in")
    answer_user_id: UUID = Field(..., description="User who answered")
    answer_user_name: str | None = Field(
        None, max_length=100, description="Display name shown in the SMS"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "group_id": "550e8400-e29b-41d4-a716-446655440001",
                "answer_user_id": "550e8400-e29b-41d4-a716-446655440002",
                "answer_user_name": "Alex",
            }
        }
    }
