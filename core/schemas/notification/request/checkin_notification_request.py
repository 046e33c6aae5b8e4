"""Request schema for new check-in notifications."""

from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class CheckinNotificationRequest(BaseSchemaModel):
    """Request schema for notifying the groups a check-in was shared with.

    An empty ``group_ids`` list is valid and produces a ``no_groups`` summary.
    """

    user_id: UUID = Field(..., description="User who checked in")
    user_name: str | None = Field(None, max_length=100)
    checkin_number: int = Field(..., ge=0, description="Mood rating posted")
    group_ids: list[UUID] = Field(
        default_factory=list,
        max_length=100,
        description="Groups the check-in was shared with",
    )
