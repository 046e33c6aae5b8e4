"""Response schema for feedback texts."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class FeedbackResponse(BaseSchemaModel):
    """Provider id of the feedback message."""

    sid: str = Field(..., description="Provider message SID")
