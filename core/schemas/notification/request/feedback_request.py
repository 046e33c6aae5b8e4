"""Request schema for texting user feedback to the admin."""

from pydantic import Field, field_validator

from core.schemas.base_schema_model import BaseSchemaModel


class FeedbackRequest(BaseSchemaModel):
    """Request schema for user feedback sent by SMS."""

    feedback: str = Field(..., min_length=1, max_length=5000)
    user_name: str | None = Field(None, max_length=100)
    user_phone: str | None = Field(None, max_length=32)

    @field_validator("feedback")
    @classmethod
    def feedback_not_blank(cls, feedback: str) -> str:
        """Strip the text and reject blank feedback."""
        feedback = feedback.strip()
        if not feedback:
            raise ValueError("Feedback must not be blank")
        return feedback
