"""Request schema for the daily questions job."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class DailyQuestionsJobRequest(BaseSchemaModel):
    """Optional overrides for the question created for every group."""

    question_text: str | None = Field(None, min_length=1, max_length=500)
    answer_options: list[str] | None = Field(None, max_length=10)
