"""Response schema for the SMS delivery self-test."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class SmsTestResponse(BaseSchemaModel):
    """Provider id of the test message."""

    sid: str = Field(..., description="Provider message SID")
