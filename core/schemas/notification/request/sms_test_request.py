"""Request schema for the SMS delivery self-test."""

from pydantic import Field, field_validator

from core.schemas.base_schema_model import BaseSchemaModel


class SmsTestRequest(BaseSchemaModel):
    """Request schema for sending a test message to one phone."""

    phone: str = Field(..., min_length=1, max_length=32)

    @field_validator("phone")
    @classmethod
    def phone_not_blank(cls, phone: str) -> str:
        """Strip the number and reject a blank one."""
        phone = phone.strip()
        if not phone:
            raise ValueError("Phone number must not be blank")
        return phone
