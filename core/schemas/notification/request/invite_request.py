"""Request schema for SMS group invites."""

from pydantic import Field, field_validator

from core.schemas.base_schema_model import BaseSchemaModel


class InviteRequest(BaseSchemaModel):
    """Request schema for texting group invites to phone numbers."""

    phones: list[str] = Field(..., min_length=1, max_length=50)
    group_name: str = Field(..., min_length=1, max_length=255)
    inviter_name: str | None = Field(None, max_length=100)
    app_url: str | None = Field(
        None, max_length=2048, description="Join link appended to the SMS"
    )

    @field_validator("phones")
    @classmethod
    def phones_not_blank(cls, phones: list[str]) -> list[str]:
        """Strip numbers and reject blank entries."""
        cleaned = [phone.strip() for phone in phones]
        if any(not phone for phone in cleaned):
            raise ValueError("Phone numbers must not be blank")
        return cleaned
