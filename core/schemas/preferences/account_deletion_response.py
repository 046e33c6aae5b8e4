"""Response schema for account deletion."""

from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class AccountDeletionResponse(BaseSchemaModel):
    """What was removed when an account was deleted."""

    user_id: UUID = Field(...)
    deleted: dict[str, int] = Field(
        default_factory=dict, description="Rows removed per table"
    )
    identity_user: str = Field(
        ..., description="'deleted', 'not_found' or 'error: <message>'"
    )
