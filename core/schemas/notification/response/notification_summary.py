"""Summary returned by event notification endpoints."""

from pydantic import Field

from core.enums import SkipReason
from core.schemas.base_schema_model import BaseSchemaModel


class SendFailure(BaseSchemaModel):
    """A recipient the SMS could not be sent to."""

    to: str = Field(..., description="Masked recipient phone")
    error: str = Field(..., description="Provider error message")


class NotificationSummary(BaseSchemaModel):
    """Counts for one notification run."""

    sent: int = Field(0, description="Messages accepted by the provider")
    eligible: int = Field(0, description="Recipients with a resolvable phone")
    failed: int = Field(0, description="Messages the provider rejected")
    reason: SkipReason | None = Field(
        None, description="Why nothing was sent, when nothing was sent"
    )
    failures: list[SendFailure] = Field(default_factory=list)
