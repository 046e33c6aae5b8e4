"""Summaries returned by the scheduled daily jobs."""

from datetime import date

from pydantic import Field

from core.enums import SkipReason
from core.schemas.base_schema_model import BaseSchemaModel


class UnitFailure(BaseSchemaModel):
    """A group or user whose processing failed."""

    scope_id: str = Field(..., description="Group or user id")
    error: str = Field(..., description="Error message")


class DailyQuestionsSummary(BaseSchemaModel):
    """Outcome of a daily questions run."""

    date_et: date = Field(..., description="Local calendar date of the run")
    groups: int = Field(0, description="Groups examined")
    created: int = Field(0, description="Questions created by this run")
    skipped: int = Field(0, description="Groups that already had a question")
    sent: int = Field(0)
    failed: int = Field(0, description="Failed sends plus failed groups")
    failures: list[UnitFailure] = Field(default_factory=list)


class DailyReminderSummary(BaseSchemaModel):
    """Outcome of a daily reminder run."""

    date_et: date = Field(..., description="Local calendar date of the run")
    eligible: int = Field(0, description="Opted-in users with a phone")
    already_sent: int = Field(0, description="Users reminded earlier today")
    sent: int = Field(0)
    failed: int = Field(0)
    reason: SkipReason | None = None
    failures: list[UnitFailure] = Field(default_factory=list)
