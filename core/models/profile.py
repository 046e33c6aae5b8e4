"""Profile model."""

import uuid
from typing import ClassVar

from django.db import models


class Profile(models.Model):
    """User profile matching the public.profiles table.

    The primary key is the identity provider's user id. This model is
    unmanaged as the database schema is owned by the hosted backend.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone_number = models.CharField(max_length=32, null=True, blank=True)
    display_name = models.CharField(max_length=255, default="", blank=True)
    notifications_muted = models.BooleanField(default=False)
    daily_sms_enabled = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "profiles"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["created_at"]

    def __str__(self) -> str:
        """Return string representation of profile."""
        return self.display_name or str(self.id)

    def __repr__(self) -> str:
        """Return detailed representation of profile."""
        return f"<Profile(id={self.id}, display_name='{self.display_name}')>"
