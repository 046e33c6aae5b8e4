"""Group model."""

import uuid
from typing import ClassVar

from django.db import models


class Group(models.Model):
    """Friend group matching the public.groups table."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    owner = models.ForeignKey(
        "core.Profile",
        on_delete=models.CASCADE,
        related_name="owned_groups",
        db_column="owner_id",
    )
    question_prompt = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "groups"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["created_at"]

    def __str__(self) -> str:
        """Return string representation of group."""
        return self.name

    def __repr__(self) -> str:
        """Return detailed representation of group."""
        return f"<Group(id={self.id}, name='{self.name}')>"
