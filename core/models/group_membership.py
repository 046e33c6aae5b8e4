"""GroupMembership model."""

from typing import ClassVar

from django.db import models


class GroupMembership(models.Model):
    """Membership of a profile in a group.

    The role is presentational only and never affects notifications.
    """

    group = models.ForeignKey(
        "core.Group",
        on_delete=models.CASCADE,
        related_name="memberships",
        db_column="group_id",
    )
    user = models.ForeignKey(
        "core.Profile",
        on_delete=models.CASCADE,
        related_name="memberships",
        db_column="user_id",
    )
    role = models.CharField(max_length=20, default="member")
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "group_memberships"
        managed = False  # Schema is managed externally
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=["group", "user"], name="unique_group_membership"
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of membership."""
        return f"{self.user_id} in {self.group_id}"
