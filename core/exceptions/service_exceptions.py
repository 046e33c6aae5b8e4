"""Exceptions raised by the notification and account services."""


class ConfigurationError(Exception):
    """A required setting (provider credential or shared secret) is missing."""

    def __init__(self, setting_name: str):
        """Initialize configuration error.

        Args:
            setting_name: Name of the missing setting
        """
        self.setting_name = setting_name
        super().__init__(f"Required setting {setting_name} is not configured")


class GroupNotFoundError(Exception):
    """Group does not exist (404)."""

    def __init__(self, group_id):
        """Initialize group not found error.

        Args:
            group_id: ID of the group that was not found
        """
        self.group_id = group_id
        super().__init__(f"Group with ID {group_id} not found")


class ProfileNotFoundError(Exception):
    """Profile does not exist (404)."""

    def __init__(self, user_id):
        """Initialize profile not found error.

        Args:
            user_id: ID of the profile that was not found
        """
        self.user_id = user_id
        super().__init__(f"Profile with ID {user_id} not found")


class NotGroupMemberError(Exception):
    """The user is not a member of the group (403)."""

    def __init__(self, user_id, group_id):
        """Initialize not-a-member error.

        Args:
            user_id: ID of the user
            group_id: ID of the group
        """
        self.user_id = user_id
        self.group_id = group_id
        super().__init__(f"User {user_id} is not a member of group {group_id}")


class SmsDeliveryError(Exception):
    """A single, caller-visible SMS could not be delivered (502)."""

    def __init__(self, message: str, provider_code: int | None = None):
        """Initialize SMS delivery error.

        Args:
            message: Error message from the provider
            provider_code: Provider-specific error code if available
        """
        self.provider_code = provider_code
        super().__init__(message)
