"""Exception handling utilities for the notification service."""

from core.exceptions.downstream_exceptions import (
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
    IdentityUserNotFoundError,
)
from core.exceptions.handlers import custom_exception_handler
from core.exceptions.service_exceptions import (
    ConfigurationError,
    GroupNotFoundError,
    NotGroupMemberError,
    ProfileNotFoundError,
    SmsDeliveryError,
)

__all__ = [
    "ConfigurationError",
    "DownstreamServiceError",
    "DownstreamServiceUnavailableError",
    "GroupNotFoundError",
    "IdentityUserNotFoundError",
    "NotGroupMemberError",
    "ProfileNotFoundError",
    "SmsDeliveryError",
    "custom_exception_handler",
]
