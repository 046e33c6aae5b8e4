"""Services for the core app."""

from core.services.health_service import HealthService, health_service

# The notification and account services are not exported here to avoid
# circular imports during Django app initialization. Import them directly
# from their modules.

__all__ = [
    "HealthService",
    "health_service",
]
