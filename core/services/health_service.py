"""Health checks for the liveness and readiness probes."""

import logging
import time
from collections.abc import Callable

from django.conf import settings
from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

from core.enums import HealthStatus
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with short-lived caching.

    Database and Redis are probed; the SMS and identity providers are only
    checked for configuration, since probing them would cost API calls.
    """

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached probe results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: dict[str, tuple[float, DependencyHealth]] = {}

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive)."""
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with dependency health checks.

        Returns degraded (ready=True, degraded=True) when a dependency is
        down, so the pod stays in rotation while it recovers.
        """
        dependencies = {
            "database": self.check_database_health(),
            "redis": self.check_redis_health(),
            "sms_provider": self.check_sms_configuration(),
            "identity_provider": self.check_identity_configuration(),
        }
        all_healthy = all(dep.healthy for dep in dependencies.values())

        return ReadinessResponse(
            ready=True,
            status="ready" if all_healthy else "degraded",
            degraded=not all_healthy,
            dependencies=dependencies,
        )

    def _cached(
        self, name: str, probe: Callable[[], DependencyHealth]
    ) -> DependencyHealth:
        now = time.time()
        cached = self._cache.get(name)
        if cached is not None and (now - cached[0]) < self.cache_ttl_seconds:
            return cached[1]
        health = probe()
        self._cache[name] = (now, health)
        return health

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity without running a query."""

        def probe() -> DependencyHealth:
            start_time = time.perf_counter()
            try:
                connection.ensure_connection()
            except OperationalError as e:
                logger.warning(f"Database health check failed: {e}")
                return DependencyHealth(
                    healthy=False,
                    status=HealthStatus.UNHEALTHY,
                    message=f"Database connection failed: {e!s}",
                    response_time_ms=_elapsed_ms(start_time),
                )
            except Exception as e:
                logger.error(f"Unexpected error checking database: {e}")
                return DependencyHealth(
                    healthy=False,
                    status=HealthStatus.ERROR,
                    message=f"Unexpected error checking database: {e!s}",
                    response_time_ms=_elapsed_ms(start_time),
                )
            return DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=_elapsed_ms(start_time),
            )

        return self._cached("database", probe)

    def check_redis_health(self) -> DependencyHealth:
        """Check Redis connectivity with a set/get round trip."""

        def probe() -> DependencyHealth:
            start_time = time.perf_counter()
            try:
                cache.set("__health_check__", "ok", timeout=1)
                result = cache.get("__health_check__")
            except Exception as e:
                logger.warning(f"Redis health check failed: {e}")
                return DependencyHealth(
                    healthy=False,
                    status=HealthStatus.ERROR,
                    message=f"Redis connection failed: {e!s}",
                    response_time_ms=_elapsed_ms(start_time),
                )
            if result != "ok":
                return DependencyHealth(
                    healthy=False,
                    status=HealthStatus.UNHEALTHY,
                    message="Redis health check failed: unexpected result",
                    response_time_ms=_elapsed_ms(start_time),
                )
            return DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Redis connection successful",
                response_time_ms=_elapsed_ms(start_time),
            )

        return self._cached("redis", probe)

    def check_sms_configuration(self) -> DependencyHealth:
        """Report whether the Twilio credentials are present."""
        return _configuration_health(
            "SMS provider",
            ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_PHONE_NUMBER"),
        )

    def check_identity_configuration(self) -> DependencyHealth:
        """Report whether the identity provider settings are present."""
        return _configuration_health(
            "Identity provider", ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY")
        )


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


def _configuration_health(
    name: str, setting_names: tuple[str, ...]
) -> DependencyHealth:
    missing = [key for key in setting_names if not getattr(settings, key, "")]
    if missing:
        return DependencyHealth(
            healthy=False,
            status=HealthStatus.DISCONNECTED,
            message=f"{name} not configured: missing {', '.join(missing)}",
        )
    return DependencyHealth(
        healthy=True,
        status=HealthStatus.HEALTHY,
        message=f"{name} configured",
    )


# Global health service instance
health_service = HealthService()
