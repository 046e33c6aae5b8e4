"""Middleware components for the notification service."""

from core.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
