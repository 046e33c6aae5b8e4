"""Test settings: SQLite in memory, local cache, silent logging."""

from django.db.models.signals import class_prepared

from .settings import *  # noqa: F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

DEBUG = False

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "root": {
        "handlers": ["null"],
        "level": "CRITICAL",
    },
    "loggers": {
        "django": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
        "core": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
    },
}

TEST_MODE = True

CRON_SECRET = "test-cron-secret"
JWT_SECRET = "test-jwt-secret"
OAUTH2_INTROSPECTION_ENABLED = False

SUPABASE_URL = "https://identity.test"
SUPABASE_SERVICE_ROLE_KEY = "test-service-role-key"

TWILIO_ACCOUNT_SID = "ACtest"
TWILIO_AUTH_TOKEN = "test-auth-token"
TWILIO_PHONE_NUMBER = "+15550000000"
FEEDBACK_ADMIN_PHONE = "+15559990000"

APP_URL = "https://app.test"


# The models are unmanaged because the hosted database owns the schema.
# Tests still need the tables, so flip every model to managed as it loads.
def make_unmanaged_models_managed(sender, **_kwargs):
    """Mark each prepared model class as managed."""
    if not sender._meta.managed:
        sender._meta.managed = True


class_prepared.connect(make_unmanaged_models_managed)
