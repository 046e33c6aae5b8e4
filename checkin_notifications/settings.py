"""Django settings for the check-in notification service.

Values come from environment variables so the same image runs locally,
in staging and in production. Provider credentials (Supabase, Twilio) are
optional at import time; the code paths that need them raise a
ConfigurationError when they are missing.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-local-development-key")

DEBUG = os.getenv("DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "django_rq",
    "core",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "core.middleware.RequestIDMiddleware",
]

ROOT_URLCONF = "checkin_notifications.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "checkin_notifications.wsgi.application"

# Database: the hosted Postgres of the backend-as-a-service owns the schema
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "postgres"),
        "USER": os.getenv("DB_USER", "postgres"),
        "PASSWORD": os.getenv("DB_PASSWORD", ""),
        "HOST": os.getenv("DB_HOST", "localhost"),
        "PORT": os.getenv("DB_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", "60")),
        "OPTIONS": {
            "options": f"-c search_path={os.getenv('DB_SCHEMA', 'public')}",
        },
    }
}

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
    }
}

RQ_QUEUES = {
    "default": {
        "URL": REDIS_URL,
        "DEFAULT_TIMEOUT": 360,
    },
}

AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "core.auth.oauth2.OAuth2Authentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "core.exceptions.handlers.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# OAuth2 bearer tokens for user-facing endpoints
OAUTH2_SERVICE_ENABLED = os.getenv("OAUTH2_SERVICE_ENABLED", "true").lower() == "true"
OAUTH2_INTROSPECTION_ENABLED = (
    os.getenv("OAUTH2_INTROSPECTION_ENABLED", "false").lower() == "true"
)
OAUTH2_INTROSPECT_URL = os.getenv(
    "OAUTH2_INTROSPECT_URL", "http://localhost:8080/api/v1/auth/oauth2/introspect"
)
OAUTH2_CLIENT_ID = os.getenv("OAUTH2_CLIENT_ID", "")
OAUTH2_CLIENT_SECRET = os.getenv("OAUTH2_CLIENT_SECRET", "")
OAUTH2_TOKEN_CACHE_PREFIX = "oauth2:introspect:"
OAUTH2_TOKEN_CACHE_TTL = int(os.getenv("OAUTH2_TOKEN_CACHE_TTL", "60"))
JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")

# Shared secret for the scheduled job endpoints
CRON_SECRET = os.getenv("CRON_SECRET", "")

# Identity provider (Supabase Auth admin API)
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

# SMS provider (Twilio)
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID", "")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN", "")
TWILIO_PHONE_NUMBER = os.getenv("TWILIO_PHONE_NUMBER", "")
SMS_MAX_CONCURRENCY = int(os.getenv("SMS_MAX_CONCURRENCY", "5"))

# Admin phone that receives user feedback texts
FEEDBACK_ADMIN_PHONE = os.getenv("FEEDBACK_ADMIN_PHONE", "")

# Product name and links embedded in SMS bodies
APP_NAME = os.getenv("APP_NAME", "Juggu")
APP_URL = os.getenv("APP_URL", "https://questionswithfriends.app").rstrip("/")

# Daily jobs run on the local calendar of this timezone
NOTIFICATION_TIMEZONE = os.getenv("NOTIFICATION_TIMEZONE", "America/New_York")
DAILY_REMINDER_HOUR = int(os.getenv("DAILY_REMINDER_HOUR", "12"))
DAILY_REMINDER_MINUTE = int(os.getenv("DAILY_REMINDER_MINUTE", "0"))
DAILY_REMINDER_WINDOW_MINUTES = int(os.getenv("DAILY_REMINDER_WINDOW_MINUTES", "10"))

TEST_MODE = False
