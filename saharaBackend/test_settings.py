import os

# Mock SECRET_KEY for tests BEFORE importing settings to bypass validation
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403

# Override Database to use SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test_db.sqlite3",  # noqa: F405
    }
}

# Fast hashing keeps factories cheap
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

OTEL_TRACING_ENABLED = False

LOGGING["loggers"]["marketplace"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["authentication"]["level"] = "WARNING"  # noqa: F405

# Enable SessionAuthentication for tests to support client.force_login()
REST_FRAMEWORK["DEFAULT_AUTHENTICATION_CLASSES"].append(  # noqa: F405
    "rest_framework.authentication.SessionAuthentication"
)
