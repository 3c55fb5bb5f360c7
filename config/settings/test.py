# config/settings/test.py
from .base import *  # noqa

# ========================================
# Database
# ========================================

# SQLite unless DATABASE_URL points at a PostgreSQL test server
DATABASES = {
    'default': env.db("DATABASE_URL", default="sqlite:///:memory:"),  # noqa: F405
}
DATABASES['default']['CONN_MAX_AGE'] = 0  # Disable connection pooling in tests

# ========================================
# Migrations (Disable for tests)
# ========================================

class DisableMigrations:
    """Disable migrations for tests to speed them up."""
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None

MIGRATION_MODULES = DisableMigrations()

# ========================================
# Password Hashing (Faster for Tests)
# ========================================

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# ========================================
# API Throttling (Disabled for Tests)
# ========================================

# Disable all throttling for a faster and more stable test suite
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []  # noqa: F405
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}  # noqa: F405

# ========================================
# Caching (Dummy Cache for Tests)
# ========================================

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.dummy.DummyCache",
    }
}

# ========================================
# Logging (Minimal for Tests)
# ========================================

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",  # Only show warnings and errors in tests
    },
}

JLPT_TRYOUT = {
    "PASS_THRESHOLDS": {},
    "HIDE_FOREIGN_ATTEMPTS": True,
}

# Propagate exceptions for clearer test failures
DEBUG_PROPAGATE_EXCEPTIONS = True
