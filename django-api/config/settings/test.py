"""Settings for the test suite: local SQLite, no DATABASE_URL needed."""

from config.settings.base import *  # noqa: F401,F403
from config.settings.base import BASE_DIR

SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test.sqlite3",
    },
}
