from .base import *  # noqa

DEBUG = False
APP_ENV = "test"
IS_PRODUCTION = False
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# No redis in tests: counters live in the test database
RATE_LIMIT_BACKEND = "database"

GST_API_KEY = ""
SMS_API_KEY = ""
SMS_API_URL = ""

CELERY_TASK_ALWAYS_EAGER = True
