from datetime import timedelta
from pathlib import Path
import os
from dotenv import load_dotenv
load_dotenv()


BASE_DIR = Path(__file__).resolve().parents[2]

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-change-me")
DEBUG = os.getenv("DEBUG", "0") == "1"
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

# development | production; drives the GST / SMS mock fallbacks
APP_ENV = os.getenv("APP_ENV", "development").strip().lower()
IS_PRODUCTION = APP_ENV == "production"

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    "rest_framework",
    "drf_spectacular",

    "crm.common",
    "crm.audit",
    "crm.iam",
    "crm.accounts",
    "crm.contacts",
    "crm.campaigns",
    "crm.leads.apps.LeadsConfig",
    "crm.dashboard",
    "crm.search",
    "crm.subdealers",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",

    "crm.common.middleware.RequestIdMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": [
            "django.template.context_processors.request",
            "django.contrib.auth.context_processors.auth",
            "django.contrib.messages.context_processors.messages",
        ]},
    }
]

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

DATABASES = {
    "default": {
        "ENGINE": os.getenv("DB_ENGINE", "django.db.backends.postgresql"),
        "NAME": os.getenv("DB_NAME", "marketing_crm"),
        "USER": os.getenv("DB_USER", "marketing_crm"),
        "PASSWORD": os.getenv("DB_PASSWORD", "marketing_crm"),
        "HOST": os.getenv("DB_HOST", "127.0.0.1"),
        "PORT": os.getenv("DB_PORT", "5432"),
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "Asia/Kolkata"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "crm.iam.authentication.PrincipalAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "crm.common.exceptions.crm_exception_handler",
}

SPECTACULAR_SETTINGS = {"TITLE": "Marketing CRM API", "VERSION": "1.0.0"}

# Session tokens: stateless, no refresh, no revocation list
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=int(os.getenv("JWT_ACCESS_HOURS", "24"))),
    "ALGORITHM": "HS256",
    "SIGNING_KEY": os.getenv("JWT_SECRET", SECRET_KEY),
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_CLAIM": "user_id",
    "USER_ID_FIELD": "id",
}

# OTP hashing
OTP_HASH_SECRET = os.getenv("OTP_HASH_SECRET", SECRET_KEY)

# GST registry lookup (mock data when no key is configured)
GST_API_KEY = os.getenv("GST_API_KEY", "")
GST_API_BASE_URL = os.getenv("GST_API_BASE_URL", "https://sheet.gstincheck.co.in/check")
GST_API_TIMEOUT = int(os.getenv("GST_API_TIMEOUT", "10"))

# SMS provider
SMS_API_KEY = os.getenv("SMS_API_KEY", "")
SMS_API_URL = os.getenv("SMS_API_URL", "")
SMS_SENDER_ID = os.getenv("SMS_SENDER_ID", "CRMOTP")
SMS_API_TIMEOUT = int(os.getenv("SMS_API_TIMEOUT", "10"))

# Redis (used for rate limiting)
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
# redis | database
RATE_LIMIT_BACKEND = os.getenv("RATE_LIMIT_BACKEND", "redis")
# database backend: buckets idle this long are deleted
RATE_LIMIT_BUCKET_IDLE_SECONDS = int(os.getenv("RATE_LIMIT_BUCKET_IDLE_SECONDS", "3600"))

OPENSEARCH_URL = os.getenv("OPENSEARCH_URL", "http://127.0.0.1:9200")
OPENSEARCH_INDEX_PREFIX = os.getenv("OPENSEARCH_INDEX_PREFIX", "marketing-crm")

# Celery
CELERY_BROKER_URL = REDIS_URL
CELERY_RESULT_BACKEND = REDIS_URL
CELERY_TASK_ALWAYS_EAGER = False
CELERY_BROKER_CONNECTION_RETRY_ON_STARTUP = True
CELERY_TASK_CREATE_MISSING_QUEUES = True
CELERY_TASK_DEFAULT_QUEUE = "celery"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = "Asia/Kolkata"
CELERY_ENABLE_UTC = True

CELERY_BEAT_SCHEDULE = {
    "prune-rate-limit-buckets-hourly": {
        "task": "crm.common.tasks.prune_rate_limit_buckets",
        "schedule": 3600.0,
    },
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_id": {"()": "crm.common.middleware.RequestIdLogFilter"},
    },
    "formatters": {
        "simple": {"format": "%(levelname)s %(asctime)s %(name)s [%(request_id)s] %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple", "filters": ["request_id"]},
    },
    "root": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
}
