from .base import *  # noqa

DEBUG = True
LOGGING["root"]["level"] = os.getenv("LOG_LEVEL", "DEBUG")  # noqa: F405
