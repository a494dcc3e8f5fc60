# config/settings/test.py
from .base import *  # noqa

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Tests never reach the real endpoint; clients are built with httpx.MockTransport.
GEMINI_API_KEY = "test-key"
ALERT_FEED_TRANSPORT = "push"
