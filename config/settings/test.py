# config/settings/test.py
from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

UR_BILLING = {
    "APP_NAME": "UniRenta",
    "CURRENCY": "MXN",
    "PRE_INVOICE_FROM_EMAIL": "facturas@unirenta.test",
}

TIME_ZONE = "America/Mexico_City"
