# ur_core/subscriptions/apps.py
from __future__ import annotations

from django.apps import AppConfig


class SubscriptionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ur_core.subscriptions"
