# ur_core/rentals/apps.py
from __future__ import annotations

from django.apps import AppConfig


class RentalsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ur_core.rentals"
