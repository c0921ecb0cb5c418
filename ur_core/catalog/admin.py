# ur_core/catalog/admin.py
from __future__ import annotations

from django.contrib import admin

from ur_core.catalog.models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "unit_price", "is_base", "is_active", "updated_at")
    list_filter = ("is_base", "is_active")
    search_fields = ("name",)
    ordering = ("name",)
