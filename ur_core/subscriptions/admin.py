# ur_core/subscriptions/admin.py
from __future__ import annotations

from django.contrib import admin

from ur_core.subscriptions.models import SubscriptionLink


@admin.register(SubscriptionLink)
class SubscriptionLinkAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "assignment",
        "service",
        "state",
        "price_snapshot",
        "effective_from",
        "effective_until",
        "added_at",
    )
    list_filter = ("state", "service__is_base")
    search_fields = ("id", "assignment__id", "service__name")
    autocomplete_fields = ("assignment", "service")
    # Links change only through SubscriptionService; the admin is for inspection.
    readonly_fields = ("state", "price_snapshot", "effective_from", "effective_until", "added_at")
    ordering = ("-added_at",)
