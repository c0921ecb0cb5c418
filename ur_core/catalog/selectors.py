# ur_core/catalog/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from ur_core.catalog.models import Service


def get_service(*, service_id: int, active_only: bool = False) -> Service | None:
    qs = Service.objects.filter(id=service_id)
    if active_only:
        qs = qs.filter(is_active=True)
    return qs.first()


def available_services(*, only_addons: bool = False) -> QuerySet[Service]:
    qs = Service.objects.filter(is_active=True)
    if only_addons:
        qs = qs.filter(is_base=False)
    return qs.order_by("name", "id")


def base_services() -> QuerySet[Service]:
    return Service.objects.filter(is_active=True, is_base=True).order_by("name", "id")
