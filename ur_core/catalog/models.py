# ur_core/catalog/models.py
from __future__ import annotations

from decimal import Decimal

from django.db import models

from ur_core.common.models import TimeStampedModel


class Service(TimeStampedModel):
    """
    Catalog of recurring services a tenant can be billed for.

    Base services (water, power, internet) are bundled into the unit price and
    linked automatically when an assignment is created; tenants cannot add or
    remove them.
    """
    name = models.CharField(max_length=100)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    is_base = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "catalog_service"
        indexes = [
            models.Index(fields=["is_active", "is_base"]),
        ]

    def __str__(self) -> str:
        return self.name
