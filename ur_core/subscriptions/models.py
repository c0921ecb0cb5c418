# ur_core/subscriptions/models.py
from __future__ import annotations

from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from ur_core.catalog.models import Service
from ur_core.rentals.models import Assignment


class LinkState(models.TextChoices):
    PENDING = "PENDING", "Pending"
    ACTIVE = "ACTIVE", "Active"
    CANCELLED = "CANCELLED", "Cancelled"


OPEN_STATES = (LinkState.PENDING, LinkState.ACTIVE)


class SubscriptionLink(models.Model):
    """
    Billing record joining an assignment and a catalog service.

    price_snapshot is the catalog price at creation time and is never
    recalculated. CANCELLED links keep billing until effective_until and are
    retained as history; links cancelled before ever becoming effective are
    deleted instead.
    """
    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="service_links")
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name="subscription_links")

    state = models.CharField(
        max_length=16,
        choices=LinkState.choices,
        default=LinkState.ACTIVE,
        db_index=True,
    )
    price_snapshot = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    effective_from = models.DateTimeField(null=True, blank=True)
    effective_until = models.DateTimeField(null=True, blank=True)

    added_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "subscriptions_link"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["assignment", "service"],
                condition=Q(state__in=["PENDING", "ACTIVE"]),
                name="uq_open_link_per_assignment_service",
            ),
            models.CheckConstraint(
                condition=Q(effective_until__isnull=True)
                | Q(effective_from__isnull=True)
                | Q(effective_until__gte=F("effective_from")),
                name="ck_link_until_after_from",
            ),
        ]
        indexes = [
            models.Index(fields=["assignment", "state"]),
        ]

    def __str__(self) -> str:
        return f"Link {self.pk} assignment={self.assignment_id} service={self.service_id} {self.state}"

    @property
    def is_open(self) -> bool:
        return self.state in OPEN_STATES
