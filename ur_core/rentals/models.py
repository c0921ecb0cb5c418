# ur_core/rentals/models.py
from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone

from ur_core.common.models import TimeStampedModel


class Student(TimeStampedModel):
    """
    Tenant renting a unit. Only the fields the billing core needs.
    """
    name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(blank=True)

    class Meta:
        db_table = "rentals_student"

    def __str__(self) -> str:
        return f"{self.name} {self.last_name}".strip()


class UnitStatus(models.TextChoices):
    AVAILABLE = "AVAILABLE", "Available"
    RENTED = "RENTED", "Rented"
    INACTIVE = "INACTIVE", "Inactive"


class Unit(TimeStampedModel):
    """
    Rentable unit inside an owner's property.

    offered_services: services the owner offers for this unit. Entries are
    {"id": ...}, {"name": ...}, both, or a bare string (a name).
    """
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(max_length=32, choices=UnitStatus.choices, default=UnitStatus.AVAILABLE)

    description = models.JSONField(default=dict, blank=True)
    offered_services = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "rentals_unit"

    def __str__(self) -> str:
        return self.name


class Assignment(TimeStampedModel):
    """
    A student's tenancy of a unit. anchor_date is the billing-cycle anchor:
    every monthly cut falls on its day-of-month and time.
    """
    student = models.ForeignKey(Student, on_delete=models.PROTECT, related_name="assignments")
    unit = models.ForeignKey(Unit, on_delete=models.PROTECT, related_name="assignments")
    anchor_date = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "rentals_assignment"
        indexes = [
            models.Index(fields=["student", "unit"]),
        ]

    def __str__(self) -> str:
        return f"Assignment {self.pk} student={self.student_id} unit={self.unit_id}"
