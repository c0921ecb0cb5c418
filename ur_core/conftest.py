# ur_core/conftest.py
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from ur_core.catalog.models import Service
from ur_core.rentals.models import Student, Unit
from ur_core.rentals.services import AssignmentService


def local_dt(year, month, day, hour=10, minute=0, second=0):
    """
    Aware datetime in the project's time zone (America/Mexico_City in tests).
    """
    return timezone.make_aware(datetime(year, month, day, hour, minute, second))


ANCHOR = local_dt(2024, 1, 15)


@pytest.fixture
def student(db):
    return Student.objects.create(name="Ana", last_name="López", email="ana@example.com")


@pytest.fixture
def water(db):
    return Service.objects.create(name="Agua", unit_price=Decimal("300.00"), is_base=True)


@pytest.fixture
def gym(db):
    return Service.objects.create(name="Gym", unit_price=Decimal("100.00"))


@pytest.fixture
def parking(db):
    return Service.objects.create(name="Parking", unit_price=Decimal("250.00"))


@pytest.fixture
def laundry(db):
    # Active add-on the unit does not offer.
    return Service.objects.create(name="Lavandería", unit_price=Decimal("80.00"))


@pytest.fixture
def unit(db, gym, parking):
    return Unit.objects.create(
        name="Depto 3B",
        price=Decimal("5000.00"),
        offered_services=[{"id": gym.id}, "  parking "],
    )


@pytest.fixture
def assignment(db, student, unit, water):
    """
    Tenancy anchored on 2024-01-15 10:00 local, with base services provisioned.
    """
    return AssignmentService.create_assignment(student_id=student.id, unit_id=unit.id, anchor_date=ANCHOR)


@pytest.fixture
def live_assignment(db, student, unit, water):
    """
    Anchored ten days ago, so "now" is never a cut day for it.
    """
    anchor = timezone.now() - timedelta(days=10)
    return AssignmentService.create_assignment(student_id=student.id, unit_id=unit.id, anchor_date=anchor)


@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user(username="testuser", password="testpass", is_active=True)


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def anon_client():
    return APIClient()
