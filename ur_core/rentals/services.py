# ur_core/rentals/services.py
from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from ur_core.catalog.selectors import base_services
from ur_core.rentals.models import Assignment, UnitStatus
from ur_core.subscriptions.models import LinkState, SubscriptionLink

logger = logging.getLogger(__name__)


class AssignmentService:
    @staticmethod
    @transaction.atomic
    def create_assignment(*, student_id: int, unit_id: int, anchor_date=None) -> Assignment:
        """
        Creates the tenancy and provisions every active base service as an
        ACTIVE link from the anchor date. This is the only place base services
        get linked; the subscription engine refuses to add or remove them.
        """
        anchor = anchor_date or timezone.now()

        assignment = Assignment.objects.create(
            student_id=student_id,
            unit_id=unit_id,
            anchor_date=anchor,
        )

        links = [
            SubscriptionLink(
                assignment=assignment,
                service=service,
                state=LinkState.ACTIVE,
                price_snapshot=service.unit_price,
                effective_from=anchor,
            )
            for service in base_services()
        ]
        SubscriptionLink.objects.bulk_create(links)

        assignment.unit.status = UnitStatus.RENTED
        assignment.unit.save(update_fields=["status", "updated_at"])

        logger.info(
            "Assignment %s created (student=%s unit=%s anchor=%s, %d base services)",
            assignment.id,
            student_id,
            unit_id,
            anchor.isoformat(),
            len(links),
        )
        return assignment
