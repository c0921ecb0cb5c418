# ur_core/subscriptions/services.py
from __future__ import annotations

import logging
from datetime import datetime

from django.db import transaction
from django.utils import timezone

from ur_core.catalog.models import Service
from ur_core.catalog.selectors import get_service
from ur_core.rentals.models import Assignment
from ur_core.rentals.selectors import get_assignment, is_service_offered
from ur_core.subscriptions.cycles import is_cut_day, next_cut_after
from ur_core.subscriptions.errors import (
    AlreadyActive,
    AlreadyPending,
    AssignmentNotFound,
    BaseServiceImmutable,
    InvalidStateTransition,
    LinkNotFound,
    NotOffered,
    ServiceNotFoundOrInactive,
)
from ur_core.subscriptions.models import OPEN_STATES, LinkState, SubscriptionLink
from ur_core.subscriptions.pricing import PriceBreakdown
from ur_core.subscriptions.selectors import breakdown_for, links_for_assignment

logger = logging.getLogger(__name__)


class SubscriptionService:
    """
    Add-on subscriptions for an assignment.

    Every mutation locks the assignment row first, so adds and removes for the
    same assignment run one at a time; different assignments never contend.
    """

    @staticmethod
    def _lock_assignment(assignment_id: int) -> Assignment:
        assignment = get_assignment(assignment_id=assignment_id, for_update=True)
        if assignment is None:
            raise AssignmentNotFound(details={"assignment_id": assignment_id})
        return assignment

    @staticmethod
    def _ensure_not_base(service: Service) -> None:
        if service.is_base:
            raise BaseServiceImmutable(details={"service_id": service.id})

    @staticmethod
    def _breakdown(assignment: Assignment, now: datetime) -> PriceBreakdown:
        return breakdown_for(assignment, links_for_assignment(assignment.id), now)

    @staticmethod
    @transaction.atomic
    def add_service(*, assignment_id: int, service_id: int, now: datetime | None = None) -> PriceBreakdown:
        """
        Subscribes the assignment to an add-on service.

        On the tenant's cut day the link is ACTIVE immediately; any other day
        it is PENDING until the next cut. No proration either way.
        """
        now = now or timezone.now()
        assignment = SubscriptionService._lock_assignment(assignment_id)

        service = get_service(service_id=service_id, active_only=True)
        if service is None:
            raise ServiceNotFoundOrInactive(details={"service_id": service_id})
        SubscriptionService._ensure_not_base(service)

        if not is_service_offered(unit=assignment.unit, service_id=service.id, service_name=service.name):
            raise NotOffered(details={"service_id": service.id, "unit_id": assignment.unit_id})

        existing = list(
            SubscriptionLink.objects.filter(assignment=assignment, service=service).order_by("id")
        )
        if any(link.state == LinkState.ACTIVE for link in existing):
            raise AlreadyActive(details={"service_id": service.id})
        if any(link.state == LinkState.PENDING for link in existing):
            raise AlreadyPending(details={"service_id": service.id})
        if any(
            link.state == LinkState.CANCELLED and link.effective_until and link.effective_until > now
            for link in existing
        ):
            raise InvalidStateTransition(
                "The service was cancelled and is still billed until the next cut.",
                details={"service_id": service.id},
            )

        if is_cut_day(assignment.anchor_date, now):
            state, effective_from = LinkState.ACTIVE, now
        else:
            state, effective_from = LinkState.PENDING, next_cut_after(assignment.anchor_date, now)

        link = SubscriptionLink.objects.create(
            assignment=assignment,
            service=service,
            state=state,
            price_snapshot=service.unit_price,
            effective_from=effective_from,
            added_at=now,
        )

        logger.info(
            "Link %s %s: assignment=%s service=%s from=%s snapshot=%s",
            link.id,
            "activated" if state == LinkState.ACTIVE else "scheduled",
            assignment.id,
            service.id,
            effective_from.isoformat(),
            link.price_snapshot,
        )
        return SubscriptionService._breakdown(assignment, now)

    @staticmethod
    @transaction.atomic
    def remove_service(*, assignment_id: int, service_id: int, now: datetime | None = None) -> PriceBreakdown:
        """
        Unsubscribes an add-on.

        A link that never became effective is deleted. Otherwise it is
        CANCELLED and keeps billing until the next cut.
        """
        now = now or timezone.now()
        assignment = SubscriptionService._lock_assignment(assignment_id)

        service = get_service(service_id=service_id)
        if service is None:
            raise ServiceNotFoundOrInactive(details={"service_id": service_id})
        SubscriptionService._ensure_not_base(service)

        links = list(
            SubscriptionLink.objects.filter(assignment=assignment, service=service).order_by("id")
        )
        link = next((l for l in links if l.state in OPEN_STATES), None)
        if link is None:
            if links:
                raise InvalidStateTransition(
                    "The service is already cancelled for this assignment.",
                    details={"service_id": service.id},
                )
            raise LinkNotFound(details={"service_id": service.id})

        not_started = link.effective_from is not None and link.effective_from > now
        if link.state == LinkState.PENDING and not_started:
            link_id = link.id
            link.delete()
            logger.info(
                "Link %s deleted before start: assignment=%s service=%s",
                link_id,
                assignment.id,
                service.id,
            )
        else:
            link.state = LinkState.CANCELLED
            link.effective_until = next_cut_after(assignment.anchor_date, now)
            link.save(update_fields=["state", "effective_until"])
            logger.info(
                "Link %s cancelled: assignment=%s service=%s until=%s",
                link.id,
                assignment.id,
                service.id,
                link.effective_until.isoformat(),
            )

        return SubscriptionService._breakdown(assignment, now)
