# ur_core/subscriptions/selectors.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from django.db.models import QuerySet
from django.utils import timezone

from ur_core.rentals.models import Assignment
from ur_core.rentals.selectors import get_assignment
from ur_core.subscriptions.cycles import next_cut_after
from ur_core.subscriptions.errors import AssignmentNotFound
from ur_core.subscriptions.models import LinkState, SubscriptionLink
from ur_core.subscriptions.pricing import PriceBreakdown, ServiceEntry, compose


def links_for_assignment(assignment_id: int) -> QuerySet[SubscriptionLink]:
    return (
        SubscriptionLink.objects.select_related("service")
        .filter(assignment_id=assignment_id)
        .order_by("id")
    )


def is_billable(link: SubscriptionLink, at: datetime) -> bool:
    """
    A link is billable at `at` while its effective_until (if any) is still
    ahead, and it is ACTIVE, PENDING with effective_from reached, or CANCELLED
    with effective_until still ahead.
    """
    until = link.effective_until
    if until is not None and until <= at:
        return False

    if link.state == LinkState.ACTIVE:
        return True
    if link.state == LinkState.PENDING:
        return link.effective_from is not None and link.effective_from <= at
    if link.state == LinkState.CANCELLED:
        return until is not None
    return False


def billable_links(links: Iterable[SubscriptionLink], at: datetime) -> list[SubscriptionLink]:
    return [link for link in links if is_billable(link, at)]


def _require_assignment(assignment_id: int) -> Assignment:
    assignment = get_assignment(assignment_id=assignment_id)
    if assignment is None:
        raise AssignmentNotFound(details={"assignment_id": assignment_id})
    return assignment


def breakdown_for(assignment: Assignment, links: Iterable[SubscriptionLink], at: datetime) -> PriceBreakdown:
    entries = [ServiceEntry.from_link(link) for link in billable_links(links, at)]
    return compose(assignment.unit.price, entries)


def projection_date(anchor: datetime, links: Iterable[SubscriptionLink], now: datetime) -> datetime:
    """
    Next cut after `now`, pushed further out while a pending link only starts
    after it.
    """
    pending_starts = [
        link.effective_from
        for link in links
        if link.state == LinkState.PENDING and link.effective_from is not None
    ]
    target = next_cut_after(anchor, now)
    while any(start > target for start in pending_starts):
        target = next_cut_after(anchor, target)
    return target


@dataclass(frozen=True)
class PreInvoice:
    assignment_id: int
    unit_name: str
    cut_date: datetime
    breakdown: PriceBreakdown

    def as_notification_payload(self) -> dict[str, Any]:
        return {
            "nombre_unidad": self.unit_name,
            "precio_base": self.breakdown.base,
            "servicios": [
                {"nombre": item.name, "precio": item.price}
                for item in self.breakdown.line_items
            ],
            "precio_total": self.breakdown.total,
            "fecha_corte": self.cut_date,
        }


class PricingQueryService:
    """
    Read side of the subscription engine. Stateless.
    """

    @staticmethod
    def list_links(*, assignment_id: int) -> list[SubscriptionLink]:
        _require_assignment(assignment_id)
        return list(links_for_assignment(assignment_id))

    @staticmethod
    def current_breakdown(*, assignment_id: int, now: datetime | None = None) -> PriceBreakdown:
        assignment = _require_assignment(assignment_id)
        at = now or timezone.now()
        return breakdown_for(assignment, links_for_assignment(assignment_id), at)

    @staticmethod
    def pre_invoice(*, assignment_id: int, now: datetime | None = None) -> PreInvoice:
        assignment = _require_assignment(assignment_id)
        at = now or timezone.now()
        links = list(links_for_assignment(assignment_id))

        cut = projection_date(assignment.anchor_date, links, at)
        return PreInvoice(
            assignment_id=assignment.id,
            unit_name=assignment.unit.name,
            cut_date=cut,
            breakdown=breakdown_for(assignment, links, cut),
        )
