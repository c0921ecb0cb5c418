# ur_core/subscriptions/notifications.py
from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone

from ur_core.rentals.selectors import get_assignment
from ur_core.subscriptions.errors import AssignmentNotFound, TenantEmailMissing
from ur_core.subscriptions.selectors import PreInvoice, PricingQueryService

logger = logging.getLogger(__name__)

TEXT_TEMPLATE = "subscriptions/pre_invoice_email.txt"
HTML_TEMPLATE = "subscriptions/pre_invoice_email.html"


class PreInvoiceNotifier:
    """
    Emails the tenant the charges projected for their next cut.
    """

    def __init__(self, *, app_name: str, from_email: str, currency: str):
        self.app_name = app_name
        self.from_email = from_email
        self.currency = currency

    @classmethod
    def from_settings(cls) -> "PreInvoiceNotifier":
        conf = getattr(settings, "UR_BILLING", {})
        return cls(
            app_name=conf.get("APP_NAME", "UniRenta"),
            from_email=conf.get("PRE_INVOICE_FROM_EMAIL") or settings.DEFAULT_FROM_EMAIL,
            currency=conf.get("CURRENCY", "MXN"),
        )

    def monthly(self, amount: Decimal) -> str:
        return f"${amount:.2f} {self.currency} / mes"

    @staticmethod
    def cut_label(cut: datetime) -> str:
        if timezone.is_aware(cut):
            cut = timezone.localtime(cut)
        return cut.strftime("%d/%m/%Y")

    def subject(self) -> str:
        return f"Pre-factura de tus servicios {self.app_name}"

    def build_context(self, *, pre_invoice: PreInvoice, tenant_name: str) -> dict[str, Any]:
        payload = pre_invoice.as_notification_payload()
        return {
            "app_name": self.app_name,
            "tenant_name": tenant_name,
            "unit_name": payload["nombre_unidad"] or "Unidad asignada",
            "base_label": self.monthly(payload["precio_base"]),
            "services": [
                {"name": srv["nombre"], "price_label": self.monthly(srv["precio"])}
                for srv in payload["servicios"]
            ],
            "total_label": self.monthly(payload["precio_total"]),
            "cut_label": self.cut_label(payload["fecha_corte"]),
        }

    def build_message(self, *, to: str, context: dict[str, Any]) -> EmailMultiAlternatives:
        message = EmailMultiAlternatives(
            subject=self.subject(),
            body=render_to_string(TEXT_TEMPLATE, context),
            from_email=self.from_email,
            to=[to],
        )
        message.attach_alternative(render_to_string(HTML_TEMPLATE, context), "text/html")
        return message

    def send(self, *, assignment_id: int, now: datetime | None = None) -> PreInvoice:
        assignment = get_assignment(assignment_id=assignment_id)
        if assignment is None:
            raise AssignmentNotFound(details={"assignment_id": assignment_id})

        student = assignment.student
        if not (student.email or "").strip():
            raise TenantEmailMissing(details={"student_id": student.id})

        pre_invoice = PricingQueryService.pre_invoice(assignment_id=assignment.id, now=now)
        context = self.build_context(pre_invoice=pre_invoice, tenant_name=student.name or "")
        self.build_message(to=student.email.strip(), context=context).send()

        logger.info(
            "Pre-invoice sent: assignment=%s to=%s cut=%s total=%s",
            assignment.id,
            student.email,
            pre_invoice.cut_date.isoformat(),
            pre_invoice.breakdown.total,
        )
        return pre_invoice
