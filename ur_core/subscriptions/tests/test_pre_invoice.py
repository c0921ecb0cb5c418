# ur_core/subscriptions/tests/test_pre_invoice.py
from decimal import Decimal
from io import StringIO

import pytest
from django.core import mail
from django.core.management import call_command

from ur_core.conftest import local_dt
from ur_core.subscriptions.errors import AssignmentNotFound, TenantEmailMissing
from ur_core.subscriptions.models import LinkState, SubscriptionLink
from ur_core.subscriptions.notifications import PreInvoiceNotifier
from ur_core.subscriptions.selectors import PricingQueryService
from ur_core.subscriptions.services import SubscriptionService


@pytest.mark.django_db
def test_pre_invoice_is_dated_for_the_next_cut(assignment, gym):
    SubscriptionService.add_service(assignment_id=assignment.id, service_id=gym.id, now=local_dt(2024, 1, 20))

    projection = PricingQueryService.pre_invoice(assignment_id=assignment.id, now=local_dt(2024, 1, 20))

    assert projection.cut_date == local_dt(2024, 2, 15)
    # pending gym starts on that cut, so it is already on the pre-invoice
    assert [item.name for item in projection.breakdown.line_items] == ["Agua", "Gym"]
    assert projection.breakdown.total == Decimal("5100.00")


@pytest.mark.django_db
def test_pre_invoice_advances_past_later_pending_starts(assignment, gym, parking):
    SubscriptionService.add_service(assignment_id=assignment.id, service_id=gym.id, now=local_dt(2024, 1, 20))
    SubscriptionLink.objects.create(
        assignment=assignment,
        service=parking,
        state=LinkState.PENDING,
        price_snapshot=Decimal("250.00"),
        effective_from=local_dt(2024, 3, 15),
    )

    projection = PricingQueryService.pre_invoice(assignment_id=assignment.id, now=local_dt(2024, 1, 20))

    assert projection.cut_date == local_dt(2024, 3, 15)
    assert projection.breakdown.total == Decimal("5350.00")


@pytest.mark.django_db
def test_pre_invoice_drops_cancellations_ending_at_the_cut(assignment, gym):
    SubscriptionService.add_service(assignment_id=assignment.id, service_id=gym.id, now=local_dt(2024, 1, 15))
    SubscriptionService.remove_service(assignment_id=assignment.id, service_id=gym.id, now=local_dt(2024, 2, 1))

    projection = PricingQueryService.pre_invoice(assignment_id=assignment.id, now=local_dt(2024, 2, 1))

    assert projection.cut_date == local_dt(2024, 2, 15)
    assert gym.id not in [item.id for item in projection.breakdown.line_items]
    assert projection.breakdown.total == Decimal("5000.00")


@pytest.mark.django_db
def test_notification_payload_shape(assignment, gym):
    SubscriptionService.add_service(assignment_id=assignment.id, service_id=gym.id, now=local_dt(2024, 1, 15))

    payload = PricingQueryService.pre_invoice(
        assignment_id=assignment.id, now=local_dt(2024, 1, 20)
    ).as_notification_payload()

    assert payload == {
        "nombre_unidad": "Depto 3B",
        "precio_base": Decimal("5000.00"),
        "servicios": [
            {"nombre": "Agua", "precio": Decimal("0.00")},
            {"nombre": "Gym", "precio": Decimal("100.00")},
        ],
        "precio_total": Decimal("5100.00"),
        "fecha_corte": local_dt(2024, 2, 15),
    }


@pytest.mark.django_db
def test_pre_invoice_unknown_assignment():
    with pytest.raises(AssignmentNotFound):
        PricingQueryService.pre_invoice(assignment_id=424242)


@pytest.mark.django_db
def test_send_pre_invoice_email(assignment, gym):
    SubscriptionService.add_service(assignment_id=assignment.id, service_id=gym.id, now=local_dt(2024, 1, 20))

    notifier = PreInvoiceNotifier(app_name="UniRenta", from_email="facturas@unirenta.test", currency="MXN")
    notifier.send(assignment_id=assignment.id, now=local_dt(2024, 1, 20))

    assert len(mail.outbox) == 1
    msg = mail.outbox[0]
    assert msg.subject == "Pre-factura de tus servicios UniRenta"
    assert msg.to == ["ana@example.com"]
    assert msg.from_email == "facturas@unirenta.test"
    assert "Hola Ana," in msg.body
    assert "15/02/2024" in msg.body
    assert "Unidad: Depto 3B - $5000.00 MXN / mes" in msg.body
    assert "- Gym: $100.00 MXN / mes" in msg.body
    assert "TOTAL estimado: $5100.00 MXN / mes" in msg.body

    html, mimetype = msg.alternatives[0]
    assert mimetype == "text/html"
    assert "Depto 3B" in html
    assert "$5100.00 MXN / mes" in html


@pytest.mark.django_db
def test_notifier_reads_settings():
    notifier = PreInvoiceNotifier.from_settings()

    assert notifier.app_name == "UniRenta"
    assert notifier.from_email == "facturas@unirenta.test"
    assert notifier.currency == "MXN"


@pytest.mark.django_db
def test_send_requires_tenant_email(assignment, student):
    student.email = ""
    student.save(update_fields=["email"])

    with pytest.raises(TenantEmailMissing):
        PreInvoiceNotifier.from_settings().send(assignment_id=assignment.id)
    assert mail.outbox == []


@pytest.mark.django_db
def test_send_pre_invoices_command(assignment):
    out = StringIO()
    call_command("send_pre_invoices", stdout=out)

    assert len(mail.outbox) == 1
    assert "Pre-invoices sent: 1" in out.getvalue()


@pytest.mark.django_db
def test_send_pre_invoices_dry_run(assignment):
    out = StringIO()
    call_command("send_pre_invoices", "--dry-run", stdout=out)

    assert mail.outbox == []
    assert f"Assignment {assignment.id}:" in out.getvalue()
    assert "DRY RUN" in out.getvalue()


@pytest.mark.django_db
def test_send_pre_invoices_skips_tenants_without_email(assignment, student):
    student.email = ""
    student.save(update_fields=["email"])

    out, err = StringIO(), StringIO()
    call_command("send_pre_invoices", stdout=out, stderr=err)

    assert mail.outbox == []
    assert "Skipped: 1" in out.getvalue()
    assert "TENANT_EMAIL_MISSING" in err.getvalue()
