# ur_core/subscriptions/management/commands/send_pre_invoices.py
from __future__ import annotations

from django.core.management.base import BaseCommand

from ur_core.common.errors import DomainError
from ur_core.rentals.models import Assignment
from ur_core.subscriptions.notifications import PreInvoiceNotifier
from ur_core.subscriptions.selectors import PricingQueryService


class Command(BaseCommand):
    help = "Email each tenant the pre-invoice for their next cut. Tenants without an email are skipped."

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Print projections only; do not send.")
        parser.add_argument("--assignment-id", type=int, default=None, help="Only this assignment.")
        parser.add_argument("--limit", type=int, default=None, help="Optional limit of assignments scanned.")

    def handle(self, *args, **opts):
        dry = opts["dry_run"]
        notifier = PreInvoiceNotifier.from_settings()

        qs = Assignment.objects.select_related("student", "unit").order_by("id")
        if opts["assignment_id"]:
            qs = qs.filter(id=opts["assignment_id"])
        if opts["limit"]:
            qs = qs[: opts["limit"]]

        examined = 0
        sent = 0
        skipped = 0

        for assignment in qs:
            examined += 1

            if dry:
                projection = PricingQueryService.pre_invoice(assignment_id=assignment.id)
                self.stdout.write(
                    f"Assignment {assignment.id}: cut={projection.cut_date.isoformat()} "
                    f"total={projection.breakdown.total}"
                )
                continue

            try:
                notifier.send(assignment_id=assignment.id)
            except DomainError as exc:
                skipped += 1
                self.stderr.write(f"Assignment {assignment.id} skipped: {exc}")
                continue
            sent += 1

        self.stdout.write(f"Assignments examined: {examined}")
        if dry:
            self.stdout.write("DRY RUN: nothing sent")
        else:
            self.stdout.write(f"Pre-invoices sent: {sent}")
            self.stdout.write(f"Skipped: {skipped}")
