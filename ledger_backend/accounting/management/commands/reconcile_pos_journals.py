# accounting/management/commands/reconcile_pos_journals.py

from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from accounting.services.reconciliation import reconcile_pos_journals

DEFAULT_SAMPLE_LIMIT = 20


class Command(BaseCommand):
    help = "Read-only POS journal reconciliation: missing, unbalanced and orphan POS_SALE batches."

    def add_arguments(self, parser):
        parser.add_argument("--company-id", type=int, dest="company_id", help="Company to reconcile (required)")
        parser.add_argument("--outlet-id", type=int, dest="outlet_id", help="Restrict to one outlet")
        parser.add_argument(
            "--sample-limit",
            type=int,
            dest="sample_limit",
            default=DEFAULT_SAMPLE_LIMIT,
            help=f"Sample ids per bucket (default {DEFAULT_SAMPLE_LIMIT})",
        )

    def handle(self, *args, **options):
        company_id = options.get("company_id")
        outlet_id = options.get("outlet_id")
        sample_limit = options.get("sample_limit")
        max_sample = int(getattr(settings, "RECONCILE_MAX_SAMPLE_LIMIT", 200))

        if company_id is None:
            raise CommandError("--company-id is required")
        if company_id <= 0:
            raise CommandError("--company-id must be a positive integer")
        if outlet_id is not None and outlet_id <= 0:
            raise CommandError("--outlet-id must be a positive integer")
        if sample_limit <= 0 or sample_limit > max_sample:
            raise CommandError(f"--sample-limit must be between 1 and {max_sample}")

        report = reconcile_pos_journals(
            company_id=company_id,
            outlet_id=outlet_id,
            sample_limit=sample_limit,
        )

        def _ids(ids):
            return ",".join(str(i) for i in ids) or "none"

        self.stdout.write(self.style.MIGRATE_HEADING("Reconcile POS journals"))
        self.stdout.write(f"scope.company_id={company_id}")
        self.stdout.write(f"scope.outlet_id={outlet_id if outlet_id is not None else 'ALL'}")
        self.stdout.write(f"missing_after={report.missing_after}")
        self.stdout.write(f"unbalanced_batches={report.unbalanced_batches}")
        self.stdout.write(f"orphan_batches={report.orphan_batches}")
        self.stdout.write(f"sample.missing_pos_transaction_ids={_ids(report.missing_sample_ids)}")
        self.stdout.write(f"sample.unbalanced_journal_batch_ids={_ids(report.unbalanced_sample_ids)}")
        self.stdout.write(f"sample.orphan_journal_batch_ids={_ids(report.orphan_sample_ids)}")

        if report.passed:
            self.stdout.write(self.style.SUCCESS("status: PASS"))
            return

        self.stdout.write(self.style.ERROR("status: FAIL"))
        raise SystemExit(2)
