# accounting/management/commands/backfill_pos_journals.py

from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from accounting.services.pos_backfill import STATUS_FAILED, STATUS_INSERTED, run_pos_backfill


def _positive_int(value, flag: str, *, max_value: int | None = None) -> int | None:
    if value is None:
        return None
    if value <= 0:
        raise CommandError(f"{flag} must be a positive integer")
    if max_value is not None and value > max_value:
        raise CommandError(f"{flag} must be <= {max_value}")
    return value


def _print_snapshot(write, prefix: str, report) -> None:
    write(f"{prefix}.missing_completed_pos={report.missing_after}")
    write(f"{prefix}.unbalanced_pos_sale_batches={report.unbalanced_batches}")
    write(f"{prefix}.orphan_pos_sale_batches={report.orphan_batches}")


class Command(BaseCommand):
    help = "Create missing POS_SALE journal batches for COMPLETED POS transactions (dry-run by default)."

    def add_arguments(self, parser):
        mode = parser.add_mutually_exclusive_group()
        mode.add_argument("--dry-run", action="store_true", help="Preview candidates only (default)")
        mode.add_argument("--execute", action="store_true", help="Write journal batches")

        scope = parser.add_mutually_exclusive_group()
        scope.add_argument("--company-id", type=int, dest="company_id", help="Restrict to one company")
        scope.add_argument("--all-companies", action="store_true", help="Run across every company")

        parser.add_argument("--outlet-id", type=int, dest="outlet_id", help="Restrict to one outlet (requires --company-id)")
        parser.add_argument("--limit", type=int, help="Maximum candidates to process")

    def handle(self, *args, **options):
        execute = bool(options.get("execute"))
        all_companies = bool(options.get("all_companies"))
        max_limit = int(getattr(settings, "POS_BACKFILL_MAX_LIMIT", 10000))

        company_id = _positive_int(options.get("company_id"), "--company-id")
        outlet_id = _positive_int(options.get("outlet_id"), "--outlet-id")
        limit = _positive_int(options.get("limit"), "--limit", max_value=max_limit)

        if outlet_id is not None and company_id is None:
            raise CommandError("--outlet-id requires --company-id")
        if execute and company_id is None and not all_companies:
            raise CommandError("--execute requires --company-id (or --all-companies for full-scope runs)")

        run = run_pos_backfill(
            execute=execute,
            company_id=company_id,
            outlet_id=outlet_id,
            limit=limit,
        )

        self.stdout.write(self.style.MIGRATE_HEADING("Backfill POS → Journal"))
        self.stdout.write(f"mode={'execute' if execute else 'dry-run'}")
        self.stdout.write(f"scope.company_id={company_id if company_id is not None else 'ALL'}")
        self.stdout.write(f"scope.outlet_id={outlet_id if outlet_id is not None else 'ALL'}")
        self.stdout.write(f"scope.limit={limit if limit is not None else 'ALL'}")
        self.stdout.write(f"scope.all_companies={str(all_companies).lower()}")
        self.stdout.write(f"missing_candidates={run.missing_candidates}")
        _print_snapshot(self.stdout.write, "reconcile_before", run.before)

        if not execute:
            preview = ",".join(str(i) for i in run.preview_ids)
            self.stdout.write(f"dry_run.preview_pos_transaction_ids={preview or 'none'}")
            self.stdout.write(self.style.WARNING("DRY RUN: no database changes were made."))
            return

        for row in run.results:
            if row.status == STATUS_INSERTED:
                self.stdout.write(
                    f"backfilled pos_transaction_id={row.pos_transaction_id} "
                    f"journal_batch_id={row.journal_batch_id} line_total={row.line_total}"
                )
            elif row.status == STATUS_FAILED:
                self.stderr.write(
                    self.style.ERROR(
                        f"backfill_failed pos_transaction_id={row.pos_transaction_id} "
                        f"client_tx_id={row.client_tx_id} reason={row.reason}"
                    )
                )

        for status, count in run.counts.items():
            self.stdout.write(f"execute.{status.lower()}={count}")
        _print_snapshot(self.stdout.write, "reconcile_after", run.after)

        if run.failed:
            self.stderr.write(self.style.ERROR(f"{run.failed} POS transaction(s) failed to backfill"))
            raise SystemExit(1)

        self.stdout.write(self.style.SUCCESS("Backfill complete"))
