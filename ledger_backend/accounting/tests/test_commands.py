# accounting/tests/test_commands.py

from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings

from accounting.models import JournalBatch
from accounting.tests.fixtures import (
    make_company,
    make_outlet,
    make_pos_transaction,
    map_outlet_accounts,
)


def _run(name, *args):
    out, err = StringIO(), StringIO()
    call_command(name, *args, stdout=out, stderr=err)
    return out.getvalue(), err.getvalue()


class BackfillCommandTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)
        map_outlet_accounts(self.company, self.outlet)
        make_pos_transaction(self.company, self.outlet, client_tx_id="tx-1")
        make_pos_transaction(self.company, self.outlet, client_tx_id="tx-2")

    # --------------------------------------------------
    # Flag validation
    # --------------------------------------------------
    def test_execute_requires_scope(self):
        with self.assertRaisesMessage(CommandError, "--execute requires --company-id"):
            _run("backfill_pos_journals", "--execute")

    def test_dry_run_and_execute_are_exclusive(self):
        with self.assertRaises(CommandError):
            _run("backfill_pos_journals", "--dry-run", "--execute")

    def test_company_and_all_companies_are_exclusive(self):
        with self.assertRaises(CommandError):
            _run("backfill_pos_journals", f"--company-id={self.company.id}", "--all-companies")

    def test_outlet_requires_company(self):
        with self.assertRaisesMessage(CommandError, "--outlet-id requires --company-id"):
            _run("backfill_pos_journals", f"--outlet-id={self.outlet.id}")

    def test_limit_must_be_positive(self):
        with self.assertRaises(CommandError):
            _run("backfill_pos_journals", "--limit=0")

    @override_settings(POS_BACKFILL_MAX_LIMIT=5)
    def test_limit_is_bounded(self):
        with self.assertRaisesMessage(CommandError, "--limit must be <= 5"):
            _run("backfill_pos_journals", "--limit=6")

    # --------------------------------------------------
    # Runs
    # --------------------------------------------------
    def test_dry_run_is_default(self):
        out, _ = _run("backfill_pos_journals", f"--company-id={self.company.id}")

        self.assertIn("mode=dry-run", out)
        self.assertIn("missing_candidates=2", out)
        self.assertIn("dry_run.preview_pos_transaction_ids=", out)
        self.assertFalse(JournalBatch.objects.exists())

    def test_execute_posts_and_reports(self):
        out, _ = _run("backfill_pos_journals", "--execute", f"--company-id={self.company.id}")

        self.assertIn("execute.inserted=2", out)
        self.assertIn("execute.failed=0", out)
        self.assertIn("reconcile_after.missing_completed_pos=0", out)
        self.assertEqual(JournalBatch.objects.count(), 2)

    def test_all_companies_execute(self):
        out, _ = _run("backfill_pos_journals", "--execute", "--all-companies")

        self.assertIn("scope.company_id=ALL", out)
        self.assertEqual(JournalBatch.objects.count(), 2)

    def test_row_failure_exits_one(self):
        make_pos_transaction(
            self.company,
            self.outlet,
            client_tx_id="tx-bad",
            payments=[("GIFTCARD", "100.00")],
        )

        with self.assertRaises(SystemExit) as ctx:
            _run("backfill_pos_journals", "--execute", f"--company-id={self.company.id}")

        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(JournalBatch.objects.count(), 2)


class ReconcileCommandTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)
        map_outlet_accounts(self.company, self.outlet)

    def test_company_is_required(self):
        with self.assertRaisesMessage(CommandError, "--company-id is required"):
            _run("reconcile_pos_journals")

    def test_sample_limit_is_bounded(self):
        with self.assertRaises(CommandError):
            _run("reconcile_pos_journals", f"--company-id={self.company.id}", "--sample-limit=201")

    def test_clean_ledger_passes(self):
        out, _ = _run("reconcile_pos_journals", f"--company-id={self.company.id}")

        self.assertIn("missing_after=0", out)
        self.assertIn("status: PASS", out)

    def test_missing_batch_fails_with_exit_two(self):
        tx = make_pos_transaction(self.company, self.outlet, client_tx_id="tx-1")
        out = StringIO()

        with self.assertRaises(SystemExit) as ctx:
            call_command("reconcile_pos_journals", f"--company-id={self.company.id}", stdout=out)

        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("status: FAIL", out.getvalue())
        self.assertIn(f"sample.missing_pos_transaction_ids={tx.id}", out.getvalue())

    def test_backfill_then_reconcile_passes(self):
        make_pos_transaction(self.company, self.outlet, client_tx_id="tx-1")

        _run("backfill_pos_journals", "--execute", f"--company-id={self.company.id}")
        out, _ = _run("reconcile_pos_journals", f"--company-id={self.company.id}")

        self.assertIn("status: PASS", out)

    def test_cent_amounts_inexact_in_binary_pass(self):
        make_pos_transaction(
            self.company,
            self.outlet,
            client_tx_id="tx-cents",
            items=[("1", "0.30")],
            payments=[("CASH", "0.10"), ("QRIS", "0.20")],
        )
        _run("backfill_pos_journals", "--execute", f"--company-id={self.company.id}")

        out, _ = _run("reconcile_pos_journals", f"--company-id={self.company.id}")

        self.assertEqual(JournalBatch.objects.count(), 1)
        self.assertIn("unbalanced_batches=0", out)
        self.assertIn("status: PASS", out)
