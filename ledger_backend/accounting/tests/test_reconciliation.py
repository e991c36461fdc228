# accounting/tests/test_reconciliation.py

from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from accounting.models import DocType, JournalBatch, JournalLine
from accounting.services.posting_rules_pos import PosSalePostingMapper
from accounting.services.posting_service import PostingService
from accounting.services.reconciliation import reconcile_pos_journals
from accounting.tests.fixtures import (
    make_company,
    make_outlet,
    make_pos_transaction,
    map_outlet_accounts,
)
from pos.models import PosTransaction


class ReconciliationTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)
        self.accounts = map_outlet_accounts(self.company, self.outlet)

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------
    def _post(self, tx):
        return PostingService(PosSalePostingMapper(tx)).post()

    def _raw_batch(self, doc_id, lines=()):
        batch = JournalBatch.objects.create(
            company=self.company,
            outlet=self.outlet,
            doc_type=DocType.POS_SALE,
            doc_id=doc_id,
            posted_at=timezone.now(),
        )
        JournalLine.objects.bulk_create(
            [
                JournalLine(
                    journal_batch=batch,
                    company=self.company,
                    outlet=self.outlet,
                    account=self.accounts["CASH"],
                    line_date=timezone.now().date(),
                    debit=Decimal(debit),
                    credit=Decimal(credit),
                    description="raw",
                )
                for debit, credit in lines
            ]
        )
        return batch

    # --------------------------------------------------
    # Tests
    # --------------------------------------------------
    def test_clean_ledger_passes(self):
        tx = make_pos_transaction(self.company, self.outlet, client_tx_id="tx-1")
        self._post(tx)

        report = reconcile_pos_journals(company_id=self.company.id)

        self.assertTrue(report.passed)
        self.assertEqual(
            (report.missing_after, report.unbalanced_batches, report.orphan_batches),
            (0, 0, 0),
        )

    def test_counts_completed_transactions_without_batch(self):
        missing = make_pos_transaction(self.company, self.outlet, client_tx_id="tx-1")
        make_pos_transaction(
            self.company,
            self.outlet,
            client_tx_id="tx-void",
            status=PosTransaction.STATUS_VOID,
        )

        report = reconcile_pos_journals(company_id=self.company.id, sample_limit=5)

        self.assertEqual(report.missing_after, 1)
        self.assertEqual(report.missing_sample_ids, [missing.id])
        self.assertFalse(report.passed)

    def test_counts_unbalanced_batches(self):
        tx = make_pos_transaction(self.company, self.outlet, client_tx_id="tx-1")
        batch = self._raw_batch(tx.id, lines=[("100.00", "0.00")])

        report = reconcile_pos_journals(company_id=self.company.id, sample_limit=5)

        self.assertEqual(report.unbalanced_batches, 1)
        self.assertEqual(report.unbalanced_sample_ids, [batch.id])

    def test_batch_without_lines_is_not_unbalanced(self):
        tx = make_pos_transaction(self.company, self.outlet, client_tx_id="tx-1")
        self._raw_batch(tx.id)

        report = reconcile_pos_journals(company_id=self.company.id)

        self.assertEqual(report.unbalanced_batches, 0)
        self.assertEqual(report.missing_after, 0)

    def test_counts_orphan_batches(self):
        batch = self._raw_batch(987654, lines=[("5.00", "0.00"), ("0.00", "5.00")])

        report = reconcile_pos_journals(company_id=self.company.id, sample_limit=5)

        self.assertEqual(report.orphan_batches, 1)
        self.assertEqual(report.orphan_sample_ids, [batch.id])

    def test_scope_by_company_and_outlet(self):
        other_outlet = make_outlet(self.company, "SECOND")
        make_pos_transaction(self.company, other_outlet, client_tx_id="tx-other")
        other_company = make_company("OTHER")
        make_pos_transaction(
            other_company,
            make_outlet(other_company),
            client_tx_id="tx-foreign",
        )

        self.assertEqual(
            reconcile_pos_journals(company_id=self.company.id, outlet_id=self.outlet.id).missing_after,
            0,
        )
        self.assertEqual(reconcile_pos_journals(company_id=self.company.id).missing_after, 1)
        self.assertEqual(reconcile_pos_journals().missing_after, 2)

    def test_sample_limit_bounds_ids(self):
        for i in range(4):
            make_pos_transaction(self.company, self.outlet, client_tx_id=f"tx-{i}")

        report = reconcile_pos_journals(company_id=self.company.id, sample_limit=2)

        self.assertEqual(report.missing_after, 4)
        self.assertEqual(len(report.missing_sample_ids), 2)

    def test_cent_amounts_inexact_in_binary_still_balance(self):
        tx = make_pos_transaction(
            self.company,
            self.outlet,
            client_tx_id="tx-cents",
            items=[("1", "0.30")],
            payments=[("CASH", "0.10"), ("QRIS", "0.20")],
        )
        batch_id = self._post(tx).journal_batch_id
        self.assertEqual(JournalLine.objects.filter(journal_batch_id=batch_id).count(), 3)

        report = reconcile_pos_journals(company_id=self.company.id)

        self.assertEqual(report.unbalanced_batches, 0)
        self.assertTrue(report.passed)

    def test_one_cent_imbalance_is_reported(self):
        tx = make_pos_transaction(self.company, self.outlet, client_tx_id="tx-cents")
        batch = self._raw_batch(tx.id, lines=[("0.10", "0.00"), ("0.20", "0.00"), ("0.00", "0.31")])

        report = reconcile_pos_journals(company_id=self.company.id, sample_limit=5)

        self.assertEqual(report.unbalanced_batches, 1)
        self.assertEqual(report.unbalanced_sample_ids, [batch.id])
