# accounting/tests/test_posting_rules_pos.py

from decimal import Decimal

from django.test import TestCase, override_settings

from accounting.services.exceptions import (
    MixedTaxInclusiveError,
    OutletAccountMappingMissingError,
    OutletPaymentMappingMissingError,
    PosEmptyPaymentSetError,
    PosOverpaymentNotSupportedError,
    UnbalancedJournalError,
    UnsupportedPaymentMethodError,
)
from accounting.services.posting_rules_pos import PosSalePostingMapper, force_unbalanced_enabled
from accounting.services.posting_service import PostingService
from accounting.tests.fixtures import (
    make_company,
    make_outlet,
    make_pos_transaction,
    make_tax_rate,
    map_outlet_accounts,
)

D = Decimal


class PosSaleMapperTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)
        self.accounts = map_outlet_accounts(self.company, self.outlet)

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------
    def _tx(self, **kwargs):
        kwargs.setdefault("client_tx_id", "tx-1")
        return make_pos_transaction(self.company, self.outlet, **kwargs)

    def _lines(self, tx, **mapper_kwargs):
        mapper = PosSalePostingMapper(tx, **mapper_kwargs)
        return [
            (line.account_id, line.debit, line.credit, line.description)
            for line in mapper.map_to_journal(mapper.build_request())
        ]

    def _acc(self, key):
        return self.accounts[key].id

    # --------------------------------------------------
    # Payment shapes
    # --------------------------------------------------
    def test_two_payment_methods_no_tax(self):
        tx = self._tx(
            items=[("1", "80000")],
            payments=[("CASH", "50000"), ("QRIS", "30000")],
        )

        self.assertEqual(
            self._lines(tx),
            [
                (self._acc("CASH"), D("50000.00"), D("0.00"), "POS CASH receipt"),
                (self._acc("QRIS"), D("30000.00"), D("0.00"), "POS QRIS receipt"),
                (self._acc("SALES_REVENUE"), D("0.00"), D("80000.00"), "POS sales revenue"),
            ],
        )

    def test_payments_of_same_method_are_summed(self):
        tx = self._tx(
            items=[("2", "25.00")],
            payments=[("cash", "20.00"), ("CASH", "30.00")],
        )

        lines = self._lines(tx)

        self.assertEqual(lines[0], (self._acc("CASH"), D("50.00"), D("0.00"), "POS CASH receipt"))
        self.assertEqual(len(lines), 2)

    def test_unpaid_remainder_goes_to_receivable(self):
        tx = self._tx(items=[("1", "100.00")], payments=[("CARD", "60.00")])

        lines = self._lines(tx)

        self.assertIn((self._acc("AR"), D("40.00"), D("0.00"), "POS outstanding receivable"), lines)

    def test_overpayment_is_rejected(self):
        tx = self._tx(items=[("1", "100.00")], payments=[("CASH", "100.01")])

        with self.assertRaises(PosOverpaymentNotSupportedError):
            self._lines(tx)

    def test_no_positive_payment_is_rejected(self):
        tx = self._tx(payments=[("CASH", "0.00")])

        with self.assertRaises(PosEmptyPaymentSetError):
            self._lines(tx)

    def test_blank_method_is_rejected(self):
        tx = self._tx(payments=[("  ", "100.00")])

        with self.assertRaises(UnsupportedPaymentMethodError):
            self._lines(tx)

    def test_unmapped_method_is_rejected(self):
        tx = self._tx(payments=[("GIFTCARD", "100.00")])

        with self.assertRaises(OutletPaymentMappingMissingError) as ctx:
            self._lines(tx)

        self.assertEqual(ctx.exception.method_code, "GIFTCARD")

    def test_zero_gross_is_unbalanced(self):
        tx = self._tx(items=[("1", "0.00")], payments=[("CASH", "10.00")])

        with self.assertRaises(UnbalancedJournalError):
            self._lines(tx)

    def test_missing_sales_mappings_are_reported_together(self):
        outlet = make_outlet(self.company, "NEW")
        map_outlet_accounts(self.company, outlet, ["CASH"])
        tx = make_pos_transaction(self.company, outlet, client_tx_id="tx-new")

        with self.assertRaises(OutletAccountMappingMissingError) as ctx:
            self._lines(tx)

        self.assertEqual(ctx.exception.missing_keys, ["SALES_REVENUE", "SALES_TAX", "AR"])

    # --------------------------------------------------
    # Tax split
    # --------------------------------------------------
    def test_stored_exclusive_tax_breakdown(self):
        vat = make_tax_rate(self.company, "VAT", 11)
        tx = self._tx(
            items=[("1", "100000")],
            payments=[("CASH", "111000")],
            taxes=[(vat, "11000")],
        )

        self.assertEqual(
            self._lines(tx),
            [
                (self._acc("CASH"), D("111000.00"), D("0.00"), "POS CASH receipt"),
                (self._acc("SALES_REVENUE"), D("0.00"), D("100000.00"), "POS sales revenue"),
                (self._acc("SALES_TAX"), D("0.00"), D("11000.00"), "POS sales tax"),
            ],
        )

    def test_stored_inclusive_tax_breakdown(self):
        vat = make_tax_rate(self.company, "VAT", 11, inclusive=True)
        tx = self._tx(
            items=[("1", "111000")],
            payments=[("QRIS", "111000")],
            taxes=[(vat, "11000")],
        )

        lines = self._lines(tx)

        self.assertIn((self._acc("SALES_REVENUE"), D("0.00"), D("100000.00"), "POS sales revenue"), lines)
        self.assertIn((self._acc("SALES_TAX"), D("0.00"), D("11000.00"), "POS sales tax"), lines)

    def test_stored_breakdown_beats_company_defaults(self):
        make_tax_rate(self.company, "DEF", 10, default=True)
        vat = make_tax_rate(self.company, "VAT", 5)
        tx = self._tx(
            items=[("1", "100.00")],
            payments=[("CASH", "105.00")],
            taxes=[(vat, "5.00")],
        )

        lines = self._lines(tx)

        self.assertIn((self._acc("SALES_TAX"), D("0.00"), D("5.00"), "POS sales tax"), lines)

    def test_mixed_stored_breakdown_is_rejected(self):
        incl = make_tax_rate(self.company, "INC", 10, inclusive=True)
        excl = make_tax_rate(self.company, "EXC", 5)
        tx = self._tx(taxes=[(incl, "9.09"), (excl, "5.00")])

        with self.assertRaises(MixedTaxInclusiveError):
            self._lines(tx)

    def test_company_default_inclusive_tax(self):
        make_tax_rate(self.company, "VAT", 10, inclusive=True, default=True)
        tx = self._tx(items=[("1", "110000")], payments=[("CASH", "110000")])

        self.assertEqual(
            self._lines(tx),
            [
                (self._acc("CASH"), D("110000.00"), D("0.00"), "POS CASH receipt"),
                (self._acc("SALES_REVENUE"), D("0.00"), D("100000.00"), "POS sales revenue"),
                (self._acc("SALES_TAX"), D("0.00"), D("10000.00"), "POS sales tax"),
            ],
        )

    def test_company_default_exclusive_tax_raises_amount_due(self):
        make_tax_rate(self.company, "VAT", 10, default=True)
        tx = self._tx(items=[("1", "100.00")], payments=[("CASH", "100.00")])

        lines = self._lines(tx)

        self.assertIn((self._acc("AR"), D("10.00"), D("0.00"), "POS outstanding receivable"), lines)

    # --------------------------------------------------
    # Force-unbalanced switch
    # --------------------------------------------------
    def test_force_unbalanced_breaks_balance(self):
        tx = self._tx()
        mapper = PosSalePostingMapper(tx, force_unbalanced=True)

        with self.assertRaises(UnbalancedJournalError):
            PostingService(mapper).build_lines(mapper.build_request())

    @override_settings(JP_SYNC_PUSH_POSTING_FORCE_UNBALANCED=True, APP_ENV="production")
    def test_force_unbalanced_ignored_in_production(self):
        self.assertFalse(force_unbalanced_enabled())

    @override_settings(JP_SYNC_PUSH_POSTING_FORCE_UNBALANCED=True, APP_ENV="development")
    def test_force_unbalanced_honored_outside_production(self):
        self.assertTrue(force_unbalanced_enabled())
