# accounting/tests/test_posting_rules.py

from datetime import date, datetime, time
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from accounting.models import Account, DocType
from accounting.services.exceptions import (
    OutletAccountMappingMissingError,
    PostingRuleError,
    UnsupportedPaymentMethodError,
)
from accounting.services.posting_rules import (
    DepreciationPostingMapper,
    SalesInvoicePostingMapper,
    SalesPaymentPostingMapper,
    mapper_for_document,
)
from accounting.services.posting_rules_pos import PosSalePostingMapper
from accounting.tests.fixtures import (
    make_account,
    make_company,
    make_outlet,
    make_pos_transaction,
    map_outlet_accounts,
)
from assets.models import DepreciationPlan, DepreciationRun, FixedAsset
from sales.models import SalesInvoice, SalesPayment


def _lines(mapper):
    request = mapper.build_request()
    return [
        (line.account_id, line.debit, line.credit, line.description)
        for line in mapper.map_to_journal(request)
    ]


class SalesMapperTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)
        self.accounts = map_outlet_accounts(self.company, self.outlet)
        self.invoice = SalesInvoice.objects.create(
            company=self.company,
            outlet=self.outlet,
            invoice_no="INV-001",
            invoice_date=date(2026, 3, 1),
            status=SalesInvoice.STATUS_POSTED,
            subtotal=Decimal("1000.00"),
            tax_amount=Decimal("110.00"),
            grand_total=Decimal("1110.00"),
        )

    def _payment(self, method="QRIS", amount="500.00"):
        return SalesPayment.objects.create(
            company=self.company,
            outlet=self.outlet,
            invoice=self.invoice,
            payment_no="PAY-001",
            payment_at=timezone.now(),
            method=method,
            amount=Decimal(amount),
        )

    def test_invoice_lines(self):
        mapper = SalesInvoicePostingMapper(self.invoice)

        self.assertEqual(mapper.build_request().doc_type, DocType.SALES_INVOICE)
        self.assertEqual(
            _lines(mapper),
            [
                (self.accounts["AR"].id, Decimal("1110.00"), Decimal("0.00"), "Invoice INV-001 - AR"),
                (self.accounts["SALES_REVENUE"].id, Decimal("0.00"), Decimal("1000.00"), "Invoice INV-001 - Revenue"),
                (self.accounts["SALES_TAX"].id, Decimal("0.00"), Decimal("110.00"), "Invoice INV-001 - Tax"),
            ],
        )

    def test_invoice_without_tax_has_no_tax_line(self):
        self.invoice.tax_amount = Decimal("0.00")
        self.invoice.grand_total = Decimal("1000.00")

        lines = _lines(SalesInvoicePostingMapper(self.invoice))

        self.assertEqual(len(lines), 2)
        self.assertNotIn("Invoice INV-001 - Tax", [line[3] for line in lines])

    def test_invoice_requires_outlet_mappings(self):
        bare_outlet = make_outlet(self.company, "BARE")
        self.invoice.outlet = bare_outlet

        with self.assertRaises(OutletAccountMappingMissingError) as ctx:
            _lines(SalesInvoicePostingMapper(self.invoice))

        self.assertIn("AR", ctx.exception.missing_keys)

    def test_payment_lines_use_method_mapping(self):
        payment = self._payment()

        lines = _lines(SalesPaymentPostingMapper(payment))

        self.assertEqual(
            lines,
            [
                (
                    self.accounts["QRIS"].id,
                    Decimal("500.00"),
                    Decimal("0.00"),
                    "Payment PAY-001 for Invoice INV-001 - QRIS",
                ),
                (
                    self.accounts["AR"].id,
                    Decimal("0.00"),
                    Decimal("500.00"),
                    "Payment PAY-001 for Invoice INV-001 - AR",
                ),
            ],
        )

    def test_payment_with_unknown_method_is_rejected(self):
        payment = self._payment()
        payment.method = "CHEQUE"

        with self.assertRaises(UnsupportedPaymentMethodError):
            _lines(SalesPaymentPostingMapper(payment))


class DepreciationMapperTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.expense = make_account(self.company, "6100", "Depreciation expense", Account.EXPENSE)
        self.accum = make_account(self.company, "1590", "Accumulated depreciation", Account.ASSET)
        asset = FixedAsset.objects.create(company=self.company, name="Delivery van")
        plan = DepreciationPlan.objects.create(
            company=self.company,
            asset=asset,
            start_date=date(2026, 1, 1),
            useful_life_months=48,
            purchase_cost_snapshot=Decimal("48000.00"),
            expense_account=self.expense,
            accum_depr_account=self.accum,
            status=DepreciationPlan.STATUS_ACTIVE,
        )
        self.run = DepreciationRun.objects.create(
            company=self.company,
            plan=plan,
            period_year=2026,
            period_month=2,
            run_date=date(2026, 2, 28),
            amount=Decimal("1000.00"),
        )

    def test_lines_are_labeled_with_period(self):
        self.assertEqual(
            _lines(DepreciationPostingMapper(self.run)),
            [
                (self.expense.id, Decimal("1000.00"), Decimal("0.00"), "Depreciation for period 2026-02"),
                (self.accum.id, Decimal("0.00"), Decimal("1000.00"), "Accumulated depreciation for period 2026-02"),
            ],
        )

    def test_posted_at_is_run_date(self):
        posted_at = DepreciationPostingMapper(self.run).posted_at()

        self.assertEqual(
            posted_at,
            timezone.make_aware(datetime.combine(date(2026, 2, 28), time.min)),
        )


class MapperDispatchTests(TestCase):
    def test_each_document_kind_gets_its_mapper(self):
        company = make_company()
        outlet = make_outlet(company)
        invoice = SalesInvoice(company=company, outlet=outlet, invoice_no="X", invoice_date=date.today())
        payment = SalesPayment(company=company, outlet=outlet, invoice=invoice, payment_no="P")
        run = DepreciationRun(company=company, period_year=2026, period_month=1)
        tx = make_pos_transaction(company, outlet, client_tx_id="tx-dispatch")

        self.assertIsInstance(mapper_for_document(invoice), SalesInvoicePostingMapper)
        self.assertIsInstance(mapper_for_document(payment), SalesPaymentPostingMapper)
        self.assertIsInstance(mapper_for_document(run), DepreciationPostingMapper)
        self.assertIsInstance(mapper_for_document(tx), PosSalePostingMapper)

    def test_unknown_document_is_rejected(self):
        with self.assertRaises(PostingRuleError):
            mapper_for_document(object())
