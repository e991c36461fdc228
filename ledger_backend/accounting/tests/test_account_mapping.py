# accounting/tests/test_account_mapping.py

from django.test import TestCase

from accounting.models import MappingKey, OutletPaymentMethodMapping
from accounting.services.account_mapping import (
    resolve_outlet_account_mapping,
    resolve_payment_method_accounts,
)
from accounting.services.exceptions import OutletAccountMappingMissingError
from accounting.tests.fixtures import (
    make_account,
    make_company,
    make_outlet,
    map_outlet_accounts,
)


class OutletAccountMappingResolverTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)

    def test_resolves_all_requested_keys(self):
        accounts = map_outlet_accounts(
            self.company,
            self.outlet,
            [MappingKey.AR, MappingKey.SALES_REVENUE],
        )

        resolved = resolve_outlet_account_mapping(
            company_id=self.company.id,
            outlet_id=self.outlet.id,
            required_keys=[MappingKey.AR, MappingKey.SALES_REVENUE],
        )

        self.assertEqual(resolved[MappingKey.AR], accounts["AR"].id)
        self.assertEqual(resolved[MappingKey.SALES_REVENUE], accounts["SALES_REVENUE"].id)

    def test_reports_every_missing_key_at_once(self):
        map_outlet_accounts(self.company, self.outlet, [MappingKey.SALES_REVENUE])

        with self.assertRaises(OutletAccountMappingMissingError) as ctx:
            resolve_outlet_account_mapping(
                company_id=self.company.id,
                outlet_id=self.outlet.id,
                required_keys=[MappingKey.SALES_REVENUE, MappingKey.SALES_TAX, MappingKey.AR],
            )

        self.assertEqual(ctx.exception.missing_keys, ["SALES_TAX", "AR"])
        self.assertEqual(ctx.exception.code, "OUTLET_ACCOUNT_MAPPING_MISSING")

    def test_mapping_is_outlet_scoped(self):
        other = make_outlet(self.company, "SECOND")
        map_outlet_accounts(self.company, other, [MappingKey.AR])

        with self.assertRaises(OutletAccountMappingMissingError):
            resolve_outlet_account_mapping(
                company_id=self.company.id,
                outlet_id=self.outlet.id,
                required_keys=[MappingKey.AR],
            )


class PaymentMethodResolverTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)
        self.generic = map_outlet_accounts(
            self.company,
            self.outlet,
            [MappingKey.CASH, MappingKey.QRIS],
        )

    def test_falls_back_to_generic_mapping(self):
        resolved = resolve_payment_method_accounts(
            company_id=self.company.id,
            outlet_id=self.outlet.id,
            method_codes=["cash", "QRIS"],
        )

        self.assertEqual(resolved, {"CASH": self.generic["CASH"].id, "QRIS": self.generic["QRIS"].id})

    def test_specific_mapping_wins_over_fallback(self):
        drawer = make_account(self.company, "1101", "Cash drawer 2")
        OutletPaymentMethodMapping.objects.create(
            company=self.company,
            outlet=self.outlet,
            method_code=" cash ",
            account=drawer,
        )

        resolved = resolve_payment_method_accounts(
            company_id=self.company.id,
            outlet_id=self.outlet.id,
            method_codes=["CASH"],
        )

        self.assertEqual(resolved["CASH"], drawer.id)

    def test_custom_method_needs_specific_mapping(self):
        wallet = make_account(self.company, "1130", "E-wallet clearing")
        OutletPaymentMethodMapping.objects.create(
            company=self.company,
            outlet=self.outlet,
            method_code="EWALLET",
            account=wallet,
        )

        resolved = resolve_payment_method_accounts(
            company_id=self.company.id,
            outlet_id=self.outlet.id,
            method_codes=["EWALLET", "GIFTCARD", "CARD"],
        )

        self.assertEqual(resolved, {"EWALLET": wallet.id})
