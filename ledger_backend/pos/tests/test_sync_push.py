# pos/tests/test_sync_push.py

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.utils import timezone
from drf_spectacular.generators import SchemaGenerator
from rest_framework.test import APIClient

from accounting.models import DocType, JournalBatch, MappingKey
from accounting.tests.fixtures import (
    make_company,
    make_outlet,
    make_tax_rate,
    map_outlet_accounts,
)
from pos.models import PosTransaction, PosTransactionPayment, SyncAuditLog
from pos.services.sync_push import (
    RESULT_DUPLICATE,
    RESULT_ERROR,
    RESULT_OK,
    accept_sync_push,
)

User = get_user_model()


def tx_payload(company, outlet, client_tx_id, **overrides):
    payload = {
        "client_tx_id": client_tx_id,
        "company_id": company.id,
        "outlet_id": outlet.id,
        "status": PosTransaction.STATUS_COMPLETED,
        "trx_at": timezone.now(),
        "items": [{"item_id": 7, "name": "Latte", "qty": "2", "price_snapshot": "25.00"}],
        "payments": [{"method": " cash ", "amount": "50.00"}],
        "taxes": [],
    }
    payload.update(overrides)
    return payload


class AcceptSyncPushTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)
        map_outlet_accounts(self.company, self.outlet)

    def _push(self, *transactions, **kwargs):
        return accept_sync_push(
            company_id=self.company.id,
            outlet_id=self.outlet.id,
            transactions=list(transactions),
            correlation_id="corr-1",
            **kwargs,
        )

    @override_settings(SYNC_PUSH_POSTING_MODE="disabled")
    def test_accepts_and_audits(self):
        [result] = self._push(tx_payload(self.company, self.outlet, "tx-1"), user_id=5)

        self.assertEqual(result.result, RESULT_OK)
        tx = PosTransaction.objects.get(id=result.pos_transaction_id)
        self.assertEqual(tx.items.count(), 1)
        self.assertEqual(
            list(PosTransactionPayment.objects.filter(pos_transaction=tx).values_list("method", flat=True)),
            ["CASH"],
        )

        audit = SyncAuditLog.objects.get(action=SyncAuditLog.ACTION_ACCEPTED)
        self.assertEqual(audit.result, SyncAuditLog.RESULT_SUCCESS)
        self.assertEqual(audit.user_id, 5)
        self.assertEqual(audit.payload["correlation_id"], "corr-1")
        self.assertEqual(audit.payload["pos_transaction_id"], tx.id)
        self.assertFalse(JournalBatch.objects.exists())

    def test_repeated_client_tx_id_is_duplicate(self):
        self._push(tx_payload(self.company, self.outlet, "tx-1"))

        [result] = self._push(tx_payload(self.company, self.outlet, "tx-1"))

        self.assertEqual(result.result, RESULT_DUPLICATE)
        self.assertEqual(PosTransaction.objects.count(), 1)

    def test_scope_mismatch_is_error(self):
        other = make_outlet(self.company, "SECOND")
        payload = tx_payload(self.company, other, "tx-other-outlet")
        foreign = tx_payload(self.company, self.outlet, "tx-foreign", company_id=self.company.id + 99)

        results = self._push(payload, foreign)

        self.assertEqual([r.result for r in results], [RESULT_ERROR, RESULT_ERROR])
        self.assertEqual(results[0].message, "outlet_id mismatch")
        self.assertEqual(results[1].message, "company_id mismatch")
        self.assertFalse(PosTransaction.objects.exists())

    def test_unknown_tax_rate_is_error_and_rolled_back(self):
        payload = tx_payload(
            self.company,
            self.outlet,
            "tx-tax",
            taxes=[{"tax_rate_id": 999999, "amount": "5.00"}],
        )

        [result] = self._push(payload)

        self.assertEqual(result.result, RESULT_ERROR)
        self.assertEqual(result.message, "insert failed")
        self.assertFalse(PosTransaction.objects.exists())
        self.assertFalse(SyncAuditLog.objects.exists())

    def test_one_bad_row_does_not_block_others(self):
        bad = tx_payload(self.company, self.outlet, "tx-bad", taxes=[{"tax_rate_id": 999999, "amount": "1"}])
        good = tx_payload(self.company, self.outlet, "tx-good")

        results = self._push(bad, good)

        self.assertEqual([r.result for r in results], [RESULT_ERROR, RESULT_OK])

    @override_settings(SYNC_PUSH_POSTING_MODE="active")
    def test_active_mode_posts_batch(self):
        rate = make_tax_rate(self.company, "VAT11", "11")
        payload = tx_payload(
            self.company,
            self.outlet,
            "tx-active",
            payments=[{"method": "CASH", "amount": "55.50"}],
            taxes=[{"tax_rate_id": rate.id, "amount": "5.50"}],
        )

        [result] = self._push(payload)

        self.assertEqual(result.result, RESULT_OK)
        batch = JournalBatch.objects.get(doc_type=DocType.POS_SALE, doc_id=result.pos_transaction_id)
        self.assertEqual(batch.outlet_id, self.outlet.id)

    @override_settings(SYNC_PUSH_POSTING_MODE="active")
    def test_hook_failure_keeps_transaction_and_audits(self):
        bare = make_outlet(self.company, "BARE")
        map_outlet_accounts(self.company, bare, keys=[MappingKey.CASH])

        [result] = accept_sync_push(
            company_id=self.company.id,
            outlet_id=bare.id,
            transactions=[tx_payload(self.company, bare, "tx-unmapped")],
            correlation_id="corr-2",
        )

        self.assertEqual(result.result, RESULT_OK)
        self.assertTrue(PosTransaction.objects.filter(client_tx_id="tx-unmapped").exists())
        self.assertFalse(JournalBatch.objects.exists())

        failure = SyncAuditLog.objects.get(action=SyncAuditLog.ACTION_POSTING_HOOK_FAIL)
        self.assertEqual(failure.result, SyncAuditLog.RESULT_FAIL)
        self.assertEqual(failure.payload["mode"], "active")
        self.assertEqual(failure.payload["code"], "OUTLET_ACCOUNT_MAPPING_MISSING")
        self.assertEqual(failure.payload["correlation_id"], "corr-2")
        self.assertEqual(failure.payload["pos_transaction_id"], result.pos_transaction_id)

    @override_settings(SYNC_PUSH_POSTING_MODE="active")
    def test_void_transaction_is_stored_but_not_posted(self):
        [result] = self._push(
            tx_payload(self.company, self.outlet, "tx-void", status=PosTransaction.STATUS_VOID)
        )

        self.assertEqual(result.result, RESULT_OK)
        self.assertFalse(JournalBatch.objects.exists())


class SyncPushApiTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.outlet = make_outlet(self.company)
        map_outlet_accounts(self.company, self.outlet)
        user = User.objects.create_user(
            email="cashier@example.com",
            password="pass",
            company=self.company,
            role=User.ROLE_CASHIER,
        )
        self.client = APIClient()
        self.client.force_authenticate(user)

    def _body(self, outlet_id, *client_tx_ids):
        return {
            "outlet_id": outlet_id,
            "transactions": [
                {
                    **tx_payload(self.company, self.outlet, client_tx_id),
                    "trx_at": "2026-03-10T09:30:00Z",
                }
                for client_tx_id in client_tx_ids
            ],
        }

    def test_push_returns_per_transaction_results(self):
        response = self.client.post(
            "/api/pos/sync/push/",
            self._body(self.outlet.id, "tx-a", "tx-b"),
            format="json",
            HTTP_X_CORRELATION_ID="corr-api",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["correlation_id"], "corr-api")
        self.assertEqual([r["result"] for r in response.data["results"]], [RESULT_OK, RESULT_OK])

    def test_response_is_wrapped_with_correlation_id(self):
        response = self.client.post("/api/pos/sync/push/", self._body(self.outlet.id, "tx-a"), format="json")

        self.assertEqual(set(response.data), {"correlation_id", "results"})
        self.assertTrue(response.data["correlation_id"])
        self.assertEqual(
            set(response.data["results"][0]),
            {"client_tx_id", "result", "message", "pos_transaction_id"},
        )

    def test_schema_documents_wrapped_response(self):
        schema = SchemaGenerator().get_schema(request=None, public=True)

        operation = schema["paths"]["/api/pos/sync/push/"]["post"]
        body = operation["responses"]["200"]["content"]["application/json"]["schema"]
        self.assertEqual(body, {"$ref": "#/components/schemas/SyncPushResponse"})
        component = schema["components"]["schemas"]["SyncPushResponse"]
        self.assertEqual(set(component["properties"]), {"correlation_id", "results"})
        self.assertEqual(component["properties"]["results"]["type"], "array")

    def test_outlet_of_other_company_is_404(self):
        other_outlet = make_outlet(make_company("OTHER"))

        response = self.client.post(
            "/api/pos/sync/push/",
            self._body(other_outlet.id, "tx-a"),
            format="json",
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["code"], "OUTLET_NOT_FOUND")
        self.assertFalse(PosTransaction.objects.exists())

    def test_empty_batch_is_400(self):
        response = self.client.post(
            "/api/pos/sync/push/",
            {"outlet_id": self.outlet.id, "transactions": []},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
