"""
PATH: pos/services/sync_push.py

POS SYNC PUSH (INGEST)

Accepts a batch of offline POS transactions for one outlet.

Per transaction (each in its own atomic block):
- company / outlet mismatch with the push scope  -> ERROR
- client_tx_id already stored                    -> DUPLICATE
- otherwise insert transaction + items + payments + taxes,
  write SYNC_PUSH_ACCEPTED audit row, run the posting hook -> OK

The posting hook runs inside its own savepoint. A hook failure is logged,
audited as SYNC_PUSH_POSTING_HOOK_FAIL and never turns OK into ERROR.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from accounting.models import TaxRate
from pos.models import (
    PosTransaction,
    PosTransactionItem,
    PosTransactionPayment,
    PosTransactionTax,
    SyncAuditLog,
)
from pos.services.sync_push_posting import (
    SyncPushPostingContext,
    SyncPushPostingHookError,
    run_sync_push_posting_hook,
)

logger = logging.getLogger(__name__)

RESULT_OK = "OK"
RESULT_DUPLICATE = "DUPLICATE"
RESULT_ERROR = "ERROR"


@dataclass(frozen=True)
class SyncPushItemResult:
    client_tx_id: str
    result: str
    message: str | None = None
    pos_transaction_id: int | None = None


# ============================================================
# INSERT
# ============================================================

def _insert_transaction(*, company_id: int, outlet_id: int, tx: dict) -> PosTransaction:
    pos_transaction = PosTransaction.objects.create(
        company_id=company_id,
        outlet_id=outlet_id,
        client_tx_id=tx["client_tx_id"],
        status=tx["status"],
        trx_at=tx["trx_at"],
    )

    PosTransactionItem.objects.bulk_create(
        [
            PosTransactionItem(
                pos_transaction=pos_transaction,
                line_no=index,
                item_id=item["item_id"],
                name_snapshot=item["name"],
                qty=Decimal(str(item["qty"])),
                price_snapshot=Decimal(str(item["price_snapshot"])),
            )
            for index, item in enumerate(tx.get("items") or [], start=1)
        ]
    )

    PosTransactionPayment.objects.bulk_create(
        [
            PosTransactionPayment(
                pos_transaction=pos_transaction,
                payment_no=index,
                method=str(payment.get("method") or "").strip().upper(),
                amount=Decimal(str(payment["amount"])),
            )
            for index, payment in enumerate(tx.get("payments") or [], start=1)
        ]
    )

    taxes = tx.get("taxes") or []
    if taxes:
        rate_ids = {int(row["tax_rate_id"]) for row in taxes}
        known = set(
            TaxRate.objects.filter(company_id=company_id, id__in=rate_ids)
            .values_list("id", flat=True)
        )
        unknown = sorted(rate_ids - known)
        if unknown:
            raise ValidationError(f"Unknown tax_rate_id(s) for company: {unknown}")

        PosTransactionTax.objects.bulk_create(
            [
                PosTransactionTax(
                    pos_transaction=pos_transaction,
                    tax_rate_id=int(row["tax_rate_id"]),
                    amount=Decimal(str(row["amount"])),
                )
                for row in taxes
            ]
        )

    return pos_transaction


# ============================================================
# POSTING HOOK
# ============================================================

def _run_posting_hook(context: SyncPushPostingContext) -> None:
    try:
        with transaction.atomic():
            result = run_sync_push_posting_hook(context)
    except SyncPushPostingHookError as exc:
        logger.error(
            "Sync push posting hook failed",
            exc_info=exc,
            extra={
                "correlation_id": context.correlation_id,
                "client_tx_id": context.client_tx_id,
                "mode": exc.mode,
            },
        )
        SyncAuditLog.objects.create(
            company_id=context.company_id,
            outlet_id=context.outlet_id,
            user_id=context.user_id,
            action=SyncAuditLog.ACTION_POSTING_HOOK_FAIL,
            result=SyncAuditLog.RESULT_FAIL,
            payload={
                "correlation_id": context.correlation_id,
                "client_tx_id": context.client_tx_id,
                "pos_transaction_id": context.pos_transaction_id,
                "mode": exc.mode,
                "code": getattr(exc.cause, "code", type(exc.cause).__name__),
                "reason": str(exc.cause),
            },
        )
        return

    logger.info(
        "Sync push posting hook finished",
        extra={
            "correlation_id": context.correlation_id,
            "client_tx_id": context.client_tx_id,
            "mode": result.mode,
            "reason": result.reason,
            "journal_batch_id": result.journal_batch_id,
        },
    )


# ============================================================
# PUBLIC API
# ============================================================

def accept_sync_push(
    *,
    company_id: int,
    outlet_id: int,
    transactions: list[dict],
    user_id: int | None = None,
    correlation_id: str | None = None,
) -> list[SyncPushItemResult]:
    correlation_id = correlation_id or uuid.uuid4().hex
    results: list[SyncPushItemResult] = []

    for tx in transactions:
        client_tx_id = tx["client_tx_id"]

        if int(tx["company_id"]) != int(company_id):
            results.append(SyncPushItemResult(client_tx_id, RESULT_ERROR, "company_id mismatch"))
            continue
        if int(tx["outlet_id"]) != int(outlet_id):
            results.append(SyncPushItemResult(client_tx_id, RESULT_ERROR, "outlet_id mismatch"))
            continue

        if PosTransaction.objects.filter(client_tx_id=client_tx_id).exists():
            results.append(SyncPushItemResult(client_tx_id, RESULT_DUPLICATE))
            continue

        try:
            with transaction.atomic():
                pos_transaction = _insert_transaction(
                    company_id=company_id,
                    outlet_id=outlet_id,
                    tx=tx,
                )
                SyncAuditLog.objects.create(
                    company_id=company_id,
                    outlet_id=outlet_id,
                    user_id=user_id,
                    action=SyncAuditLog.ACTION_ACCEPTED,
                    result=SyncAuditLog.RESULT_SUCCESS,
                    payload={
                        "correlation_id": correlation_id,
                        "client_tx_id": client_tx_id,
                        "pos_transaction_id": pos_transaction.id,
                        "status": pos_transaction.status,
                    },
                )
                _run_posting_hook(
                    SyncPushPostingContext(
                        correlation_id=correlation_id,
                        company_id=company_id,
                        outlet_id=outlet_id,
                        user_id=user_id,
                        client_tx_id=client_tx_id,
                        trx_at=pos_transaction.trx_at,
                        status=pos_transaction.status,
                        pos_transaction_id=pos_transaction.id,
                    )
                )
        except IntegrityError:
            if PosTransaction.objects.filter(client_tx_id=client_tx_id).exists():
                results.append(SyncPushItemResult(client_tx_id, RESULT_DUPLICATE))
                continue
            logger.exception(
                "Sync push insert failed",
                extra={"correlation_id": correlation_id, "client_tx_id": client_tx_id},
            )
            results.append(SyncPushItemResult(client_tx_id, RESULT_ERROR, "insert failed"))
            continue
        except (
            ValidationError,
            ObjectDoesNotExist,
            DatabaseError,
            InvalidOperation,
            KeyError,
            ValueError,
        ) as exc:
            logger.warning(
                "Sync push transaction rejected: %s",
                exc,
                extra={"correlation_id": correlation_id, "client_tx_id": client_tx_id},
            )
            results.append(SyncPushItemResult(client_tx_id, RESULT_ERROR, "insert failed"))
            continue

        results.append(
            SyncPushItemResult(
                client_tx_id,
                RESULT_OK,
                pos_transaction_id=pos_transaction.id,
            )
        )

    logger.info(
        "Sync push processed",
        extra={
            "correlation_id": correlation_id,
            "company_id": company_id,
            "outlet_id": outlet_id,
            "count": len(results),
        },
    )
    return results
