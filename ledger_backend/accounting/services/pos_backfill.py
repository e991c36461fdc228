# accounting/services/pos_backfill.py

"""
======================================================
PATH: accounting/services/pos_backfill.py
======================================================
POS JOURNAL BACKFILL

Posts POS_SALE batches for COMPLETED POS transactions that were never posted
(ingested before posting existed, or while the sync hook was disabled).

Per candidate, in its own transaction:
1. Lock the POS transaction row (must still be COMPLETED)
2. Lock + re-check the batch for (company, POS_SALE, id)
3. Same mapper + PostingService as live posting (transaction_owner="external")

Row statuses:
- INSERTED
- SKIPPED_EXISTS            batch already present under lock
- SKIPPED_NOT_COMPLETED     row gone or status changed since selection
- SKIPPED_RACE_DUPLICATE    lost the unique-constraint race
- FAILED                    any other error; other rows continue

Dry-run selects candidates and snapshots reconciliation, nothing else.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Sum

from accounting.models.journal import DocType, JournalBatch, JournalLine
from accounting.services.exceptions import AccountingServiceError
from accounting.services.posting_rules_pos import PosSalePostingMapper
from accounting.services.posting_service import (
    TRANSACTION_OWNER_EXTERNAL,
    PostingService,
)
from accounting.services.reconciliation import (
    ReconciliationReport,
    missing_pos_batches_qs,
    reconcile_pos_journals,
)
from pos.models import PosTransaction

logger = logging.getLogger(__name__)

STATUS_INSERTED = "INSERTED"
STATUS_SKIPPED_EXISTS = "SKIPPED_EXISTS"
STATUS_SKIPPED_NOT_COMPLETED = "SKIPPED_NOT_COMPLETED"
STATUS_SKIPPED_RACE_DUPLICATE = "SKIPPED_RACE_DUPLICATE"
STATUS_FAILED = "FAILED"

ROW_STATUSES = (
    STATUS_INSERTED,
    STATUS_SKIPPED_EXISTS,
    STATUS_SKIPPED_NOT_COMPLETED,
    STATUS_SKIPPED_RACE_DUPLICATE,
    STATUS_FAILED,
)

PREVIEW_SIZE = 10


@dataclass(frozen=True)
class BackfillRowResult:
    pos_transaction_id: int
    client_tx_id: str
    status: str
    journal_batch_id: int | None = None
    line_total: Decimal | None = None
    reason: str | None = None


@dataclass
class BackfillRun:
    execute: bool
    company_id: int | None
    outlet_id: int | None
    limit: int | None
    missing_candidates: int
    candidate_ids: list[int]
    before: ReconciliationReport
    after: ReconciliationReport | None = None
    results: list[BackfillRowResult] = field(default_factory=list)

    @property
    def counts(self) -> dict[str, int]:
        counter = Counter(r.status for r in self.results)
        return {status: counter.get(status, 0) for status in ROW_STATUSES}

    @property
    def failed(self) -> int:
        return self.counts[STATUS_FAILED]

    @property
    def preview_ids(self) -> list[int]:
        return self.candidate_ids[:PREVIEW_SIZE]


def find_backfill_candidates(*, company_id=None, outlet_id=None, limit=None):
    qs = missing_pos_batches_qs(company_id=company_id, outlet_id=outlet_id)
    if limit is not None:
        qs = qs[:limit]
    return qs


def _line_total(journal_batch_id: int) -> Decimal:
    total = JournalLine.objects.filter(journal_batch_id=journal_batch_id).aggregate(
        total=Sum("debit")
    )["total"]
    return total or Decimal("0.00")


def _existing_batch_id(*, company_id: int, pos_transaction_id: int) -> int | None:
    return (
        JournalBatch.objects.filter(
            company_id=company_id,
            doc_type=DocType.POS_SALE,
            doc_id=pos_transaction_id,
        )
        .values_list("id", flat=True)
        .first()
    )


def backfill_pos_transaction(*, company_id: int, pos_transaction_id: int, client_tx_id: str = "") -> BackfillRowResult:
    """Post one candidate. Never raises for per-row problems; returns a status instead."""
    def result(status, **kwargs):
        return BackfillRowResult(
            pos_transaction_id=pos_transaction_id,
            client_tx_id=client_tx_id,
            status=status,
            **kwargs,
        )

    try:
        with transaction.atomic():
            pos_transaction = (
                PosTransaction.objects.select_for_update()
                .filter(
                    company_id=company_id,
                    id=pos_transaction_id,
                    status=PosTransaction.STATUS_COMPLETED,
                )
                .first()
            )
            if pos_transaction is None:
                return result(STATUS_SKIPPED_NOT_COMPLETED)

            existing_id = (
                JournalBatch.objects.select_for_update()
                .filter(
                    company_id=company_id,
                    doc_type=DocType.POS_SALE,
                    doc_id=pos_transaction_id,
                )
                .values_list("id", flat=True)
                .first()
            )
            if existing_id is not None:
                return result(STATUS_SKIPPED_EXISTS, journal_batch_id=existing_id)

            mapper = PosSalePostingMapper(pos_transaction)
            posting = PostingService(mapper).post(
                mapper.build_request(),
                transaction_owner=TRANSACTION_OWNER_EXTERNAL,
            )
            if posting.already_posted:
                return result(
                    STATUS_SKIPPED_RACE_DUPLICATE,
                    journal_batch_id=posting.journal_batch_id,
                )

            return result(
                STATUS_INSERTED,
                journal_batch_id=posting.journal_batch_id,
                line_total=_line_total(posting.journal_batch_id),
            )
    except IntegrityError as exc:
        existing_id = _existing_batch_id(company_id=company_id, pos_transaction_id=pos_transaction_id)
        if existing_id is not None:
            return result(STATUS_SKIPPED_RACE_DUPLICATE, journal_batch_id=existing_id)
        return result(STATUS_FAILED, reason=f"INTEGRITY_ERROR: {exc}")
    except AccountingServiceError as exc:
        return result(STATUS_FAILED, reason=f"{exc.code}: {exc}")
    except DatabaseError as exc:
        return result(STATUS_FAILED, reason=f"DATABASE_ERROR: {exc}")


def run_pos_backfill(
    *,
    execute: bool = False,
    company_id: int | None = None,
    outlet_id: int | None = None,
    limit: int | None = None,
) -> BackfillRun:
    scope = {"company_id": company_id, "outlet_id": outlet_id}

    before = reconcile_pos_journals(**scope)
    candidates = list(
        find_backfill_candidates(limit=limit, **scope).values_list("id", "company_id", "client_tx_id")
    )

    run = BackfillRun(
        execute=execute,
        company_id=company_id,
        outlet_id=outlet_id,
        limit=limit,
        missing_candidates=len(candidates),
        candidate_ids=[row[0] for row in candidates],
        before=before,
    )

    if not execute:
        return run

    for pos_transaction_id, tx_company_id, client_tx_id in candidates:
        row = backfill_pos_transaction(
            company_id=tx_company_id,
            pos_transaction_id=pos_transaction_id,
            client_tx_id=client_tx_id,
        )
        if row.status == STATUS_FAILED:
            logger.error(
                "POS backfill failed",
                extra={
                    "pos_transaction_id": pos_transaction_id,
                    "client_tx_id": client_tx_id,
                    "reason": row.reason,
                },
            )
        run.results.append(row)

    run.after = reconcile_pos_journals(**scope)
    logger.info("POS backfill finished", extra={"scope": scope, "counts": run.counts})
    return run
