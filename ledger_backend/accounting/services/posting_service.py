# accounting/services/posting_service.py

"""
======================================================
PATH: accounting/services/posting_service.py
======================================================
POSTING SERVICE (ACCOUNTING ENGINE)

This module is the ONLY place allowed to:
- Create JournalBatch
- Create JournalLine
- Enforce line shape (one-sided, non-negative) and debit == credit
- Resolve the duplicate-batch race

State machine per (company, doc_type, doc_id): UNPOSTED -> POSTED. Nothing else.

TRANSACTIONS:
- transaction_owner="service": the service opens (and commits / rolls back)
  its own transaction.atomic() block.
- transaction_owner="external": the caller already holds an open atomic block
  on the same connection. The service only issues statements; any failure
  propagates so the caller's transaction rolls back too.
Batch + lines are always written inside one savepoint, so a batch without
lines is never observable.

IDEMPOTENCY:
- UNIQUE (company_id, doc_type, doc_id) on journal_batches is the only source
  of truth. Losing the insert race returns AlreadyPosted(existing_id); it is
  never raised to the caller and never retried.

Construct one PostingService per call site; it holds no shared state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.utils import timezone

from accounting.models.journal import JournalBatch, JournalLine
from accounting.services.exceptions import (
    InvalidJournalLineShapeError,
    PostingRuleError,
    UnbalancedJournalError,
)
from accounting.services.money import from_minor_units, to_minor_units
from accounting.services.posting_rules import (
    JournalLineDraft,
    PostingMapper,
    PostingRequest,
)

logger = logging.getLogger(__name__)

TRANSACTION_OWNER_SERVICE = "service"
TRANSACTION_OWNER_EXTERNAL = "external"
TRANSACTION_OWNERS = {TRANSACTION_OWNER_SERVICE, TRANSACTION_OWNER_EXTERNAL}

MAX_DESCRIPTION_LENGTH = 255


@dataclass(frozen=True)
class Posted:
    journal_batch_id: int
    already_posted = False


@dataclass(frozen=True)
class AlreadyPosted:
    journal_batch_id: int
    already_posted = True


PostingResult = Union[Posted, AlreadyPosted]


def _as_aware_dt(dt: datetime | None) -> datetime:
    if dt is None:
        return timezone.now()
    if timezone.is_naive(dt):
        return timezone.make_aware(dt, timezone.get_current_timezone())
    return dt


def validate_journal_lines(lines: list[JournalLineDraft]) -> None:
    """
    Shape + balance invariants, checked in integer minor units before any write.

    Raises InvalidJournalLineShapeError / UnbalancedJournalError.
    """
    if not lines:
        raise InvalidJournalLineShapeError(
            "INVALID_JOURNAL_LINE_SHAPE: journal must contain at least one line"
        )

    total_debit = 0
    total_credit = 0
    for index, line in enumerate(lines):
        if not line.account_id:
            raise InvalidJournalLineShapeError(
                f"INVALID_JOURNAL_LINE_SHAPE: line {index} has no account"
            )
        if len(line.description or "") > MAX_DESCRIPTION_LENGTH:
            raise InvalidJournalLineShapeError(
                f"INVALID_JOURNAL_LINE_SHAPE: line {index} description exceeds "
                f"{MAX_DESCRIPTION_LENGTH} characters"
            )

        debit = to_minor_units(line.debit)
        credit = to_minor_units(line.credit)
        if debit < 0 or credit < 0:
            raise InvalidJournalLineShapeError(
                f"INVALID_JOURNAL_LINE_SHAPE: line {index} has a negative amount"
            )
        if (debit > 0) == (credit > 0):
            raise InvalidJournalLineShapeError(
                f"INVALID_JOURNAL_LINE_SHAPE: line {index} must be exactly one-sided "
                f"(debit={line.debit}, credit={line.credit})"
            )

        total_debit += debit
        total_credit += credit

    if total_debit != total_credit:
        raise UnbalancedJournalError(
            f"UNBALANCED_JOURNAL: debits={from_minor_units(total_debit)} "
            f"credits={from_minor_units(total_credit)}"
        )


class PostingService:
    def __init__(self, mapper: PostingMapper, *, using: str = DEFAULT_DB_ALIAS):
        if mapper is None:
            raise PostingRuleError("PostingService requires a mapper")
        self.mapper = mapper
        self.using = using

    # --------------------------------------------------
    # Side-effect-free half (also used by shadow mode)
    # --------------------------------------------------
    def build_lines(self, request: PostingRequest) -> list[JournalLineDraft]:
        if str(request.doc_type) != str(self.mapper.doc_type):
            raise PostingRuleError(
                f"Mapper for {self.mapper.doc_type} cannot post doc_type={request.doc_type}"
            )

        lines = list(self.mapper.map_to_journal(request))
        validate_journal_lines(lines)
        return lines

    # --------------------------------------------------
    # Posting
    # --------------------------------------------------
    def post(
        self,
        request: PostingRequest | None = None,
        *,
        transaction_owner: str = TRANSACTION_OWNER_SERVICE,
        posted_at: datetime | None = None,
    ) -> PostingResult:
        if transaction_owner not in TRANSACTION_OWNERS:
            raise PostingRuleError(f"Unknown transaction_owner={transaction_owner!r}")

        if request is None:
            request = self.mapper.build_request()

        if transaction_owner == TRANSACTION_OWNER_EXTERNAL:
            if not transaction.get_connection(self.using).in_atomic_block:
                raise PostingRuleError(
                    "transaction_owner='external' requires an open transaction"
                )
            return self._post(request, posted_at)

        with transaction.atomic(using=self.using):
            return self._post(request, posted_at)

    def _find_existing_batch_id(self, request: PostingRequest) -> int | None:
        return (
            JournalBatch.objects.using(self.using)
            .filter(
                company_id=request.company_id,
                doc_type=request.doc_type,
                doc_id=request.doc_id,
            )
            .values_list("id", flat=True)
            .first()
        )

    def _post(self, request: PostingRequest, posted_at: datetime | None) -> PostingResult:
        existing_id = self._find_existing_batch_id(request)
        if existing_id is not None:
            return AlreadyPosted(journal_batch_id=existing_id)

        lines = self.build_lines(request)
        posted_at_dt = _as_aware_dt(posted_at or self.mapper.posted_at())
        line_date = timezone.localtime(posted_at_dt).date()

        try:
            with transaction.atomic(using=self.using):
                batch = JournalBatch(
                    company_id=request.company_id,
                    outlet_id=request.outlet_id,
                    doc_type=request.doc_type,
                    doc_id=request.doc_id,
                    posted_at=posted_at_dt,
                )
                batch.save(using=self.using)

                JournalLine.objects.using(self.using).bulk_create(
                    [
                        JournalLine(
                            journal_batch=batch,
                            company_id=request.company_id,
                            outlet_id=request.outlet_id,
                            account_id=line.account_id,
                            line_date=line_date,
                            debit=line.debit,
                            credit=line.credit,
                            description=line.description,
                        )
                        for line in lines
                    ]
                )
        except IntegrityError:
            existing_id = self._find_existing_batch_id(request)
            if existing_id is None:
                raise
            logger.info(
                "Journal batch insert lost duplicate race; returning existing batch",
                extra={
                    "doc_type": str(request.doc_type),
                    "doc_id": request.doc_id,
                    "company_id": request.company_id,
                    "journal_batch_id": existing_id,
                },
            )
            return AlreadyPosted(journal_batch_id=existing_id)

        logger.info(
            "Journal batch posted",
            extra={
                "doc_type": str(request.doc_type),
                "doc_id": request.doc_id,
                "company_id": request.company_id,
                "journal_batch_id": batch.id,
                "line_count": len(lines),
            },
        )
        return Posted(journal_batch_id=batch.id)
