"""
PATH: pos/services/sync_push_posting.py

SYNC-PUSH POSTING HOOK (MODE-GATED)

Lets POS synchronization trigger POS_SALE posting without destabilizing sync.

Mode (settings.SYNC_PUSH_POSTING_MODE, env of the same name):
- disabled (default): no-op
- shadow: build lines + check shape/balance, write nothing
- active: PostingService.post(transaction_owner="external"); the caller owns
  the transaction

Only COMPLETED transactions are posted; anything else returns a skipped
result (reason=STATUS_NOT_COMPLETED), not an error.

Every failure in shadow/active is raised as SyncPushPostingHookError carrying
the mode and the original cause.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from django.conf import settings

from accounting.services.exceptions import SourceDocumentNotFoundError
from accounting.services.posting_rules_pos import PosSalePostingMapper
from accounting.services.posting_service import (
    TRANSACTION_OWNER_EXTERNAL,
    PostingService,
)
from pos.models import PosTransaction

logger = logging.getLogger(__name__)

MODE_DISABLED = "disabled"
MODE_SHADOW = "shadow"
MODE_ACTIVE = "active"
VALID_MODES = (MODE_DISABLED, MODE_SHADOW, MODE_ACTIVE)

REASON_POSTING_DISABLED = "POSTING_DISABLED"
REASON_STATUS_NOT_COMPLETED = "STATUS_NOT_COMPLETED"
REASON_SHADOW_VALIDATED = "SHADOW_VALIDATED"
REASON_POSTED = "POSTED"
REASON_ALREADY_POSTED = "ALREADY_POSTED"


@dataclass(frozen=True)
class SyncPushPostingContext:
    correlation_id: str
    company_id: int
    outlet_id: int
    user_id: int | None
    client_tx_id: str
    trx_at: datetime
    status: str
    pos_transaction_id: int


@dataclass(frozen=True)
class SyncPushPostingResult:
    mode: str
    journal_batch_id: int | None = None
    balance_ok: bool | None = None
    reason: str | None = None


class SyncPushPostingHookError(Exception):
    def __init__(self, mode: str, cause: BaseException):
        self.mode = mode
        self.cause = cause
        code = getattr(cause, "code", type(cause).__name__)
        super().__init__(f"Sync push posting hook failed in {mode} mode ({code}): {cause}")


def resolve_sync_push_posting_mode(raw: str | None = None) -> str:
    if raw is None:
        raw = getattr(settings, "SYNC_PUSH_POSTING_MODE", MODE_DISABLED)

    mode = str(raw or "").strip().lower()
    if not mode:
        return MODE_DISABLED

    if mode not in VALID_MODES:
        logger.warning(
            "Invalid SYNC_PUSH_POSTING_MODE %r; falling back to %s",
            raw,
            MODE_DISABLED,
        )
        return MODE_DISABLED

    return mode


def run_sync_push_posting_hook(
    context: SyncPushPostingContext,
    *,
    mode: str | None = None,
) -> SyncPushPostingResult:
    mode = resolve_sync_push_posting_mode(mode)

    if mode == MODE_DISABLED:
        return SyncPushPostingResult(mode=mode, reason=REASON_POSTING_DISABLED)

    if context.status != PosTransaction.STATUS_COMPLETED:
        return SyncPushPostingResult(mode=mode, reason=REASON_STATUS_NOT_COMPLETED)

    try:
        pos_transaction = PosTransaction.objects.filter(
            company_id=context.company_id,
            id=context.pos_transaction_id,
        ).first()
        if pos_transaction is None:
            raise SourceDocumentNotFoundError(
                f"SOURCE_DOCUMENT_NOT_FOUND: POS transaction {context.pos_transaction_id} "
                f"of company {context.company_id}"
            )
        mapper = PosSalePostingMapper(pos_transaction)
        service = PostingService(mapper)
        request = mapper.build_request()

        if mode == MODE_SHADOW:
            lines = service.build_lines(request)
            logger.info(
                "Shadow posting validated",
                extra={
                    "correlation_id": context.correlation_id,
                    "client_tx_id": context.client_tx_id,
                    "line_count": len(lines),
                },
            )
            return SyncPushPostingResult(
                mode=mode,
                balance_ok=True,
                reason=REASON_SHADOW_VALIDATED,
            )

        result = service.post(request, transaction_owner=TRANSACTION_OWNER_EXTERNAL)
    except Exception as exc:
        raise SyncPushPostingHookError(mode, exc) from exc

    return SyncPushPostingResult(
        mode=mode,
        journal_batch_id=result.journal_batch_id,
        balance_ok=True,
        reason=REASON_ALREADY_POSTED if result.already_posted else REASON_POSTED,
    )
