"""
PATH: assets/services/depreciation.py

DEPRECIATION RUNS (STRAIGHT-LINE)

run_depreciation_plan() is the only entry point that creates DepreciationRun
rows. In ONE transaction it:
- locks the plan
- validates status + period
- inserts the run (unique per plan+period)
- posts the DEPRECIATION journal batch (transaction_owner="external")
- links the run to the batch

Re-running a period returns the existing run with duplicate=True.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db import IntegrityError, transaction

from accounting.services.money import InvalidMoneyError, normalize_money
from accounting.services.posting_rules import mapper_for_document
from accounting.services.posting_service import (
    TRANSACTION_OWNER_EXTERNAL,
    PostingService,
)
from assets.models import DepreciationPlan, DepreciationRun

logger = logging.getLogger(__name__)


class DepreciationError(Exception):
    code = "DEPRECIATION_ERROR"


class DepreciationPlanValidationError(DepreciationError):
    code = "DEPRECIATION_PLAN_INVALID"


class DepreciationPlanStatusError(DepreciationError):
    code = "DEPRECIATION_PLAN_STATUS_INVALID"


@dataclass(frozen=True)
class DepreciationRunOutcome:
    run: DepreciationRun
    duplicate: bool


def compute_straight_line_amount(*, purchase_cost, salvage_value, useful_life_months) -> Decimal:
    """(purchase_cost - salvage_value) / useful_life_months, normalized to money."""
    try:
        cost = normalize_money(purchase_cost)
        salvage = normalize_money(salvage_value)
    except InvalidMoneyError as exc:
        raise DepreciationPlanValidationError(str(exc)) from exc

    if cost < 0:
        raise DepreciationPlanValidationError("Invalid purchase cost")
    if salvage < 0:
        raise DepreciationPlanValidationError("Invalid salvage value")
    if salvage > cost:
        raise DepreciationPlanValidationError("Salvage value exceeds purchase cost")
    if not useful_life_months or int(useful_life_months) <= 0:
        raise DepreciationPlanValidationError("Useful life must be at least one month")

    return normalize_money((cost - salvage) / Decimal(int(useful_life_months)))


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _find_run(plan_id: int, period_year: int, period_month: int) -> DepreciationRun | None:
    return DepreciationRun.objects.filter(
        plan_id=plan_id,
        period_year=period_year,
        period_month=period_month,
    ).first()


@transaction.atomic
def run_depreciation_plan(
    *,
    company_id: int,
    plan_id: int,
    period_year: int,
    period_month: int,
    run_date: date | None = None,
) -> DepreciationRunOutcome:
    plan = (
        DepreciationPlan.objects.select_for_update()
        .filter(company_id=company_id, id=plan_id)
        .first()
    )
    if plan is None:
        raise DepreciationPlan.DoesNotExist(f"Depreciation plan {plan_id} not found")

    if plan.status != DepreciationPlan.STATUS_ACTIVE:
        raise DepreciationPlanStatusError("Plan is not active")

    if not 1 <= int(period_month) <= 12:
        raise DepreciationPlanValidationError("period_month must be between 1 and 12")
    if (period_year, period_month) < (plan.start_date.year, plan.start_date.month):
        raise DepreciationPlanValidationError("Run period is before plan start date")

    existing = _find_run(plan.id, period_year, period_month)
    if existing is not None:
        return DepreciationRunOutcome(run=existing, duplicate=True)

    amount = compute_straight_line_amount(
        purchase_cost=plan.purchase_cost_snapshot,
        salvage_value=plan.salvage_value,
        useful_life_months=plan.useful_life_months,
    )
    if amount <= 0:
        raise DepreciationPlanValidationError("Depreciable amount is zero")

    try:
        with transaction.atomic():
            run = DepreciationRun.objects.create(
                company_id=company_id,
                plan=plan,
                period_year=period_year,
                period_month=period_month,
                run_date=run_date or last_day_of_month(period_year, period_month),
                amount=amount,
                status=DepreciationRun.STATUS_POSTED,
            )
    except IntegrityError:
        existing = _find_run(plan.id, period_year, period_month)
        if existing is None:
            raise
        return DepreciationRunOutcome(run=existing, duplicate=True)

    result = PostingService(mapper_for_document(run)).post(
        transaction_owner=TRANSACTION_OWNER_EXTERNAL
    )

    run.journal_batch_id = result.journal_batch_id
    run.save(update_fields=["journal_batch", "updated_at"])

    logger.info(
        "Depreciation run posted",
        extra={
            "plan_id": plan.id,
            "period": f"{period_year:04d}-{period_month:02d}",
            "journal_batch_id": result.journal_batch_id,
        },
    )
    return DepreciationRunOutcome(run=run, duplicate=False)
