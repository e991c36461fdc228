# accounting/services/reconciliation.py

"""
======================================================
PATH: accounting/services/reconciliation.py
======================================================
POS JOURNAL RECONCILIATION (READ-ONLY)

Three counts per scope (company, optional outlet):
- missing_after       COMPLETED POS transactions with no POS_SALE batch
- unbalanced_batches  POS_SALE batches where SUM(debit) != SUM(credit), compared
                      in minor units (SQLite sums decimals as REAL);
                      a batch with no lines counts as 0 = 0
- orphan_batches      POS_SALE batches whose POS transaction no longer exists

All three are read inside one transaction so the report is taken against a
single snapshot (REPEATABLE READ on PostgreSQL when we own the transaction).
The ledger is consistent when every count is zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from django.db import DEFAULT_DB_ALIAS, connections, transaction
from django.db.models import BigIntegerField, DecimalField, Exists, F, OuterRef, Sum, Value
from django.db.models.functions import Cast, Coalesce, Round

from accounting.models.journal import DocType, JournalBatch
from pos.models import PosTransaction

_MONEY = DecimalField(max_digits=18, decimal_places=2)


@dataclass(frozen=True)
class ReconciliationReport:
    company_id: int | None
    outlet_id: int | None
    missing_after: int
    unbalanced_batches: int
    orphan_batches: int
    missing_sample_ids: list[int] = field(default_factory=list)
    unbalanced_sample_ids: list[int] = field(default_factory=list)
    orphan_sample_ids: list[int] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.missing_after == 0 and self.unbalanced_batches == 0 and self.orphan_batches == 0


# ============================================================
# QUERYSETS
# ============================================================

def _scope(qs, *, company_id, outlet_id):
    if company_id is not None:
        qs = qs.filter(company_id=company_id)
    if outlet_id is not None:
        qs = qs.filter(outlet_id=outlet_id)
    return qs


def missing_pos_batches_qs(*, company_id=None, outlet_id=None, using=DEFAULT_DB_ALIAS):
    posted = JournalBatch.objects.using(using).filter(
        company_id=OuterRef("company_id"),
        doc_type=DocType.POS_SALE,
        doc_id=OuterRef("id"),
    )
    qs = (
        PosTransaction.objects.using(using)
        .filter(status=PosTransaction.STATUS_COMPLETED)
        .filter(~Exists(posted))
    )
    return _scope(qs, company_id=company_id, outlet_id=outlet_id).order_by("id")


def unbalanced_pos_batches_qs(*, company_id=None, outlet_id=None, using=DEFAULT_DB_ALIAS):
    qs = JournalBatch.objects.using(using).filter(doc_type=DocType.POS_SALE)
    qs = _scope(qs, company_id=company_id, outlet_id=outlet_id)
    return (
        qs.annotate(
            total_debit=Coalesce(Sum("lines__debit"), Value(Decimal("0.00")), output_field=_MONEY),
            total_credit=Coalesce(Sum("lines__credit"), Value(Decimal("0.00")), output_field=_MONEY),
        )
        .annotate(
            diff_minor=Cast(
                Round((F("total_debit") - F("total_credit")) * Value(100)),
                BigIntegerField(),
            )
        )
        .exclude(diff_minor=0)
        .order_by("id")
    )


def orphan_pos_batches_qs(*, company_id=None, outlet_id=None, using=DEFAULT_DB_ALIAS):
    source = PosTransaction.objects.using(using).filter(
        company_id=OuterRef("company_id"),
        id=OuterRef("doc_id"),
    )
    qs = JournalBatch.objects.using(using).filter(doc_type=DocType.POS_SALE).filter(~Exists(source))
    return _scope(qs, company_id=company_id, outlet_id=outlet_id).order_by("id")


def _sample_ids(qs, limit: int) -> list[int]:
    if limit <= 0:
        return []
    return list(qs.values_list("id", flat=True)[:limit])


# ============================================================
# REPORT
# ============================================================

def reconcile_pos_journals(
    *,
    company_id: int | None = None,
    outlet_id: int | None = None,
    sample_limit: int = 0,
    using: str = DEFAULT_DB_ALIAS,
) -> ReconciliationReport:
    connection = connections[using]
    owns_transaction = not connection.in_atomic_block

    with transaction.atomic(using=using):
        if owns_transaction and connection.vendor == "postgresql":
            with connection.cursor() as cursor:
                cursor.execute("SET TRANSACTION ISOLATION LEVEL REPEATABLE READ")

        scope = {"company_id": company_id, "outlet_id": outlet_id, "using": using}
        missing = missing_pos_batches_qs(**scope)
        unbalanced = unbalanced_pos_batches_qs(**scope)
        orphans = orphan_pos_batches_qs(**scope)

        return ReconciliationReport(
            company_id=company_id,
            outlet_id=outlet_id,
            missing_after=missing.count(),
            unbalanced_batches=unbalanced.count(),
            orphan_batches=orphans.count(),
            missing_sample_ids=_sample_ids(missing, sample_limit),
            unbalanced_sample_ids=_sample_ids(unbalanced, sample_limit),
            orphan_sample_ids=_sample_ids(orphans, sample_limit),
        )
