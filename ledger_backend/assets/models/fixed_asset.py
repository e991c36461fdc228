"""
PATH: assets/models/fixed_asset.py

FIXED ASSETS + STRAIGHT-LINE DEPRECIATION

FixedAsset: the asset register row.
DepreciationPlan: how an asset is depreciated (straight-line only).
- purchase_cost_snapshot is frozen at plan creation
- status DRAFT -> ACTIVE -> VOID; only ACTIVE plans can run
DepreciationRun: one per (plan, period). The unique key makes re-running a
period idempotent; the run points at the DEPRECIATION journal batch it posted.
"""

from decimal import Decimal

from django.db import models
from django.db.models import Q


class FixedAsset(models.Model):
    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="fixed_assets",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="fixed_assets",
    )

    name = models.CharField(max_length=191)
    purchase_date = models.DateField(null=True, blank=True)
    purchase_cost = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "fixed_assets"
        ordering = ["name", "id"]

    def __str__(self):
        return self.name


class DepreciationPlan(models.Model):
    METHOD_STRAIGHT_LINE = "STRAIGHT_LINE"
    METHOD_CHOICES = [(METHOD_STRAIGHT_LINE, "Straight line")]

    STATUS_DRAFT = "DRAFT"
    STATUS_ACTIVE = "ACTIVE"
    STATUS_VOID = "VOID"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_ACTIVE, "Active"),
        (STATUS_VOID, "Void"),
    ]

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="depreciation_plans",
    )
    asset = models.ForeignKey(
        FixedAsset,
        on_delete=models.PROTECT,
        related_name="depreciation_plans",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="depreciation_plans",
    )

    method = models.CharField(max_length=32, choices=METHOD_CHOICES, default=METHOD_STRAIGHT_LINE)
    start_date = models.DateField()
    useful_life_months = models.PositiveIntegerField()
    salvage_value = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    purchase_cost_snapshot = models.DecimalField(max_digits=18, decimal_places=2)

    expense_account = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        related_name="+",
    )
    accum_depr_account = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        related_name="+",
    )

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_DRAFT)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "asset_depreciation_plans"
        ordering = ["-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(useful_life_months__gt=0),
                name="ck_depreciation_plans_life_positive",
            ),
        ]

    def __str__(self):
        return f"Plan #{self.id} for {self.asset_id} ({self.status})"


class DepreciationRun(models.Model):
    STATUS_POSTED = "POSTED"
    STATUS_VOID = "VOID"

    STATUS_CHOICES = [
        (STATUS_POSTED, "Posted"),
        (STATUS_VOID, "Void"),
    ]

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="depreciation_runs",
    )
    plan = models.ForeignKey(
        DepreciationPlan,
        on_delete=models.PROTECT,
        related_name="runs",
    )

    period_year = models.PositiveSmallIntegerField()
    period_month = models.PositiveSmallIntegerField()
    run_date = models.DateField()
    amount = models.DecimalField(max_digits=18, decimal_places=2)

    journal_batch = models.ForeignKey(
        "accounting.JournalBatch",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_POSTED)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "asset_depreciation_runs"
        ordering = ["-period_year", "-period_month"]
        constraints = [
            models.UniqueConstraint(
                fields=["plan", "period_year", "period_month"],
                name="uq_depreciation_runs_plan_period",
            ),
            models.CheckConstraint(
                condition=Q(period_month__gte=1) & Q(period_month__lte=12),
                name="ck_depreciation_runs_month_range",
            ),
        ]

    def __str__(self):
        return f"Run {self.period_year:04d}-{self.period_month:02d} plan #{self.plan_id}"
