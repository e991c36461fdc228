from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
        ("accounting", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="FixedAsset",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=191)),
                ("purchase_date", models.DateField(blank=True, null=True)),
                ("purchase_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=18, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="fixed_assets",
                        to="companies.company",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="fixed_assets",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "fixed_assets",
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="DepreciationPlan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "method",
                    models.CharField(
                        choices=[("STRAIGHT_LINE", "Straight line")],
                        default="STRAIGHT_LINE",
                        max_length=32,
                    ),
                ),
                ("start_date", models.DateField()),
                ("useful_life_months", models.PositiveIntegerField()),
                ("salvage_value", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("purchase_cost_snapshot", models.DecimalField(decimal_places=2, max_digits=18)),
                (
                    "status",
                    models.CharField(
                        choices=[("DRAFT", "Draft"), ("ACTIVE", "Active"), ("VOID", "Void")],
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "accum_depr_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="accounting.account",
                    ),
                ),
                (
                    "asset",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="depreciation_plans",
                        to="assets.fixedasset",
                    ),
                ),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="depreciation_plans",
                        to="companies.company",
                    ),
                ),
                (
                    "expense_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="accounting.account",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="depreciation_plans",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "asset_depreciation_plans",
                "ordering": ["-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("useful_life_months__gt", 0)),
                        name="ck_depreciation_plans_life_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DepreciationRun",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("period_year", models.PositiveSmallIntegerField()),
                ("period_month", models.PositiveSmallIntegerField()),
                ("run_date", models.DateField()),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                (
                    "status",
                    models.CharField(
                        choices=[("POSTED", "Posted"), ("VOID", "Void")],
                        default="POSTED",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="depreciation_runs",
                        to="companies.company",
                    ),
                ),
                (
                    "journal_batch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="accounting.journalbatch",
                    ),
                ),
                (
                    "plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="runs",
                        to="assets.depreciationplan",
                    ),
                ),
            ],
            options={
                "db_table": "asset_depreciation_runs",
                "ordering": ["-period_year", "-period_month"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("plan", "period_year", "period_month"),
                        name="uq_depreciation_runs_plan_period",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("period_month__gte", 1), ("period_month__lte", 12)),
                        name="ck_depreciation_runs_month_range",
                    ),
                ],
            },
        ),
    ]
