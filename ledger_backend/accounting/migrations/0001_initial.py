from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=32)),
                ("name", models.CharField(max_length=150)),
                (
                    "account_type",
                    models.CharField(
                        choices=[
                            ("ASSET", "Asset"),
                            ("LIABILITY", "Liability"),
                            ("EQUITY", "Equity"),
                            ("REVENUE", "Revenue"),
                            ("EXPENSE", "Expense"),
                        ],
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounts",
                        to="companies.company",
                    ),
                ),
            ],
            options={
                "db_table": "accounts",
                "ordering": ["company_id", "code"],
                "indexes": [
                    models.Index(fields=["company", "account_type"], name="ix_accounts_company_type"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "code"), name="uq_accounts_company_code"),
                    models.CheckConstraint(condition=models.Q(("code", ""), _negated=True), name="ck_accounts_code_not_blank"),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalBatch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "doc_type",
                    models.CharField(
                        choices=[
                            ("SALES_INVOICE", "Sales invoice"),
                            ("SALES_PAYMENT_IN", "Sales payment in"),
                            ("DEPRECIATION", "Depreciation run"),
                            ("POS_SALE", "POS sale"),
                        ],
                        max_length=64,
                    ),
                ),
                ("doc_id", models.PositiveBigIntegerField(help_text="Id of the source document")),
                ("posted_at", models.DateTimeField(help_text="Accounting effective timestamp")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_batches",
                        to="companies.company",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_batches",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "journal_batches",
                "ordering": ["-posted_at", "-id"],
                "verbose_name_plural": "Journal batches",
                "indexes": [
                    models.Index(fields=["company", "posted_at"], name="ix_jb_company_posted"),
                    models.Index(fields=["company", "doc_type", "posted_at"], name="ix_jb_company_doctype_posted"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "doc_type", "doc_id"),
                        name="uq_journal_batches_company_doc",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("line_date", models.DateField()),
                ("debit", models.DecimalField(decimal_places=2, default=0, max_digits=18)),
                ("credit", models.DecimalField(decimal_places=2, default=0, max_digits=18)),
                ("description", models.CharField(max_length=255)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="accounting.account",
                    ),
                ),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="companies.company",
                    ),
                ),
                (
                    "journal_batch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lines",
                        to="accounting.journalbatch",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "journal_lines",
                "ordering": ["journal_batch_id", "id"],
                "indexes": [
                    models.Index(fields=["company", "line_date"], name="ix_jl_company_date"),
                    models.Index(fields=["account", "line_date"], name="ix_jl_account_date"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("credit", 0), ("debit__gt", 0)),
                            models.Q(("credit__gt", 0), ("debit", 0)),
                            _connector="OR",
                        ),
                        name="ck_journal_lines_one_sided",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OutletAccountMapping",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "mapping_key",
                    models.CharField(
                        choices=[
                            ("CASH", "Cash"),
                            ("QRIS", "QRIS"),
                            ("CARD", "Card"),
                            ("SALES_REVENUE", "Sales revenue"),
                            ("SALES_TAX", "Sales tax payable"),
                            ("AR", "Accounts receivable"),
                        ],
                        max_length=32,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="outlet_mappings",
                        to="accounting.account",
                    ),
                ),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="outlet_account_mappings",
                        to="companies.company",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="account_mappings",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "outlet_account_mappings",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "outlet", "mapping_key"),
                        name="uq_outlet_account_mappings_key",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OutletPaymentMethodMapping",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("method_code", models.CharField(max_length=32)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payment_method_mappings",
                        to="accounting.account",
                    ),
                ),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="outlet_payment_method_mappings",
                        to="companies.company",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payment_method_mappings",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "outlet_payment_method_mappings",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "outlet", "method_code"),
                        name="uq_outlet_payment_method_mappings_code",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="TaxRate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=32)),
                ("name", models.CharField(max_length=120)),
                ("rate_percent", models.DecimalField(decimal_places=4, max_digits=9)),
                ("is_inclusive", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tax_rates",
                        to="companies.company",
                    ),
                ),
            ],
            options={
                "db_table": "tax_rates",
                "ordering": ["company_id", "name", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "code"), name="uq_tax_rates_company_code"),
                    models.CheckConstraint(
                        condition=models.Q(("rate_percent__gte", 0), ("rate_percent__lte", 100)),
                        name="ck_tax_rates_rate_percent_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CompanyTaxDefault",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tax_defaults",
                        to="companies.company",
                    ),
                ),
                (
                    "tax_rate",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="company_defaults",
                        to="accounting.taxrate",
                    ),
                ),
            ],
            options={
                "db_table": "company_tax_defaults",
                "constraints": [
                    models.UniqueConstraint(fields=("company", "tax_rate"), name="uq_company_tax_defaults"),
                ],
            },
        ),
    ]
