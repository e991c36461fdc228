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
            name="PosTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("client_tx_id", models.CharField(max_length=64, unique=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("COMPLETED", "Completed"), ("VOID", "Void"), ("REFUND", "Refund")],
                        max_length=16,
                    ),
                ),
                ("trx_at", models.DateTimeField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pos_transactions",
                        to="companies.company",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pos_transactions",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "pos_transactions",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["company", "status"], name="ix_pos_tx_company_status"),
                    models.Index(fields=["company", "outlet", "trx_at"], name="ix_pos_tx_outlet_trx_at"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PosTransactionItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("line_no", models.PositiveIntegerField()),
                ("item_id", models.PositiveBigIntegerField(help_text="Catalog item id at sale time")),
                ("name_snapshot", models.CharField(max_length=191)),
                ("qty", models.DecimalField(decimal_places=4, max_digits=18)),
                ("price_snapshot", models.DecimalField(decimal_places=2, max_digits=18)),
                (
                    "pos_transaction",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="pos.postransaction",
                    ),
                ),
            ],
            options={
                "db_table": "pos_transaction_items",
                "ordering": ["pos_transaction_id", "line_no"],
                "constraints": [
                    models.UniqueConstraint(fields=("pos_transaction", "line_no"), name="uq_pos_transaction_items_line"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PosTransactionPayment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_no", models.PositiveIntegerField()),
                ("method", models.CharField(max_length=32)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                (
                    "pos_transaction",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="pos.postransaction",
                    ),
                ),
            ],
            options={
                "db_table": "pos_transaction_payments",
                "ordering": ["pos_transaction_id", "payment_no"],
                "constraints": [
                    models.UniqueConstraint(fields=("pos_transaction", "payment_no"), name="uq_pos_transaction_payments_no"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PosTransactionTax",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                (
                    "pos_transaction",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="taxes",
                        to="pos.postransaction",
                    ),
                ),
                (
                    "tax_rate",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pos_transaction_taxes",
                        to="accounting.taxrate",
                    ),
                ),
            ],
            options={
                "db_table": "pos_transaction_taxes",
                "constraints": [
                    models.UniqueConstraint(fields=("pos_transaction", "tax_rate"), name="uq_pos_transaction_taxes_rate"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SyncAuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("action", models.CharField(max_length=64)),
                ("result", models.CharField(choices=[("SUCCESS", "Success"), ("FAIL", "Fail")], max_length=8)),
                ("payload", models.JSONField(default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sync_audit_logs",
                        to="companies.company",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sync_audit_logs",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "audit_logs",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["company", "action", "created_at"], name="ix_audit_logs_action"),
                ],
            },
        ),
    ]
