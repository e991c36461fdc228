from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="SalesInvoice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("invoice_no", models.CharField(max_length=64)),
                ("invoice_date", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[("DRAFT", "Draft"), ("POSTED", "Posted"), ("VOID", "Void")],
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("UNPAID", "Unpaid"), ("PARTIAL", "Partially paid"), ("PAID", "Paid")],
                        default="UNPAID",
                        max_length=16,
                    ),
                ),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("grand_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("paid_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_invoices",
                        to="companies.company",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_invoices",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "sales_invoices",
                "ordering": ["-invoice_date", "-id"],
                "indexes": [
                    models.Index(fields=["company", "status"], name="ix_sales_invoices_status"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "invoice_no"), name="uq_sales_invoices_company_no"),
                    models.CheckConstraint(
                        condition=models.Q(("subtotal__gte", 0), ("tax_amount__gte", 0), ("grand_total__gte", 0)),
                        name="ck_sales_invoices_amounts_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SalesPayment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_no", models.CharField(max_length=64)),
                ("payment_at", models.DateTimeField()),
                (
                    "method",
                    models.CharField(
                        choices=[("CASH", "Cash"), ("QRIS", "QRIS"), ("CARD", "Card")],
                        max_length=16,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("DRAFT", "Draft"), ("POSTED", "Posted"), ("VOID", "Void")],
                        default="DRAFT",
                        max_length=16,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_payments",
                        to="companies.company",
                    ),
                ),
                (
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="sales.salesinvoice",
                    ),
                ),
                (
                    "outlet",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_payments",
                        to="companies.outlet",
                    ),
                ),
            ],
            options={
                "db_table": "sales_payments",
                "ordering": ["-payment_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "payment_no"), name="uq_sales_payments_company_no"),
                    models.CheckConstraint(condition=models.Q(("amount__gt", 0)), name="ck_sales_payments_amount_positive"),
                ],
            },
        ),
    ]
