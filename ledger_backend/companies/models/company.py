# companies/models/company.py

"""
PATH: companies/models/company.py

TENANT MASTER DATA

- Company is the tenant root; every ledger row is company-scoped.
- Outlet is a physical branch / POS location of exactly one company.
- Outlet codes are unique per company (not globally).
"""

from django.db import models


class Company(models.Model):
    code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=255)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "companies"
        ordering = ["name"]
        verbose_name_plural = "Companies"

    def __str__(self):
        return f"{self.name} ({self.code})"


class Outlet(models.Model):
    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="outlets",
    )
    code = models.CharField(max_length=32)
    name = models.CharField(max_length=255)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "outlets"
        ordering = ["company_id", "code"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "code"],
                name="uq_outlets_company_code",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"
