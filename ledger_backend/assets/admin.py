# assets/admin.py

from django.contrib import admin

from assets.models import DepreciationPlan, DepreciationRun, FixedAsset


@admin.register(FixedAsset)
class FixedAssetAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "outlet", "purchase_cost", "is_active")
    list_filter = ("company", "is_active")
    search_fields = ("name",)


@admin.register(DepreciationPlan)
class DepreciationPlanAdmin(admin.ModelAdmin):
    list_display = ("asset", "method", "start_date", "useful_life_months", "status")
    list_filter = ("status", "company")


@admin.register(DepreciationRun)
class DepreciationRunAdmin(admin.ModelAdmin):
    list_display = ("plan", "period_year", "period_month", "amount", "status", "journal_batch")
    list_filter = ("status", "period_year")
    readonly_fields = ("plan", "period_year", "period_month", "run_date", "amount", "journal_batch")
