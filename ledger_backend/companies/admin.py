# companies/admin.py

from django.contrib import admin

from companies.models import Company, Outlet


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "name", "is_active")
    search_fields = ("code", "name")


@admin.register(Outlet)
class OutletAdmin(admin.ModelAdmin):
    list_display = ("id", "company", "code", "name", "is_active")
    list_filter = ("company", "is_active")
    search_fields = ("code", "name")
