# users/permissions.py

from rest_framework.permissions import BasePermission


class HasCompanyScope(BasePermission):
    """
    Authenticated user bound to a company.

    Views read the tenant from request.user.company_id; never from the payload.
    """

    message = "User is not assigned to a company."

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated and getattr(user, "company_id", None)
        )


class CanPostLedger(HasCompanyScope):
    """Admins and accountants may trigger postings (invoices, payments, depreciation)."""

    allowed_roles = {"admin", "accountant"}

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        return request.user.role in self.allowed_roles
