# users/tests/test_users.py

from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase

from accounting.tests.fixtures import make_company
from users.permissions import CanPostLedger, HasCompanyScope

User = get_user_model()


class UserManagerTests(TestCase):
    def test_company_is_required_for_regular_users(self):
        with self.assertRaises(ValidationError):
            User.objects.create_user(email="nobody@example.com", password="pass")

    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="  ", password="pass")

    def test_superuser_without_company(self):
        user = User.objects.create_superuser(email="root@example.com", password="pass")

        self.assertTrue(user.is_superuser)
        self.assertEqual(user.role, User.ROLE_ADMIN)
        self.assertIsNone(user.company_id)


class PermissionTests(TestCase):
    def setUp(self):
        self.company = make_company()

    def _request(self, role):
        user = User.objects.create_user(
            email=f"{role}@example.com",
            password="pass",
            company=self.company,
            role=role,
        )
        return SimpleNamespace(user=user)

    def test_company_scope_allows_any_role(self):
        request = self._request(User.ROLE_CASHIER)
        self.assertTrue(HasCompanyScope().has_permission(request, None))

    def test_superuser_without_company_has_no_scope(self):
        root = User.objects.create_superuser(email="root@example.com", password="pass")
        self.assertFalse(HasCompanyScope().has_permission(SimpleNamespace(user=root), None))

    def test_posting_roles(self):
        cases = {
            User.ROLE_ADMIN: True,
            User.ROLE_ACCOUNTANT: True,
            User.ROLE_CASHIER: False,
        }
        for role, allowed in cases.items():
            with self.subTest(role=role):
                request = self._request(role)
                self.assertEqual(CanPostLedger().has_permission(request, None), allowed)
