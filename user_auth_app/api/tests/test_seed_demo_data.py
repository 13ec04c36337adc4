from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from pricing.models import PricingFactor
from pricing.resolver import resolve
from profiles.models import Profile

User = get_user_model()


class SeedDemoDataTests(TestCase):
    def _seed(self, **options):
        call_command("seed_demo_data", stdout=StringIO(), **options)

    def test_creates_users_and_factors(self):
        self._seed(admin_email="root@example.com", admin_password="Root-Pass-123")

        admin = User.objects.get(username="root@example.com")
        self.assertTrue(admin.is_superuser)
        self.assertEqual(admin.profile.role, Profile.Role.ADMIN)
        self.assertTrue(admin.check_password("Root-Pass-123"))
        self.assertEqual(User.objects.get(email="dentist@example.com").profile.role, Profile.Role.DENTIST)
        self.assertEqual(User.objects.get(email="supplier@example.com").profile.preferred_language, "zh")
        self.assertEqual(PricingFactor.objects.count(), 4)

    def test_is_idempotent(self):
        self._seed()
        self._seed()
        self.assertEqual(User.objects.count(), 3)
        self.assertEqual(PricingFactor.objects.count(), 4)

    def test_seeded_factors_resolve(self):
        self._seed()
        supplier = User.objects.get(email="supplier@example.com")
        value = Decimal("100.00")
        self.assertEqual(resolve(supplier.id, "crown", "zirconia", "medium", value), Decimal("1.60"))
        self.assertEqual(resolve(supplier.id, "implant", "metal", "high", value), Decimal("2.00"))
        self.assertEqual(resolve(supplier.id, "veneer", "ceramic", "low", value), Decimal("1.50"))
