from decimal import Decimal

from django.test import SimpleTestCase

from quotes.models import compute_adjusted, compute_total


class PricingMathTests(SimpleTestCase):
    def test_total_treats_missing_parts_as_zero(self):
        self.assertEqual(compute_total(Decimal("100")), Decimal("100.00"))
        self.assertEqual(compute_total(Decimal("10.10"), None, Decimal("0.20")), Decimal("10.30"))

    def test_adjusted_rounds_half_up(self):
        self.assertEqual(compute_adjusted(Decimal("33.33"), Decimal("1.50")), Decimal("50.00"))
        self.assertEqual(compute_adjusted(Decimal("0.05"), Decimal("1.50")), Decimal("0.08"))
