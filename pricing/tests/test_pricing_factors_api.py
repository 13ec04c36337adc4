from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.testing import bearer, make_admin, make_dentist, make_supplier
from pricing.models import PricingFactor


class PricingFactorApiTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.supplier = make_supplier()
        self.dentist = make_dentist()
        self.list_url = reverse("pricing-factor-list")

    def _create(self, **payload):
        data = {"name": "Crown markup", "factor": "1.40", "category": "crown"}
        data.update(payload)
        return self.client.post(self.list_url, data, format="json")

    def test_admin_creates_rule(self):
        bearer(self.client, self.admin)
        res = self._create(supplier_id=self.supplier.id)
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        rule = PricingFactor.objects.get(id=res.data["id"])
        self.assertEqual(rule.created_by, self.admin)
        self.assertEqual(rule.supplier, self.supplier)

    def test_factor_out_of_range_rejected(self):
        bearer(self.client, self.admin)
        for factor in ("0.50", "10.50"):
            res = self._create(factor=factor)
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(res.data["kind"], "validation_failed")
            self.assertIn("factor", res.data["errors"])

    def test_min_greater_than_max_rejected(self):
        bearer(self.client, self.admin)
        res = self._create(min_order_value="500.00", max_order_value="100.00")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("max_order_value", res.data["errors"])

    def test_non_admin_forbidden(self):
        for user in (self.dentist, self.supplier):
            bearer(self.client, user)
            res = self._create()
            self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_filters_and_delete_deactivates(self):
        bearer(self.client, self.admin)
        rule_id = self._create(supplier_id=self.supplier.id).data["id"]
        self._create(name="Default", is_default=True, category="general")

        res = self.client.get(self.list_url, {"supplier_id": self.supplier.id})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 1)

        detail = reverse("pricing-factor-detail", args=[rule_id])
        res = self.client.delete(detail)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["is_active"])
        self.assertTrue(PricingFactor.objects.filter(id=rule_id).exists())

        res = self.client.get(self.list_url, {"is_active": "false"})
        self.assertEqual(res.data["count"], 1)

    def test_patch_updates_factor_but_not_scope(self):
        bearer(self.client, self.admin)
        rule_id = self._create().data["id"]
        detail = reverse("pricing-factor-detail", args=[rule_id])
        res = self.client.patch(detail, {"factor": "2.00", "category": "bridge"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["factor"], "2.00")
        self.assertEqual(res.data["category"], "crown")

    def test_resolve_preview(self):
        bearer(self.client, self.admin)
        self._create(name="Default", factor="1.50", is_default=True, category="general")
        res = self.client.get(
            reverse("pricing-factor-resolve"),
            {"category": "crown", "material": "ceramic", "order_value": "100.00"},
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["factor"], "1.50")
        self.assertEqual(res.data["rule"]["name"], "Default")
