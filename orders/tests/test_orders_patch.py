from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.testing import bearer, make_admin, make_dentist, make_order, make_supplier
from orders.models import Order


def force_status(order, value):
    Order.objects.filter(pk=order.pk).update(status=value)
    order.refresh_from_db()
    return order


class OrderDetailEditTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist()
        self.other_dentist = make_dentist("d2@mail.de")
        self.supplier = make_supplier()
        self.order = make_order(self.dentist, self.supplier, title="Crown 26")
        self.url = reverse("order-detail", args=[self.order.id])

    def test_dentist_edits_details(self):
        bearer(self.client, self.dentist)
        res = self.client.patch(
            self.url, {"title": "Crown 27", "urgency": "high", "tooth_numbers": [27]}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["title"], "Crown 27")
        self.assertEqual(res.data["urgency"], "high")
        self.assertEqual(res.data["tooth_numbers"], [27])
        self.assertEqual(res.data["status"], "quote_asked")

    def test_status_is_not_editable_here(self):
        bearer(self.client, self.dentist)
        res = self.client.patch(self.url, {"status": "delivered"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.QUOTE_ASKED)

    def test_admin_edits_any_order(self):
        bearer(self.client, self.admin)
        res = self.client.patch(self.url, {"notes": "call before shipping"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["notes"], "call before shipping")

    def test_other_dentist_forbidden(self):
        bearer(self.client, self.other_dentist)
        res = self.client.patch(self.url, {"title": "Mine now"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_supplier_cannot_edit_details(self):
        bearer(self.client, self.supplier)
        res = self.client.patch(self.url, {"title": "Lab title"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_in_production_order_is_locked(self):
        force_status(self.order, Order.Status.IN_PRODUCTION)
        bearer(self.client, self.dentist)
        res = self.client.patch(self.url, {"title": "Changed"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["kind"], "order_locked")
        self.order.refresh_from_db()
        self.assertEqual(self.order.title, "Crown 26")

    def test_cancelled_order_is_locked(self):
        force_status(self.order, Order.Status.CANCELLED)
        bearer(self.client, self.admin)
        res = self.client.patch(self.url, {"title": "Changed"}, format="json")
        self.assertEqual(res.data["kind"], "order_locked")

    def test_quote_validated_still_editable(self):
        force_status(self.order, Order.Status.QUOTE_VALIDATED)
        bearer(self.client, self.dentist)
        res = self.client.patch(self.url, {"color": "A2"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["color"], "A2")

    def test_invalid_value_rejected(self):
        bearer(self.client, self.dentist)
        res = self.client.patch(self.url, {"patient_age": 200}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("patient_age", res.data["errors"])
