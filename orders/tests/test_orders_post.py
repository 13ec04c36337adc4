from unittest import mock

from django.db import IntegrityError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from chat.models import ChatMessage
from common.testing import bearer, make_admin, make_dentist, make_supplier
from orders.models import Order
from orders.services import create_order


class OrderCreateTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist()
        self.supplier = make_supplier()
        self.url = reverse("order-list")
        self.payload = {
            "supplier_id": self.supplier.id,
            "title": "Crown 26",
            "prosthesis_type": "crown",
            "material": "zirconia",
            "tooth_numbers": [26],
            "patient_name": "Jean Martin",
        }

    def test_dentist_creates_order(self):
        bearer(self.client, self.dentist)
        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "quote_asked")
        self.assertEqual(res.data["order_number"], "ORD-000001")
        self.assertEqual(res.data["dentist"]["id"], self.dentist.id)
        self.assertEqual(res.data["supplier"]["id"], self.supplier.id)
        self.assertEqual(res.data["urgency"], "medium")
        self.assertIsNone(res.data["pricing_factor"])

    def test_order_numbers_are_sequential(self):
        bearer(self.client, self.dentist)
        self.client.post(self.url, self.payload, format="json")
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.data["order_number"], "ORD-000002")

    def test_creation_is_logged_in_chat(self):
        bearer(self.client, self.dentist)
        res = self.client.post(self.url, self.payload, format="json")

        msg = ChatMessage.objects.get(order_id=res.data["id"])
        self.assertTrue(msg.is_system_message)
        self.assertEqual(msg.system_action, ChatMessage.SystemAction.ORDER_CREATED)
        self.assertEqual(msg.message, "New order created: Crown 26")

    def test_admin_must_name_dentist(self):
        bearer(self.client, self.admin)
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("dentist_id", res.data["errors"])

        res = self.client.post(self.url, {**self.payload, "dentist_id": self.dentist.id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["dentist"]["id"], self.dentist.id)

    def test_invalid_supplier(self):
        bearer(self.client, self.dentist)
        # ein Zahnarzt ist kein Labor
        res = self.client.post(self.url, {**self.payload, "supplier_id": self.dentist.id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["kind"], "validation_failed")
        self.assertIn("supplier_id", res.data["errors"])

    def test_inactive_supplier_rejected(self):
        self.supplier.is_active = False
        self.supplier.save(update_fields=["is_active"])
        bearer(self.client, self.dentist)
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_required_fields(self):
        bearer(self.client, self.dentist)
        res = self.client.post(self.url, {"supplier_id": self.supplier.id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("title", "prosthesis_type", "material"):
            self.assertIn(field, res.data["errors"])

    def test_unknown_material_rejected(self):
        bearer(self.client, self.dentist)
        res = self.client.post(self.url, {**self.payload, "material": "gold"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_supplier_cannot_create(self):
        bearer(self.client, self.supplier)
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Order.objects.count(), 0)

    def test_requires_authentication(self):
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)


class OrderNumberCollisionTests(APITestCase):
    def setUp(self):
        self.dentist = make_dentist()
        self.supplier = make_supplier()
        self.first = create_order(
            self.dentist, self.dentist, self.supplier,
            title="Crown 26", prosthesis_type="crown", material="zirconia",
        )

    def test_taken_number_is_retried(self):
        # simuliert eine parallele Anfrage, die dieselbe Nummer gelesen hat
        with mock.patch(
            "orders.services.next_order_number",
            side_effect=[self.first.order_number, "ORD-000042"],
        ):
            order = create_order(
                self.dentist, self.dentist, self.supplier,
                title="Bridge", prosthesis_type="bridge", material="metal",
            )

        self.assertEqual(order.order_number, "ORD-000042")
        self.assertEqual(Order.objects.count(), 2)
        self.assertEqual(ChatMessage.objects.filter(order=order).count(), 1)

    def test_gives_up_after_repeated_collisions(self):
        with mock.patch("orders.services.next_order_number", return_value=self.first.order_number):
            with self.assertRaises(IntegrityError):
                create_order(
                    self.dentist, self.dentist, self.supplier,
                    title="Bridge", prosthesis_type="bridge", material="metal",
                )
        self.assertEqual(Order.objects.count(), 1)
