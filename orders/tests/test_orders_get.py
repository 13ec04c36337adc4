from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.testing import bearer, make_admin, make_dentist, make_order, make_supplier


class OrderListTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist("d1@mail.de")
        self.other_dentist = make_dentist("d2@mail.de")
        self.supplier = make_supplier("s1@mail.de")
        self.other_supplier = make_supplier("s2@mail.de")

        self.o1 = make_order(self.dentist, self.supplier, title="Crown 26", patient_name="Alice")
        self.o2 = make_order(self.dentist, self.other_supplier, title="Bridge 14-16", prosthesis_type="bridge")
        self.o3 = make_order(self.other_dentist, self.supplier, title="Veneer", prosthesis_type="veneer")
        self.url = reverse("order-list")

    def _ids(self, res):
        return {row["id"] for row in res.data["results"]}

    def test_dentist_sees_own_orders(self):
        bearer(self.client, self.dentist)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(self._ids(res), {self.o1.id, self.o2.id})

    def test_supplier_sees_assigned_orders(self):
        bearer(self.client, self.supplier)
        res = self.client.get(self.url)
        self.assertEqual(self._ids(res), {self.o1.id, self.o3.id})

    def test_admin_sees_all_and_filters(self):
        bearer(self.client, self.admin)
        res = self.client.get(self.url)
        self.assertEqual(res.data["count"], 3)

        res = self.client.get(self.url, {"supplier_id": self.supplier.id})
        self.assertEqual(self._ids(res), {self.o1.id, self.o3.id})

        res = self.client.get(self.url, {"dentist_id": self.other_dentist.id})
        self.assertEqual(self._ids(res), {self.o3.id})

    def test_newest_first(self):
        bearer(self.client, self.admin)
        res = self.client.get(self.url)
        self.assertEqual([r["id"] for r in res.data["results"]], [self.o3.id, self.o2.id, self.o1.id])

    def test_search_title_number_and_patient(self):
        bearer(self.client, self.dentist)
        self.assertEqual(self._ids(self.client.get(self.url, {"search": "bridge"})), {self.o2.id})
        self.assertEqual(self._ids(self.client.get(self.url, {"search": "alice"})), {self.o1.id})
        res = self.client.get(self.url, {"search": self.o2.order_number})
        self.assertEqual(self._ids(res), {self.o2.id})

    def test_status_filter(self):
        bearer(self.client, self.dentist)
        res = self.client.get(self.url, {"status": "quote_asked"})
        self.assertEqual(res.data["count"], 2)
        res = self.client.get(self.url, {"status": "delivered"})
        self.assertEqual(res.data["count"], 0)

    def test_unknown_status_filter(self):
        bearer(self.client, self.dentist)
        res = self.client.get(self.url, {"status": "shipped"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_page_size(self):
        bearer(self.client, self.admin)
        res = self.client.get(self.url, {"limit": 2})
        self.assertEqual(len(res.data["results"]), 2)
        self.assertIsNotNone(res.data["next"])


class OrderDetailTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist()
        self.supplier = make_supplier()
        self.stranger = make_supplier("other-lab@mail.de")
        self.order = make_order(self.dentist, self.supplier)
        self.url = reverse("order-detail", args=[self.order.id])

    def test_parties_and_admin_can_read(self):
        for user in (self.dentist, self.supplier, self.admin):
            bearer(self.client, user)
            res = self.client.get(self.url)
            self.assertEqual(res.status_code, status.HTTP_200_OK)
            self.assertEqual(res.data["id"], self.order.id)
            self.assertEqual(res.data["quotes"], [])
            self.assertEqual(res.data["files"], [])

    def test_unassigned_supplier_forbidden(self):
        bearer(self.client, self.stranger)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data["kind"], "permission_denied")

    def test_unknown_order(self):
        bearer(self.client, self.admin)
        res = self.client.get(reverse("order-detail", args=[9999]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["kind"], "not_found")


class OrderStatsTests(APITestCase):
    def setUp(self):
        self.dentist = make_dentist()
        self.supplier = make_supplier()
        self.other_supplier = make_supplier("s2@mail.de")
        make_order(self.dentist, self.supplier)
        make_order(self.dentist, self.supplier)
        make_order(self.dentist, self.other_supplier)

    def test_stats_scoped_to_caller(self):
        bearer(self.client, self.supplier)
        res = self.client.get(reverse("order-stats"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total_orders"], 2)
        self.assertEqual(res.data["status_counts"]["quote_asked"], 2)
        self.assertEqual(res.data["status_counts"]["delivered"], 0)
        self.assertEqual(len(res.data["recent_orders"]), 2)

        bearer(self.client, self.dentist)
        res = self.client.get(reverse("order-stats"))
        self.assertEqual(res.data["total_orders"], 3)
