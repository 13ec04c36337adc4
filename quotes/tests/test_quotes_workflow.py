from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from chat.models import ChatMessage
from common.testing import bearer, make_admin, make_dentist, make_order, make_supplier
from orders.models import Order
from pricing.models import PricingFactor
from quotes.models import Quote
from quotes.services import accept_quote, create_quote, reject_quote, revise_quote


def add_default_factor(admin, factor="1.50"):
    return PricingFactor.objects.create(
        created_by=admin, name="Default", factor=Decimal(factor), is_default=True
    )


class QuoteCreateTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist()
        self.supplier = make_supplier()
        self.stranger = make_supplier("other-lab@mail.de")
        add_default_factor(self.admin)
        self.order = make_order(self.dentist, self.supplier)
        self.url = reverse("quote-list")

    def test_supplier_quotes_order_with_default_factor(self):
        bearer(self.client, self.supplier)
        res = self.client.post(self.url, {"order_id": self.order.id, "base_price": "100.00"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "sent")
        self.assertEqual(res.data["total_price"], "100.00")
        self.assertEqual(res.data["pricing_factor"], "1.50")
        self.assertEqual(res.data["adjusted_price"], "150.00")
        self.assertEqual(res.data["revision_number"], 1)
        self.assertIsNotNone(res.data["valid_until"])

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.QUOTE_SENT)
        self.assertTrue(
            ChatMessage.objects.filter(
                order=self.order, system_action=ChatMessage.SystemAction.QUOTE_SENT
            ).exists()
        )

    def test_total_includes_every_cost_component(self):
        bearer(self.client, self.supplier)
        res = self.client.post(
            self.url,
            {
                "order_id": self.order.id,
                "base_price": "100.00",
                "material_cost": "20.50",
                "labor_cost": "30.00",
                "shipping_cost": "9.50",
                "tax_amount": "12.00",
            },
            format="json",
        )
        self.assertEqual(res.data["total_price"], "172.00")
        self.assertEqual(res.data["adjusted_price"], "258.00")

    def test_without_rules_factor_is_one(self):
        PricingFactor.objects.all().delete()
        bearer(self.client, self.supplier)
        res = self.client.post(self.url, {"order_id": self.order.id, "base_price": "80.00"}, format="json")
        self.assertEqual(res.data["pricing_factor"], "1.00")
        self.assertEqual(res.data["adjusted_price"], "80.00")

    def test_order_must_await_quote(self):
        Order.objects.filter(pk=self.order.pk).update(status=Order.Status.IN_PRODUCTION)
        bearer(self.client, self.supplier)
        res = self.client.post(self.url, {"order_id": self.order.id, "base_price": "100.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["kind"], "invalid_transition")
        self.assertEqual(Quote.objects.count(), 0)

    def test_negative_price_rejected(self):
        bearer(self.client, self.supplier)
        res = self.client.post(self.url, {"order_id": self.order.id, "base_price": "-1.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("base_price", res.data["errors"])

    def test_unassigned_supplier_forbidden(self):
        bearer(self.client, self.stranger)
        res = self.client.post(self.url, {"order_id": self.order.id, "base_price": "100.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_dentist_cannot_quote(self):
        bearer(self.client, self.dentist)
        res = self.client.post(self.url, {"order_id": self.order.id, "base_price": "100.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class QuoteDecisionTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist()
        self.other_dentist = make_dentist("d2@mail.de")
        self.supplier = make_supplier()
        add_default_factor(self.admin)
        self.order = make_order(self.dentist, self.supplier)

        bearer(self.client, self.supplier)
        res = self.client.post(
            reverse("quote-list"), {"order_id": self.order.id, "base_price": "100.00"}, format="json"
        )
        self.quote = Quote.objects.get(pk=res.data["id"])

    def test_dentist_accepts_quote(self):
        bearer(self.client, self.dentist)
        res = self.client.post(reverse("quote-accept", args=[self.quote.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "accepted")
        self.assertEqual(res.data["accepted_by"], self.dentist.id)
        self.assertIsNotNone(res.data["accepted_at"])

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.QUOTE_VALIDATED)
        self.assertEqual(self.order.original_quote, Decimal("100.00"))
        self.assertEqual(self.order.adjusted_quote, Decimal("150.00"))
        self.assertEqual(self.order.pricing_factor, Decimal("1.50"))

    def test_accepted_quote_cannot_be_accepted_again(self):
        bearer(self.client, self.dentist)
        self.client.post(reverse("quote-accept", args=[self.quote.id]))
        res = self.client.post(reverse("quote-accept", args=[self.quote.id]))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["kind"], "invalid_transition")

    def test_other_dentist_cannot_decide(self):
        bearer(self.client, self.other_dentist)
        res = self.client.post(reverse("quote-accept", args=[self.quote.id]))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.quote.refresh_from_db()
        self.assertEqual(self.quote.status, Quote.Status.SENT)

    def test_supplier_cannot_accept(self):
        res = self.client.post(reverse("quote-accept", args=[self.quote.id]))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_reject_reopens_quoting(self):
        bearer(self.client, self.dentist)
        res = self.client.post(
            reverse("quote-reject", args=[self.quote.id]), {"rejection_reason": "Too expensive"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "rejected")
        self.assertEqual(res.data["rejection_reason"], "Too expensive")

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.QUOTE_ASKED)

        # neues Angebot nach Ablehnung
        bearer(self.client, self.supplier)
        res = self.client.post(
            reverse("quote-list"), {"order_id": self.order.id, "base_price": "90.00"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

    def test_rejected_quote_cannot_be_accepted(self):
        bearer(self.client, self.dentist)
        self.client.post(reverse("quote-reject", args=[self.quote.id]))
        res = self.client.post(reverse("quote-accept", args=[self.quote.id]))
        self.assertEqual(res.data["kind"], "invalid_transition")


class QuoteRevisionTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist()
        self.supplier = make_supplier()
        self.other_supplier = make_supplier("s2@mail.de")
        add_default_factor(self.admin)
        self.order = make_order(self.dentist, self.supplier)
        bearer(self.client, self.supplier)
        res = self.client.post(
            reverse("quote-list"), {"order_id": self.order.id, "base_price": "100.00"}, format="json"
        )
        self.quote_id = res.data["id"]
        self.url = reverse("quote-detail", args=[self.quote_id])

    def test_revision_recomputes_prices(self):
        # Faktor bleibt, auch wenn sich die Regeln ändern
        PricingFactor.objects.update(factor=Decimal("2.00"))
        res = self.client.patch(self.url, {"base_price": "120.00", "labor_cost": "10.00"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "modified")
        self.assertEqual(res.data["revision_number"], 2)
        self.assertEqual(res.data["total_price"], "130.00")
        self.assertEqual(res.data["pricing_factor"], "1.50")
        self.assertEqual(res.data["adjusted_price"], "195.00")
        self.assertTrue(
            ChatMessage.objects.filter(
                order=self.order, message="Quote updated (Revision 2)"
            ).exists()
        )

    def test_modified_quote_can_be_accepted(self):
        self.client.patch(self.url, {"base_price": "110.00"}, format="json")
        bearer(self.client, self.dentist)
        res = self.client.post(reverse("quote-accept", args=[self.quote_id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_accepted_quote_cannot_be_revised(self):
        bearer(self.client, self.dentist)
        self.client.post(reverse("quote-accept", args=[self.quote_id]))

        bearer(self.client, self.supplier)
        res = self.client.patch(self.url, {"base_price": "1.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["kind"], "invalid_transition")
        self.assertEqual(Quote.objects.get(pk=self.quote_id).base_price, Decimal("100.00"))

    def test_other_supplier_cannot_revise(self):
        bearer(self.client, self.other_supplier)
        res = self.client.patch(self.url, {"base_price": "1.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_dentist_cannot_revise(self):
        bearer(self.client, self.dentist)
        res = self.client.patch(self.url, {"base_price": "1.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class QuoteReadTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist()
        self.supplier = make_supplier()
        self.stranger = make_supplier("s2@mail.de")
        self.order = make_order(self.dentist, self.supplier)
        self.other_order = make_order(self.dentist, self.stranger)
        bearer(self.client, self.supplier)
        self.client.post(reverse("quote-list"), {"order_id": self.order.id, "base_price": "50.00"}, format="json")
        bearer(self.client, self.stranger)
        self.client.post(
            reverse("quote-list"), {"order_id": self.other_order.id, "base_price": "70.00"}, format="json"
        )

    def test_admin_lists_and_filters(self):
        bearer(self.client, self.admin)
        res = self.client.get(reverse("quote-list"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)

        res = self.client.get(reverse("quote-list"), {"supplier_id": self.supplier.id})
        self.assertEqual(res.data["count"], 1)
        res = self.client.get(reverse("quote-list"), {"status": "accepted"})
        self.assertEqual(res.data["count"], 0)

    def test_full_list_is_admin_only(self):
        bearer(self.client, self.dentist)
        res = self.client.get(reverse("quote-list"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_order_quotes_for_parties(self):
        bearer(self.client, self.dentist)
        res = self.client.get(reverse("order-quotes", args=[self.order.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["order"]["order_number"], self.order.order_number)

        bearer(self.client, self.stranger)
        res = self.client.get(reverse("order-quotes", args=[self.order.id]))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_quote_detail_gated_by_order(self):
        quote = Quote.objects.get(order=self.order)
        bearer(self.client, self.stranger)
        res = self.client.get(reverse("quote-detail", args=[quote.id]))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        bearer(self.client, self.dentist)
        res = self.client.get(reverse("quote-detail", args=[quote.id]))
        self.assertEqual(res.data["adjusted_price"], "50.00")


class CompetingQuotesTests(APITestCase):
    """Several quotes on one order, decided in different orders."""

    def setUp(self):
        self.admin = make_admin()
        self.dentist = make_dentist()
        self.supplier = make_supplier()
        add_default_factor(self.admin)
        self.order = make_order(self.dentist, self.supplier)

    def _refresh_order(self):
        self.order.refresh_from_db()
        return self.order.status

    def test_revised_quote_accepted_after_other_rejected(self):
        q1 = create_quote(self.order, self.supplier, base_price=Decimal("100.00"))
        reject_quote(q1, self.dentist)
        self.assertEqual(self._refresh_order(), Order.Status.QUOTE_ASKED)

        q2 = create_quote(self.order, self.supplier, base_price=Decimal("90.00"))
        self.assertEqual(self._refresh_order(), Order.Status.QUOTE_SENT)

        q1 = revise_quote(q1, self.supplier, {"base_price": Decimal("95.00")})
        self.assertEqual(q1.status, Quote.Status.MODIFIED)

        reject_quote(q2, self.dentist)
        # q1 ist noch offen
        self.assertEqual(self._refresh_order(), Order.Status.QUOTE_SENT)

        q1 = accept_quote(q1, self.dentist)
        self.assertEqual(q1.status, Quote.Status.ACCEPTED)
        self.assertEqual(self._refresh_order(), Order.Status.QUOTE_VALIDATED)
        self.assertEqual(self.order.adjusted_quote, Decimal("142.50"))

    def test_open_quote_accepted_while_order_awaits_quotes(self):
        quote = create_quote(self.order, self.supplier, base_price=Decimal("100.00"))
        Order.objects.filter(pk=self.order.pk).update(status=Order.Status.QUOTE_ASKED)

        bearer(self.client, self.dentist)
        res = self.client.post(reverse("quote-accept", args=[quote.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(self._refresh_order(), Order.Status.QUOTE_VALIDATED)

    def test_rejecting_last_open_quote_reopens_order(self):
        q1 = create_quote(self.order, self.supplier, base_price=Decimal("100.00"))
        reject_quote(q1, self.dentist)
        self.assertEqual(self._refresh_order(), Order.Status.QUOTE_ASKED)

    def test_sent_quote_revised_on_cancelled_order(self):
        quote = create_quote(self.order, self.supplier, base_price=Decimal("100.00"))
        Order.objects.filter(pk=self.order.pk).update(status=Order.Status.CANCELLED)

        bearer(self.client, self.supplier)
        res = self.client.patch(reverse("quote-detail", args=[quote.id]), {"base_price": "80.00"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "modified")
        self.assertEqual(res.data["revision_number"], 2)
        self.assertEqual(res.data["adjusted_price"], "120.00")
        self.assertEqual(self._refresh_order(), Order.Status.CANCELLED)
