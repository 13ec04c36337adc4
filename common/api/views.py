"""Admin dashboard views.

Platform-wide aggregates for the admin UI: user, order and quote counters
with the most recent activity, and order/quote/revenue statistics over a
selectable period.
"""

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.api.serializers import OrderSerializer
from orders.models import Order
from profiles.models import Profile
from quotes.api.serializers import QuoteSerializer
from quotes.models import CENT, Quote
from user_auth_app.api.permissions import IsAdminRole

User = get_user_model()

PERIODS = {
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
    "1y": timedelta(days=365),
}
RECENT = 10


def _counts_by_status(qs, choices) -> dict:
    counts = {value: 0 for value in choices}
    for row in qs.order_by().values("status").annotate(n=Count("id")):
        counts[row["status"]] = row["n"]
    return counts


class AdminDashboardAPIView(APIView):
    """
    GET /api/admin/dashboard/

    Returns:
    - users: total, active, active dentists, active suppliers
    - orders / quotes: total and counts per status
    - recent_activity: the 10 newest orders and quotes
    """

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        active = User.objects.filter(is_active=True)
        recent_orders = Order.objects.with_parties().order_by("-created_at", "-id")[:RECENT]
        recent_quotes = Quote.objects.select_related("supplier__profile", "order").order_by("-created_at", "-id")[:RECENT]

        data = {
            "users": {
                "total": User.objects.count(),
                "active": active.count(),
                "dentists": active.filter(profile__role=Profile.Role.DENTIST).count(),
                "suppliers": active.filter(profile__role=Profile.Role.SUPPLIER).count(),
            },
            "orders": {
                "total": Order.objects.count(),
                "by_status": _counts_by_status(Order.objects.all(), Order.Status.values),
            },
            "quotes": {
                "total": Quote.objects.count(),
                "by_status": _counts_by_status(Quote.objects.all(), Quote.Status.values),
            },
            "recent_activity": {
                "orders": OrderSerializer(recent_orders, many=True).data,
                "quotes": QuoteSerializer(recent_quotes, many=True).data,
            },
        }
        return Response(data, status=status.HTTP_200_OK)


class AdminStatsAPIView(APIView):
    """GET /api/admin/stats/?period=7d|30d|90d|1y (default 30d)"""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        period = request.query_params.get("period", "30d")
        if period not in PERIODS:
            raise ValidationError({"period": [f"Must be one of {', '.join(PERIODS)}."]})
        since = timezone.now() - PERIODS[period]

        orders = Order.objects.filter(created_at__gte=since).count()
        quotes = Quote.objects.filter(created_at__gte=since)
        revenue = (
            quotes.filter(status=Quote.Status.ACCEPTED).aggregate(total=Sum("total_price"))["total"]
            or Decimal("0.00")
        ).quantize(CENT)
        average = (revenue / orders).quantize(CENT) if orders else Decimal("0.00")

        return Response(
            {
                "period": period,
                "orders": orders,
                "quotes": quotes.count(),
                "revenue": str(revenue),
                "average_order_value": str(average),
            },
            status=status.HTTP_200_OK,
        )
