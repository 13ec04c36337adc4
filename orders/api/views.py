"""Orders API views.

List and create orders on the same endpoint; listings are role scoped
(dentists see their own orders, suppliers their assigned ones, admins all).
Detail read/edit and the status endpoint gate through the order access check.
A stats endpoint summarises the caller's visible orders.
"""

import logging

from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import StandardPagination
from user_auth_app.api.permissions import IsDentistOrAdmin, IsSupplierOrAdmin
from orders.models import Order
from orders.services import change_status, create_order, order_stats, update_details
from .permissions import CanAccessOrder, get_accessible_order
from .serializers import (
    OrderCreateSerializer,
    OrderDetailSerializer,
    OrderSerializer,
    OrderStatsSerializer,
    OrderStatusSerializer,
    OrderUpdateSerializer,
)

logger = logging.getLogger(__name__)


# ----------------------------- helpers (module-level) -----------------------------

def _int_param(params, name):
    raw = params.get(name)
    if raw in (None, ""):
        return None
    if not raw.isdigit():
        raise ValidationError({name: ["Must be an integer."]})
    return int(raw)


def _apply_list_filters(qs, params):
    """Filter by status, dentist, supplier and free-text search."""
    status_value = params.get("status")
    if status_value:
        if status_value not in Order.Status.values:
            raise ValidationError({"status": [f"Unknown status '{status_value}'."]})
        qs = qs.filter(status=status_value)

    dentist_id = _int_param(params, "dentist_id")
    if dentist_id is not None:
        qs = qs.filter(dentist_id=dentist_id)

    supplier_id = _int_param(params, "supplier_id")
    if supplier_id is not None:
        qs = qs.filter(supplier_id=supplier_id)

    return qs.search(params.get("search"))


# --------------------------------------- views ---------------------------------------

class OrderListCreateAPIView(generics.ListCreateAPIView):
    """GET: paginated orders visible to the user, newest first.
    POST: create an order (dentist, or admin on behalf of a dentist).
    """

    queryset = Order.objects.all()
    pagination_class = StandardPagination

    def get_permissions(self):
        """Dentist/admin on POST, otherwise just authenticated."""
        if self.request.method == "POST":
            return [IsAuthenticated(), IsDentistOrAdmin()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        return OrderSerializer if self.request.method == "GET" else OrderCreateSerializer

    def get_queryset(self):
        qs = super().get_queryset().visible_to(self.request.user).with_parties()
        return _apply_list_filters(qs, self.request.query_params).order_by("-created_at", "-id")

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        order = create_order(
            request.user,
            serializer.context["dentist_obj"],
            serializer.context["supplier_obj"],
            **serializer.fields_for_create(),
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailAPIView(generics.RetrieveUpdateAPIView):
    """GET: order with quotes and files. PATCH/PUT: edit details (dentist/admin)."""

    queryset = Order.objects.all().with_parties()

    def get_permissions(self):
        if self.request.method in ("PATCH", "PUT"):
            return [IsAuthenticated(), IsDentistOrAdmin(), CanAccessOrder()]
        return [IsAuthenticated(), CanAccessOrder()]

    def get_serializer_class(self):
        return OrderDetailSerializer if self.request.method == "GET" else OrderUpdateSerializer

    def update(self, request, *args, **kwargs):
        """Partial edit of descriptive fields; returns the full order."""
        instance = self.get_object()
        serializer = OrderUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        order = update_details(instance, serializer.validated_data)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


class OrderStatusAPIView(APIView):
    """PATCH/PUT /api/orders/{id}/status/ -> move the order along the status graph."""

    permission_classes = [IsAuthenticated, IsSupplierOrAdmin]

    def patch(self, request, pk: int):
        order = get_accessible_order(request.user, pk)
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        order = change_status(
            order,
            request.user,
            data["status"],
            notes=data.get("notes", ""),
            tracking_number=data.get("tracking_number", ""),
            shipping_company=data.get("shipping_company", ""),
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)

    def put(self, request, pk: int):
        return self.patch(request, pk)


class OrderStatsAPIView(APIView):
    """GET /api/orders/stats/ -> totals, per-status counts and recent orders."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        qs = Order.objects.visible_to(request.user)
        return Response(OrderStatsSerializer(order_stats(qs)).data, status=status.HTTP_200_OK)
