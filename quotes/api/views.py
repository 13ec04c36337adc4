"""Quotes API views.

Suppliers (or admins) create and revise quotes for orders they can access;
the order's dentist (or an admin) accepts or rejects them. Reads are gated by
order access; the full quote listing is admin-only.
"""

from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import StandardPagination
from orders.api.permissions import get_accessible_order
from user_auth_app.api.permissions import (
    SUPPLIER_OR_ADMIN,
    IsAdminRole,
    IsDentistOrAdmin,
    IsSupplierOrAdmin,
    authorize,
    is_admin,
)
from quotes.models import Quote
from quotes.services import accept_quote, create_quote, reject_quote, revise_quote
from .serializers import (
    QuoteCostsSerializer,
    QuoteCreateSerializer,
    QuoteRejectSerializer,
    QuoteSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

def _quote_for(user, pk) -> Quote:
    """Load a quote the user may access through its order (404/403 otherwise)."""
    quote = generics.get_object_or_404(Quote.objects.select_related("supplier__profile"), pk=pk)
    quote.order = get_accessible_order(user, quote.order_id)
    return quote


def _apply_admin_filters(qs, params):
    status_value = params.get("status")
    if status_value:
        if status_value not in Quote.Status.values:
            raise ValidationError({"status": [f"Unknown status '{status_value}'."]})
        qs = qs.filter(status=status_value)
    for name in ("supplier_id", "order_id"):
        raw = params.get(name)
        if raw:
            if not raw.isdigit():
                raise ValidationError({name: ["Must be an integer."]})
            qs = qs.filter(**{name: int(raw)})
    return qs


def _quote_response(quote, code=status.HTTP_200_OK):
    return Response(QuoteSerializer(quote).data, status=code)


# --------------------------------------- views ---------------------------------------

class QuoteListCreateAPIView(generics.ListCreateAPIView):
    """GET: all quotes (admin, filters status/supplier_id/order_id).
    POST: create a quote for an order in ``quote_asked`` (supplier/admin).
    """

    queryset = Quote.objects.all().select_related("supplier__profile", "order")
    pagination_class = StandardPagination
    serializer_class = QuoteSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsSupplierOrAdmin()]
        return [IsAuthenticated(), IsAdminRole()]

    def get_queryset(self):
        return _apply_admin_filters(super().get_queryset(), self.request.query_params)

    def create(self, request, *args, **kwargs):
        serializer = QuoteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = get_accessible_order(request.user, serializer.validated_data["order_id"])
        quote = create_quote(order, request.user, **serializer.costs())
        return _quote_response(quote, status.HTTP_201_CREATED)


class OrderQuotesAPIView(generics.ListAPIView):
    """GET /api/orders/{order_id}/quotes/ -> quotes of one order, newest first."""

    permission_classes = [IsAuthenticated]
    serializer_class = QuoteSerializer
    pagination_class = None

    def get_queryset(self):
        order = get_accessible_order(self.request.user, self.kwargs["order_id"])
        return order.quotes.select_related("supplier__profile", "order").order_by("-created_at", "-id")


class QuoteDetailAPIView(APIView):
    """GET: one quote. PATCH/PUT: revise (the quote's supplier or an admin)."""

    permission_classes = [IsAuthenticated]

    def get(self, request, pk: int):
        return _quote_response(_quote_for(request.user, pk))

    def patch(self, request, pk: int):
        authorize(request.user, SUPPLIER_OR_ADMIN)
        quote = _quote_for(request.user, pk)
        if not is_admin(request.user) and quote.supplier_id != request.user.id:
            raise PermissionDenied("Access denied to this quote.")
        serializer = QuoteCostsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        return _quote_response(revise_quote(quote, request.user, serializer.validated_data))

    def put(self, request, pk: int):
        return self.patch(request, pk)


class QuoteAcceptAPIView(APIView):
    """POST /api/quotes/{id}/accept/"""

    permission_classes = [IsAuthenticated, IsDentistOrAdmin]

    def post(self, request, pk: int):
        quote = _quote_for(request.user, pk)
        return _quote_response(accept_quote(quote, request.user))


class QuoteRejectAPIView(APIView):
    """POST /api/quotes/{id}/reject/ with optional ``rejection_reason``."""

    permission_classes = [IsAuthenticated, IsDentistOrAdmin]

    def post(self, request, pk: int):
        quote = _quote_for(request.user, pk)
        serializer = QuoteRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reason = serializer.validated_data.get("rejection_reason", "")
        return _quote_response(reject_quote(quote, request.user, reason))
