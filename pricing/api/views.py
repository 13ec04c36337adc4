"""Pricing API views.

Admin-only management of pricing factor rules: paginated list with filters,
create, partial update, deactivate (rules are never deleted) and a resolve
preview that shows which factor an order with the given attributes would get.
"""

import logging

from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import LargePagination
from user_auth_app.api.permissions import IsAdminRole
from ..models import PricingFactor
from ..resolver import find_applicable_rule, NO_MARKUP
from .serializers import (
    PricingFactorPatchSerializer,
    PricingFactorSerializer,
    ResolveInputSerializer,
)

logger = logging.getLogger(__name__)


# ----------------------------- helpers (module-level) -----------------------------

def _apply_filters(qs, params):
    """Filter by supplier and active flag; raises ValidationError on bad input."""
    supplier_id = params.get("supplier_id")
    if supplier_id:
        if not supplier_id.isdigit():
            raise ValidationError({"supplier_id": "Must be an integer."})
        qs = qs.filter(supplier_id=int(supplier_id))

    is_active = params.get("is_active")
    if is_active is not None:
        if is_active not in ("true", "false"):
            raise ValidationError({"is_active": "Must be 'true' or 'false'."})
        qs = qs.filter(is_active=is_active == "true")
    return qs


# --------------------------------------- views ---------------------------------------

class PricingFactorListCreateAPIView(generics.ListCreateAPIView):
    """GET: paginated rules (filters supplier_id, is_active). POST: create a rule."""

    queryset = PricingFactor.objects.all().select_related("supplier__profile")
    serializer_class = PricingFactorSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = LargePagination

    def get_queryset(self):
        return _apply_filters(super().get_queryset(), self.request.query_params)

    def perform_create(self, serializer):
        rule = serializer.save()
        logger.info("Pricing factor %s created by %s (x%s)", rule.pk, self.request.user.pk, rule.factor)


class PricingFactorDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: one rule. PATCH: update name/factor/description/validity/active. DELETE: deactivate."""

    queryset = PricingFactor.objects.all().select_related("supplier__profile")
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_serializer_class(self):
        if self.request.method in ("PATCH", "PUT"):
            return PricingFactorPatchSerializer
        return PricingFactorSerializer

    def update(self, request, *args, **kwargs):
        """Force partial updates via PATCH semantics."""
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        rule = self.get_object()
        rule.is_active = False
        rule.save(update_fields=["is_active", "updated_at"])
        logger.info("Pricing factor %s deactivated by %s", rule.pk, request.user.pk)
        return Response(PricingFactorSerializer(rule).data, status=status.HTTP_200_OK)


class PricingFactorResolveAPIView(APIView):
    """GET /api/admin/pricing-factors/resolve/?supplier_id=&category=&material=&urgency=&order_value="""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        ser = ResolveInputSerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        rule = find_applicable_rule(
            data.get("supplier_id"),
            data["category"],
            data["material"],
            data["urgency"],
            data["order_value"],
        )
        return Response(
            {
                "factor": str(rule.factor if rule else NO_MARKUP),
                "rule": PricingFactorSerializer(rule).data if rule else None,
            },
            status=status.HTTP_200_OK,
        )
