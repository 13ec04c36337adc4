"""Quotes API serializers.

Input serializers for creating, revising and rejecting quotes, plus the
read representation. Prices are derived by the model and always read-only.
"""

from decimal import Decimal

from rest_framework import serializers

from profiles.api.serializers import UserSummarySerializer
from quotes.models import Quote


def _money(required=False):
    return serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=required
    )


class QuoteCostsSerializer(serializers.Serializer):
    """Cost components and delivery estimates shared by create and revise."""

    base_price = _money(required=True)
    material_cost = _money()
    labor_cost = _money()
    shipping_cost = _money()
    tax_amount = _money()
    production_time = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    shipping_time = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    specifications = serializers.DictField(required=False)


class QuoteCreateSerializer(QuoteCostsSerializer):
    order_id = serializers.IntegerField()

    def costs(self) -> dict:
        data = dict(self.validated_data)
        data.pop("order_id")
        return data


class QuoteRejectSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(required=False, allow_blank=True)


class QuoteOrderRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    order_number = serializers.CharField()
    title = serializers.CharField()
    status = serializers.CharField()


class QuoteSerializer(serializers.ModelSerializer):
    """Read serializer for quotes."""

    supplier = UserSummarySerializer(read_only=True)
    order = QuoteOrderRefSerializer(read_only=True)
    accepted_by = serializers.PrimaryKeyRelatedField(read_only=True)
    parent_quote = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Quote
        fields = [
            "id",
            "order",
            "supplier",
            "status",
            "base_price",
            "material_cost",
            "labor_cost",
            "shipping_cost",
            "tax_amount",
            "total_price",
            "pricing_factor",
            "adjusted_price",
            "valid_until",
            "production_time",
            "shipping_time",
            "notes",
            "specifications",
            "revision_number",
            "parent_quote",
            "accepted_at",
            "accepted_by",
            "rejection_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
