"""Pricing API serializers.

Create/update/read serializers for pricing factor rules and the input
serializer of the resolve preview endpoint.
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import serializers

from profiles.api.serializers import UserSummarySerializer
from profiles.models import Profile
from ..models import MAX_FACTOR, MIN_FACTOR, PricingFactor

User = get_user_model()


# --------------------------- helpers (pure functions) ---------------------------

def _validate_value_range(min_value, max_value):
    if min_value is not None and max_value is not None and min_value > max_value:
        raise serializers.ValidationError(
            {"max_order_value": "Must be greater than or equal to min_order_value."}
        )


def _validate_validity(valid_from, valid_until):
    if valid_from is not None and valid_until is not None and valid_until < valid_from:
        raise serializers.ValidationError({"valid_until": "Must not be before valid_from."})


# --------------------------------- serializers ---------------------------------

class PricingFactorSerializer(serializers.ModelSerializer):
    """Read/create serializer for a pricing factor rule."""

    factor = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=MIN_FACTOR, max_value=MAX_FACTOR
    )
    min_order_value = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False, allow_null=True
    )
    max_order_value = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False, allow_null=True
    )
    supplier_id = serializers.IntegerField(required=False, allow_null=True)
    supplier = UserSummarySerializer(read_only=True)
    created_by = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = PricingFactor
        fields = [
            "id",
            "name",
            "description",
            "factor",
            "supplier_id",
            "supplier",
            "is_default",
            "category",
            "material",
            "urgency",
            "min_order_value",
            "max_order_value",
            "valid_from",
            "valid_until",
            "is_active",
            "metadata",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "supplier", "created_by", "created_at", "updated_at"]

    def validate_supplier_id(self, value):
        if value is None:
            return value
        exists = User.objects.filter(id=value, profile__role=Profile.Role.SUPPLIER).exists()
        if not exists:
            raise serializers.ValidationError("Supplier not found.")
        return value

    def validate(self, attrs):
        inst = self.instance
        _validate_value_range(
            attrs.get("min_order_value", getattr(inst, "min_order_value", None)),
            attrs.get("max_order_value", getattr(inst, "max_order_value", None)),
        )
        _validate_validity(
            attrs.get("valid_from", getattr(inst, "valid_from", None)),
            attrs.get("valid_until", getattr(inst, "valid_until", None)),
        )
        return attrs

    def create(self, validated_data):
        request = self.context["request"]
        return PricingFactor.objects.create(created_by=request.user, **validated_data)


class PricingFactorPatchSerializer(PricingFactorSerializer):
    """PATCH serializer: scope fields are fixed after creation."""

    class Meta(PricingFactorSerializer.Meta):
        read_only_fields = PricingFactorSerializer.Meta.read_only_fields + [
            "supplier_id",
            "is_default",
            "category",
            "material",
            "urgency",
        ]


class ResolveInputSerializer(serializers.Serializer):
    """Query parameters of the resolve preview."""

    supplier_id = serializers.IntegerField(required=False, allow_null=True)
    category = serializers.CharField(max_length=20)
    material = serializers.CharField(max_length=20)
    urgency = serializers.ChoiceField(
        choices=[c for c in PricingFactor.Urgency.values if c != "general"], required=False, default="medium"
    )
    order_value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
