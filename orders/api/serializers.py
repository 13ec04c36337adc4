"""Orders API serializers.

Input serializers for creating orders, editing order details and changing
the order status, plus the list and detail output representations. Creation
validates that the chosen supplier (and, for admins, the dentist) exists and
is active.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from files.api.serializers import OrderFileSerializer
from profiles.api.serializers import UserSummarySerializer
from profiles.models import Profile
from quotes.api.serializers import QuoteSerializer
from user_auth_app.api.permissions import is_admin
from orders.models import Order

User = get_user_model()


# ------------------------------ helpers ------------------------------

def _active_user_with_role(user_id, role):
    return (
        User.objects.select_related("profile")
        .filter(id=user_id, is_active=True, profile__role=role)
        .first()
    )


class OrderFieldsSerializer(serializers.Serializer):
    """Descriptive order fields shared by create and edit."""

    title = serializers.CharField(min_length=1, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    patient_info = serializers.DictField(required=False)
    patient_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    patient_age = serializers.IntegerField(min_value=0, max_value=150, required=False, allow_null=True)
    patient_gender = serializers.ChoiceField(choices=Order.Gender.choices, required=False, allow_blank=True)
    tooth_numbers = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)
    prosthesis_type = serializers.ChoiceField(choices=Order.ProsthesisType.choices)
    material = serializers.ChoiceField(choices=Order.Material.choices)
    color = serializers.CharField(max_length=50, required=False, allow_blank=True)
    urgency = serializers.ChoiceField(choices=Order.Urgency.choices, required=False)
    expected_delivery = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)


# ------------------------------ input ------------------------------

class OrderCreateSerializer(OrderFieldsSerializer):
    """Input serializer for POST /api/orders/.

    Dentists order for themselves; admins must name the dentist.
    """

    supplier_id = serializers.IntegerField()
    dentist_id = serializers.IntegerField(required=False)

    def validate_supplier_id(self, value):
        supplier = _active_user_with_role(value, Profile.Role.SUPPLIER)
        if supplier is None:
            raise serializers.ValidationError("Invalid supplier selected.")
        self.context["supplier_obj"] = supplier
        return value

    def validate(self, attrs):
        request = self.context["request"]
        if is_admin(request.user):
            dentist_id = attrs.get("dentist_id")
            dentist = _active_user_with_role(dentist_id, Profile.Role.DENTIST) if dentist_id else None
            if dentist is None:
                raise serializers.ValidationError({"dentist_id": ["An active dentist is required."]})
        else:
            dentist = request.user
        self.context["dentist_obj"] = dentist
        return attrs

    def fields_for_create(self) -> dict:
        data = dict(self.validated_data)
        data.pop("supplier_id", None)
        data.pop("dentist_id", None)
        return data


class OrderUpdateSerializer(OrderFieldsSerializer):
    """Detail edit, used with partial=True so every field is optional."""


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)
    notes = serializers.CharField(required=False, allow_blank=True)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    shipping_company = serializers.CharField(max_length=100, required=False, allow_blank=True)


# ------------------------------ output ------------------------------

class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for list and mutation responses."""

    dentist = UserSummarySerializer(read_only=True)
    supplier = UserSummarySerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "dentist",
            "supplier",
            "status",
            "title",
            "description",
            "patient_info",
            "patient_name",
            "patient_age",
            "patient_gender",
            "tooth_numbers",
            "prosthesis_type",
            "material",
            "color",
            "urgency",
            "expected_delivery",
            "actual_delivery",
            "original_quote",
            "adjusted_quote",
            "pricing_factor",
            "notes",
            "tracking_number",
            "shipping_company",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderDetailSerializer(OrderSerializer):
    """Order with its quotes and files, newest first."""

    quotes = serializers.SerializerMethodField()
    files = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["quotes", "files"]
        read_only_fields = fields

    def get_quotes(self, obj):
        qs = obj.quotes.select_related("supplier__profile").order_by("-created_at", "-id")
        return QuoteSerializer(qs, many=True).data

    def get_files(self, obj):
        qs = obj.files.select_related("uploaded_by__profile").order_by("-created_at", "-id")
        return OrderFileSerializer(qs, many=True, context=self.context).data


class OrderStatsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    status_counts = serializers.DictField(child=serializers.IntegerField())
    recent_orders = OrderSerializer(many=True)
