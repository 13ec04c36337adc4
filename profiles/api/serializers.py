"""Profiles API serializers.

Contains serializers for:
- the full user representation (user + profile flattened),
- the compact user summary embedded in orders, quotes, files and messages,
- partially updating the caller's own profile (role specific fields),
- the admin-only status patch (active / verified flags).

Serializers ensure profile string fields never return `null` in responses,
but empty strings instead.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from ..models import Profile, role_of

User = get_user_model()


# ------------------------------ helpers ------------------------------

PROFILE_FIELDS = (
    "role",
    "phone",
    "address",
    "city",
    "country",
    "postal_code",
    "practice_name",
    "license_number",
    "company_name",
    "business_registration",
    "is_verified",
    "preferred_language",
)

ROLE_EDITABLE_FIELDS = {
    Profile.Role.DENTIST: ("practice_name", "license_number"),
    Profile.Role.SUPPLIER: ("company_name", "business_registration"),
}


def _profile_dict(user) -> dict:
    prof = getattr(user, "profile", None)
    if prof is None:
        return {f: "" for f in PROFILE_FIELDS}
    return {f: getattr(prof, f) for f in PROFILE_FIELDS}


def _apply_user_updates(user, data: dict):
    for attr, val in data.items():
        setattr(user, attr, val if val is not None else "")
    if data:
        user.save(update_fields=list(data.keys()))


# ------------------------------ serializers ------------------------------

class UserSerializer(serializers.ModelSerializer):
    """Full user representation with flattened profile fields."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "is_active",
            "last_login",
            "date_joined",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data.update(_profile_dict(instance))
        return data


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user reference embedded in other payloads."""

    role = serializers.SerializerMethodField()
    practice_name = serializers.SerializerMethodField()
    company_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "role", "practice_name", "company_name"]

    def get_role(self, obj):
        return role_of(obj)

    def get_practice_name(self, obj):
        prof = getattr(obj, "profile", None)
        return prof.practice_name if prof else ""

    def get_company_name(self, obj):
        prof = getattr(obj, "profile", None)
        return prof.company_name if prof else ""


class ProfilePatchSerializer(serializers.Serializer):
    """
    Partial update of the caller's own profile.

    Contact fields and the preferred language are editable by everyone;
    practice data only by dentists, company data only by suppliers. Fields
    that do not belong to the caller's role are rejected.
    """

    first_name = serializers.CharField(max_length=50, required=False)
    last_name = serializers.CharField(max_length=50, required=False)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    postal_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    preferred_language = serializers.ChoiceField(choices=Profile.Language.choices, required=False)
    practice_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    license_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    company_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    business_registration = serializers.CharField(max_length=100, required=False, allow_blank=True)

    def validate(self, attrs):
        role = role_of(self.instance)
        allowed_role_fields = set(ROLE_EDITABLE_FIELDS.get(role, ()))
        all_role_fields = {f for fields in ROLE_EDITABLE_FIELDS.values() for f in fields}
        forbidden = sorted((set(attrs) & all_role_fields) - allowed_role_fields)
        if forbidden:
            raise serializers.ValidationError(
                {f: f"Not editable for role '{role}'." for f in forbidden}
            )
        return attrs

    def update(self, instance, validated_data):
        user_data = {
            k: validated_data.pop(k) for k in ("first_name", "last_name") if k in validated_data
        }
        _apply_user_updates(instance, user_data)

        profile = instance.profile
        for attr, val in validated_data.items():
            setattr(profile, attr, val if val is not None else "")
        if validated_data:
            profile.save()
        return instance

    def to_representation(self, instance):
        return UserSerializer(instance).data


class UserStatusPatchSerializer(serializers.Serializer):
    """Admin patch for the active and verified flags."""

    is_active = serializers.BooleanField(required=False)
    is_verified = serializers.BooleanField(required=False)

    def update(self, instance, validated_data):
        if "is_active" in validated_data:
            instance.is_active = validated_data["is_active"]
            instance.save(update_fields=["is_active"])
        if "is_verified" in validated_data:
            instance.profile.is_verified = validated_data["is_verified"]
            instance.profile.save(update_fields=["is_verified", "updated_at"])
        return instance

    def to_representation(self, instance):
        return UserSerializer(instance).data
