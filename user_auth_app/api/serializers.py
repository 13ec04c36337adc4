"""Auth API serializers.

Provides serializers for user registration, login and password changes.
Registration enforces a unique email (Conflict on duplicates), password
validation and role specific profile data; login authenticates email and
password against active accounts.
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from common.exceptions import Conflict
from profiles.models import Profile

User = get_user_model()

DENTIST_FIELDS = ("practice_name", "license_number")
SUPPLIER_FIELDS = ("company_name", "business_registration")
CONTACT_FIELDS = ("phone", "address", "city", "country", "postal_code")


class RegistrationSerializer(serializers.Serializer):
    """Validate and create a new dentist or supplier together with its profile."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    first_name = serializers.CharField(max_length=50)
    last_name = serializers.CharField(max_length=50)
    role = serializers.ChoiceField(choices=(Profile.Role.DENTIST, Profile.Role.SUPPLIER))
    preferred_language = serializers.ChoiceField(
        choices=Profile.Language.choices, required=False, default=Profile.Language.FRENCH
    )
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    postal_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    practice_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    license_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    company_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    business_registration = serializers.CharField(max_length=100, required=False, allow_blank=True)

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise Conflict(_("User already exists with this email."))
        return value

    def validate(self, attrs):
        candidate = User(
            username=attrs["email"],
            email=attrs["email"],
            first_name=attrs["first_name"],
            last_name=attrs["last_name"],
        )
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"password": list(exc.messages)})
        return attrs

    @transaction.atomic
    def create(self, validated_data):
        role = validated_data["role"]
        user = User(
            username=validated_data["email"],
            email=validated_data["email"],
            first_name=validated_data["first_name"],
            last_name=validated_data["last_name"],
        )
        user.set_password(validated_data["password"])
        user.save()

        role_fields = DENTIST_FIELDS if role == Profile.Role.DENTIST else SUPPLIER_FIELDS
        profile_data = {
            f: validated_data.get(f, "") or "" for f in CONTACT_FIELDS + role_fields
        }
        Profile.objects.create(
            user=user,
            role=role,
            preferred_language=validated_data.get("preferred_language") or Profile.Language.FRENCH,
            **profile_data,
        )
        return user


class LoginSerializer(serializers.Serializer):
    """Authenticate email/password and attach the user to validated data."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = (
            User.objects.select_related("profile")
            .filter(email__iexact=attrs["email"].strip())
            .first()
        )
        if user is None or not user.check_password(attrs["password"]):
            raise AuthenticationFailed("Invalid credentials.")
        if not user.is_active:
            raise AuthenticationFailed("Account is deactivated.")
        attrs["user"] = user
        return attrs


class ChangePasswordSerializer(serializers.Serializer):
    """Check the current password and validate the new one."""

    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=6)

    def validate_current_password(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError(_("Current password is incorrect."))
        return value

    def validate_new_password(self, value):
        validate_password(value, user=self.context["request"].user)
        return value

    def save(self, **kwargs):
        user = self.context["request"].user
        user.set_password(self.validated_data["new_password"])
        user.save(update_fields=["password"])
        return user
