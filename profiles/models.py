"""Profiles app models.

Defines the Profile model that extends the base user with the platform role
(admin/dentist/supplier), role specific business data and the preferred
display language. String fields default to empty strings to avoid nulls in
API responses.
"""

from django.conf import settings
from django.db import models


class Profile(models.Model):
    """
    Profile for a single user.

    Dentists fill in practice name and license number, suppliers fill in
    company name and business registration. A profile is created at most once
    per user (OneToOne relationship).
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "admin"
        DENTIST = "dentist", "dentist"
        SUPPLIER = "supplier", "supplier"

    class Language(models.TextChoices):
        FRENCH = "fr", "fr"
        ENGLISH = "en", "en"
        CHINESE = "zh", "zh"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    role = models.CharField(max_length=20, choices=Role.choices)

    phone = models.CharField(max_length=50, blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    country = models.CharField(max_length=100, blank=True, default="")
    postal_code = models.CharField(max_length=20, blank=True, default="")

    # dentist only
    practice_name = models.CharField(max_length=200, blank=True, default="")
    license_number = models.CharField(max_length=100, blank=True, default="")

    # supplier only
    company_name = models.CharField(max_length=200, blank=True, default="")
    business_registration = models.CharField(max_length=100, blank=True, default="")

    is_verified = models.BooleanField(default=False)
    preferred_language = models.CharField(
        max_length=2, choices=Language.choices, default=Language.FRENCH
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.user.username} {self.role}>"


def role_of(user) -> str:
    """Return the platform role of a user or an empty string."""
    if not user or not user.is_authenticated:
        return ""
    prof = getattr(user, "profile", None)
    return getattr(prof, "role", "") if prof else ""


def language_of(user) -> str:
    """Preferred display language of a user, French if unknown."""
    prof = getattr(user, "profile", None)
    return getattr(prof, "preferred_language", "") or Profile.Language.FRENCH
