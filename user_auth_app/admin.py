from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

User = get_user_model()

# Falls User bereits registriert ist, zuerst deregistrieren (idempotent).
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    User-Liste inkl. ID, Rolle (Profile.role), Verifizierung und Aktiv-Flag.
    Benutzer werden nie gelöscht, nur deaktiviert.
    """
    list_display = (
        "id",
        "email",
        "first_name",
        "last_name",
        "role_display",
        "verified_display",
        "is_active",
        "date_joined",
        "last_login",
    )
    list_select_related = ("profile",)
    ordering = ("-date_joined", "-id")
    search_fields = ("username", "email", "first_name", "last_name", "profile__company_name", "profile__practice_name")
    list_filter = ("is_active", "profile__role", "profile__is_verified")

    def has_delete_permission(self, request, obj=None):
        return False

    def role_display(self, obj):
        prof = getattr(obj, "profile", None)
        return getattr(prof, "role", "") or ""
    role_display.short_description = "role"
    role_display.admin_order_field = "profile__role"

    def verified_display(self, obj):
        prof = getattr(obj, "profile", None)
        return bool(getattr(prof, "is_verified", False))
    verified_display.short_description = "verified"
    verified_display.boolean = True
