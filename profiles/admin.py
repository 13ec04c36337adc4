from django.contrib import admin
from .models import Profile

@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Profil-Liste mit Rolle, Praxis/Firma und Sprache.
    """
    list_display = ("id", "user_id_display", "user", "role", "organisation", "is_verified", "preferred_language", "created_at")
    list_select_related = ("user",)
    search_fields = ("user__username", "user__email", "practice_name", "company_name", "license_number")
    list_filter = ("role", "is_verified", "preferred_language", "created_at")
    ordering = ("-created_at", "-id")
    autocomplete_fields = ("user",)
    readonly_fields = ("created_at", "updated_at")

    def user_id_display(self, obj):
        return obj.user_id
    user_id_display.short_description = "user id"
    user_id_display.admin_order_field = "user__id"

    def organisation(self, obj):
        return obj.practice_name or obj.company_name
    organisation.short_description = "practice / company"
