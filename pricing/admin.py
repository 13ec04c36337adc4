from django.contrib import admin
from .models import PricingFactor


@admin.register(PricingFactor)
class PricingFactorAdmin(admin.ModelAdmin):
    """
    Preisfaktoren: Geltungsbereich, Faktor und Gültigkeit.
    Regeln werden nur deaktiviert, nie gelöscht.
    """
    list_display = (
        "id",
        "name",
        "factor",
        "supplier",
        "is_default",
        "category",
        "material",
        "urgency",
        "is_active",
        "valid_from",
        "valid_until",
    )
    list_select_related = ("supplier", "created_by")
    list_filter = ("is_active", "is_default", "category", "material", "urgency")
    search_fields = ("name", "description", "supplier__email", "supplier__profile__company_name")
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_by", "created_at", "updated_at")

    def has_delete_permission(self, request, obj=None):
        return False

    def save_model(self, request, obj, form, change):
        if not obj.created_by_id:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
