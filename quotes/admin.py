from django.contrib import admin
from .models import Quote


@admin.register(Quote)
class QuoteAdmin(admin.ModelAdmin):
    """
    Angebote je Auftrag. Summe und angepasster Preis werden beim Speichern
    neu berechnet und sind deshalb readonly.
    """
    list_display = (
        "id",
        "order",
        "supplier",
        "status",
        "revision_number",
        "total_price",
        "pricing_factor",
        "adjusted_price",
        "valid_until",
        "created_at",
    )
    list_select_related = ("order", "supplier")
    list_filter = ("status", "created_at")
    search_fields = ("order__order_number", "order__title", "supplier__email")
    ordering = ("-created_at", "-id")
    readonly_fields = ("total_price", "adjusted_price", "accepted_at", "accepted_by", "created_at", "updated_at")
