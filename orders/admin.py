from django.contrib import admin
from django.utils.html import format_html
from .models import Order, next_order_number


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Auftragsverwaltung:
    - Liste: Nummer, Titel, Status (Badge), Zahnarzt, Labor, Preis, Created
    - Filter: Status, Prothesentyp, Material, Dringlichkeit
    - Status und Preis-Snapshot sind readonly (nur über die API änderbar)
    """
    list_display = (
        "order_number",
        "title",
        "status_badge",
        "dentist_email",
        "supplier_email",
        "prosthesis_type",
        "material",
        "urgency",
        "adjusted_quote",
        "created_at",
    )
    list_select_related = ("dentist", "supplier")
    list_filter = ("status", "prosthesis_type", "material", "urgency", "created_at")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")
    search_fields = ("order_number", "title", "patient_name", "dentist__email", "supplier__email")

    readonly_fields = (
        "order_number",
        "status",
        "original_quote",
        "adjusted_quote",
        "pricing_factor",
        "actual_delivery",
        "created_at",
        "updated_at",
    )

    def has_delete_permission(self, request, obj=None):
        return False

    def save_model(self, request, obj, form, change):
        if not obj.order_number:
            obj.order_number = next_order_number()
        super().save_model(request, obj, form, change)

    # Badges & Shortcuts
    def status_badge(self, obj):
        color = {
            "quote_asked": "#9ca3af",
            "quote_sent": "#0ea5e9",
            "quote_validated": "#6366f1",
            "in_production": "#f59e0b",
            "in_shipping": "#8b5cf6",
            "delivered": "#22c55e",
            "cancelled": "#ef4444",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.status,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"

    def dentist_email(self, obj):
        return obj.dentist.email if obj.dentist_id else ""
    dentist_email.short_description = "dentist"

    def supplier_email(self, obj):
        return obj.supplier.email if obj.supplier_id else ""
    supplier_email.short_description = "supplier"
