from django.contrib import admin
from .models import OrderFile


@admin.register(OrderFile)
class OrderFileAdmin(admin.ModelAdmin):
    """
    Dateien je Auftrag mit Typ, Kategorie und Download-Statistik.
    """
    list_display = (
        "id",
        "original_name",
        "order",
        "uploaded_by",
        "file_type",
        "category",
        "size",
        "is_public",
        "download_count",
        "created_at",
    )
    list_select_related = ("order", "uploaded_by")
    list_filter = ("file_type", "category", "is_public")
    search_fields = ("original_name", "order__order_number", "uploaded_by__email")
    ordering = ("-created_at", "-id")
    readonly_fields = (
        "file_name",
        "storage_path",
        "url",
        "size",
        "mime_type",
        "access_token",
        "download_count",
        "last_downloaded_at",
        "created_at",
        "updated_at",
    )
