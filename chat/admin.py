from django.contrib import admin
from .models import ChatMessage


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    """
    Nachrichtenverlauf je Auftrag. Systemnachrichten sind Teil des
    Audit-Trails und können nicht gelöscht werden.
    """
    list_display = (
        "id",
        "order",
        "user",
        "short_message",
        "message_type",
        "is_system_message",
        "system_action",
        "is_read",
        "translation_status",
        "created_at",
    )
    list_select_related = ("order", "user")
    list_filter = ("message_type", "is_system_message", "is_read", "translation_status")
    search_fields = ("message", "order__order_number", "user__email")
    ordering = ("-created_at", "-id")
    readonly_fields = ("order", "user", "message", "original_language", "is_system_message", "system_action", "created_at", "updated_at")

    def short_message(self, obj):
        return (obj.message[:60] + "…") if len(obj.message) > 60 else obj.message
    short_message.short_description = "message"

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.is_system_message:
            return False
        return super().has_delete_permission(request, obj)
