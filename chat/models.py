"""Chat app models.

Defines ChatMessage, the append-only event log of an order. Messages are
written either by a participant or by the platform itself (system messages
recording order, quote and file events). Only the read state and the
translation fields change after creation.
"""

from django.conf import settings
from django.db import models

from profiles.models import Profile


class ChatMessage(models.Model):
    """One message in the conversation attached to an order."""

    class MessageType(models.TextChoices):
        TEXT = "text", "text"
        FILE = "file", "file"
        IMAGE = "image", "image"
        QUOTE_UPDATE = "quote_update", "quote_update"
        STATUS_CHANGE = "status_change", "status_change"
        SYSTEM = "system", "system"

    class SystemAction(models.TextChoices):
        ORDER_CREATED = "order_created", "order_created"
        QUOTE_SENT = "quote_sent", "quote_sent"
        QUOTE_UPDATED = "quote_updated", "quote_updated"
        QUOTE_ACCEPTED = "quote_accepted", "quote_accepted"
        QUOTE_REJECTED = "quote_rejected", "quote_rejected"
        STATUS_CHANGED = "status_changed", "status_changed"
        FILE_UPLOADED = "file_uploaded", "file_uploaded"

    class TranslationStatus(models.TextChoices):
        PENDING = "pending", "pending"
        COMPLETED = "completed", "completed"
        FAILED = "failed", "failed"

    order = models.ForeignKey("orders.Order", on_delete=models.CASCADE, related_name="messages")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="chat_messages",
    )
    message = models.TextField()
    original_language = models.CharField(max_length=2, choices=Profile.Language.choices)

    translated_message = models.TextField(blank=True, default="")
    target_language = models.CharField(
        max_length=2, choices=Profile.Language.choices, blank=True, default=""
    )
    translation_status = models.CharField(
        max_length=10, choices=TranslationStatus.choices, default=TranslationStatus.PENDING
    )
    translation_error = models.TextField(blank=True, default="")

    message_type = models.CharField(max_length=20, choices=MessageType.choices, default=MessageType.TEXT)

    file = models.ForeignKey(
        "files.OrderFile",
        on_delete=models.SET_NULL,
        related_name="chat_messages",
        null=True,
        blank=True,
    )
    file_url = models.CharField(max_length=500, blank=True, default="")
    file_name = models.CharField(max_length=255, blank=True, default="")
    file_size = models.PositiveBigIntegerField(null=True, blank=True)
    file_type = models.CharField(max_length=100, blank=True, default="")

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)

    is_system_message = models.BooleanField(default=False)
    system_action = models.CharField(max_length=20, choices=SystemAction.choices, blank=True, default="")

    reply_to = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        related_name="replies",
        null=True,
        blank=True,
    )
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "chat_messages"
        ordering = ("created_at", "id")
        indexes = [
            models.Index(fields=["order", "created_at"], name="chat_order_created_idx"),
            models.Index(fields=["translation_status"], name="chat_translation_idx"),
        ]

    def __str__(self) -> str:
        return f"ChatMessage<{self.id} order={self.order_id} {self.message_type}>"

    def display_message(self, language: str) -> str:
        """Original text for same-language viewers, else the translation if any."""
        if self.original_language == language:
            return self.message
        return self.translated_message or self.message
