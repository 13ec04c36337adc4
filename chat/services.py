"""Chat services.

Posting participant and system messages, read tracking, translation and the
role scoped unread/conversation views. Callers check order access before
calling in; system messages are written inside the caller's transaction.
"""

import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from orders.models import Order
from profiles.models import language_of
from .models import ChatMessage
from .translation import TranslationError, get_translator

logger = logging.getLogger(__name__)

CONVERSATION_LIMIT = 20


# ------------------------------ helpers ------------------------------

def _file_snapshot(file) -> dict:
    if file is None:
        return {}
    return {
        "file": file,
        "file_url": file.url,
        "file_name": file.original_name,
        "file_size": file.size,
        "file_type": file.mime_type,
    }


# ------------------------------ posting ------------------------------

def post_message(order, author, text, message_type=ChatMessage.MessageType.TEXT,
                 reply_to=None, file=None, metadata=None) -> ChatMessage:
    """Append a participant message to the order's conversation."""
    if reply_to is not None and reply_to.order_id != order.id:
        raise ValidationError({"reply_to_id": ["Invalid reply message."]})
    if file is not None and file.order_id != order.id:
        raise ValidationError({"file_id": ["File does not belong to this order."]})

    msg = ChatMessage.objects.create(
        order=order,
        user=author,
        message=text,
        original_language=language_of(author),
        message_type=message_type,
        reply_to=reply_to,
        metadata=metadata or {},
        **_file_snapshot(file),
    )
    logger.debug("Message %s posted on order %s by %s", msg.pk, order.pk, author.pk)
    return msg


def post_system_message(order, actor, action, text, message_type=ChatMessage.MessageType.SYSTEM,
                        file=None, metadata=None) -> ChatMessage:
    """Record a platform event on the order, attributed to the acting user."""
    return ChatMessage.objects.create(
        order=order,
        user=actor,
        message=text,
        original_language=language_of(actor),
        message_type=message_type,
        is_system_message=True,
        system_action=action,
        metadata=metadata or {},
        **_file_snapshot(file),
    )


# ------------------------------ reading ------------------------------

def mark_read(order, reader) -> int:
    """Flag unread messages of other authors as read; returns the number flagged."""
    return (
        ChatMessage.objects.filter(order=order, is_read=False)
        .exclude(user=reader)
        .update(is_read=True, read_at=timezone.now())
    )


def unread_count(user) -> int:
    return (
        ChatMessage.objects.filter(order__in=Order.objects.visible_to(user), is_read=False)
        .exclude(user=user)
        .count()
    )


def conversations(user):
    """Latest orders of the user (by update time) paired with their last message."""
    orders = Order.objects.visible_to(user).with_parties().order_by("-updated_at", "-id")[:CONVERSATION_LIMIT]
    result = []
    for order in orders:
        last = order.messages.select_related("user").order_by("-created_at", "-id").first()
        result.append((order, last))
    return result


# ------------------------------ mutation ------------------------------

def delete_message(message, user) -> None:
    if message.user_id != user.id:
        raise PermissionDenied("Can only delete your own messages.")
    if message.is_system_message:
        raise PermissionDenied("Cannot delete system messages.")
    message.delete()


@transaction.atomic
def translate_message(message, target_language) -> ChatMessage:
    """Translate through the configured translator and store the result."""
    translator = get_translator()
    try:
        translated = translator.translate(message.message, message.original_language, target_language)
    except TranslationError as exc:
        logger.warning("Translation of message %s to %s failed: %s", message.pk, target_language, exc)
        message.translation_status = ChatMessage.TranslationStatus.FAILED
        message.translation_error = str(exc)
    else:
        message.translated_message = translated
        message.translation_status = ChatMessage.TranslationStatus.COMPLETED
        message.translation_error = ""
    message.target_language = target_language
    message.save(update_fields=[
        "translated_message",
        "target_language",
        "translation_status",
        "translation_error",
        "updated_at",
    ])
    return message
