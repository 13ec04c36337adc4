"""File attachment services.

Upload (type and size checks, storage, system chat message), link tokens,
download bookkeeping and deletion of stored bytes.
"""

import logging
import os
import uuid
from datetime import timedelta

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from chat.models import ChatMessage
from chat.services import post_system_message
from .models import OrderFile, new_access_token

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset({
    "application/pdf",
    "application/octet-stream",
    "image/jpeg",
    "image/png",
    "image/tiff",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

EXTENSION_TYPES = {
    ".stl": OrderFile.FileType.STL,
    ".pdf": OrderFile.FileType.PDF,
    ".jpg": OrderFile.FileType.IMAGE,
    ".jpeg": OrderFile.FileType.IMAGE,
    ".png": OrderFile.FileType.IMAGE,
    ".tiff": OrderFile.FileType.IMAGE,
    ".tif": OrderFile.FileType.IMAGE,
    ".doc": OrderFile.FileType.DOCUMENT,
    ".docx": OrderFile.FileType.DOCUMENT,
    ".xls": OrderFile.FileType.DOCUMENT,
    ".xlsx": OrderFile.FileType.DOCUMENT,
}


def file_type_for(name: str) -> str:
    ext = os.path.splitext(name or "")[1].lower()
    return EXTENSION_TYPES.get(ext, OrderFile.FileType.OTHER)


def validate_upload(uploaded) -> None:
    """Reject unsupported MIME types and files above MAX_UPLOAD_SIZE."""
    if uploaded.content_type not in ALLOWED_MIME_TYPES:
        raise ValidationError(
            {"file": ["Invalid file type. Only PDF, STL, images, and documents are allowed."]}
        )
    if uploaded.size > settings.MAX_UPLOAD_SIZE:
        raise ValidationError({"file": [f"File too large (max {settings.MAX_UPLOAD_SIZE} bytes)."]})


@transaction.atomic
def upload_file(order, uploader, uploaded, category=OrderFile.Category.OTHER, description="") -> OrderFile:
    """Store the bytes, create the file row and log it in the order's chat."""
    validate_upload(uploaded)
    ext = os.path.splitext(uploaded.name)[1].lower()
    stored_name = f"{uuid.uuid4().hex}{ext}"
    path = default_storage.save(f"order_files/{order.id}/{stored_name}", uploaded)

    try:
        file = OrderFile.objects.create(
            order=order,
            uploaded_by=uploader,
            file_name=os.path.basename(path),
            original_name=uploaded.name,
            storage_path=path,
            url=default_storage.url(path),
            size=uploaded.size,
            mime_type=uploaded.content_type,
            file_type=file_type_for(uploaded.name),
            category=category or OrderFile.Category.OTHER,
            description=description or "",
        )
        post_system_message(
            order,
            uploader,
            ChatMessage.SystemAction.FILE_UPLOADED,
            f"File uploaded: {uploaded.name}",
            message_type=ChatMessage.MessageType.FILE,
            file=file,
        )
    except Exception:
        default_storage.delete(path)
        raise

    logger.info("File %s (%s bytes) uploaded to order %s by %s", file.pk, file.size, order.pk, uploader.pk)
    return file


def issue_access_token(file) -> OrderFile:
    """Replace the link token; it expires after FILE_ACCESS_TOKEN_HOURS."""
    file.access_token = new_access_token()
    file.expires_at = timezone.now() + timedelta(hours=settings.FILE_ACCESS_TOKEN_HOURS)
    file.save(update_fields=["access_token", "expires_at", "updated_at"])
    return file


def register_download(file) -> None:
    now = timezone.now()
    OrderFile.objects.filter(pk=file.pk).update(download_count=F("download_count") + 1, last_downloaded_at=now)
    file.refresh_from_db(fields=["download_count", "last_downloaded_at"])


def open_file(file):
    return default_storage.open(file.storage_path, "rb")


@transaction.atomic
def delete_file(file) -> None:
    """Delete the row and, once committed, the stored bytes."""
    path = file.storage_path
    file.delete()
    transaction.on_commit(lambda: default_storage.delete(path))
    logger.info("File %s deleted", path)
