"""Files app models.

Defines OrderFile: an artifact (scan, impression, x-ray, document, ...)
uploaded to an order. The bytes live in Django's default storage; the row
keeps the metadata, an access token for link downloads and download
statistics.
"""

import secrets

from django.conf import settings
from django.db import models
from django.utils import timezone

SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def new_access_token() -> str:
    return secrets.token_hex(32)


class OrderFile(models.Model):
    """A file attached to an order."""

    class FileType(models.TextChoices):
        STL = "stl", "stl"
        PDF = "pdf", "pdf"
        IMAGE = "image", "image"
        DOCUMENT = "document", "document"
        OTHER = "other", "other"

    class Category(models.TextChoices):
        PATIENT_SCAN = "patient_scan", "patient_scan"
        DENTAL_IMPRESSION = "dental_impression", "dental_impression"
        XRAY = "xray", "xray"
        PHOTO = "photo", "photo"
        SPECIFICATION = "specification", "specification"
        QUOTE_DOCUMENT = "quote_document", "quote_document"
        INVOICE = "invoice", "invoice"
        OTHER = "other", "other"

    order = models.ForeignKey("orders.Order", on_delete=models.CASCADE, related_name="files")
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="uploaded_files",
    )

    file_name = models.CharField(max_length=255)
    original_name = models.CharField(max_length=255)
    storage_path = models.CharField(max_length=500)
    url = models.CharField(max_length=500)
    size = models.PositiveBigIntegerField()
    mime_type = models.CharField(max_length=100)
    file_type = models.CharField(max_length=10, choices=FileType.choices, default=FileType.OTHER)
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.OTHER)
    description = models.TextField(blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)

    is_public = models.BooleanField(default=False)
    access_token = models.CharField(max_length=64, unique=True, null=True, blank=True, default=new_access_token)
    expires_at = models.DateTimeField(null=True, blank=True)

    download_count = models.PositiveIntegerField(default=0)
    last_downloaded_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "files"
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=["order"], name="file_order_idx"),
            models.Index(fields=["file_type"], name="file_type_idx"),
            models.Index(fields=["category"], name="file_category_idx"),
        ]

    def __str__(self) -> str:
        return f"OrderFile<{self.id} {self.original_name} order={self.order_id}>"

    def is_accessible(self, now=None) -> bool:
        """Public files always; otherwise until ``expires_at`` (if set) has passed."""
        if self.is_public:
            return True
        now = now or timezone.now()
        return not (self.expires_at and self.expires_at < now)

    @property
    def human_readable_size(self) -> str:
        size = self.size or 0
        if size == 0:
            return "0 Bytes"
        value, unit = float(size), 0
        while value >= 1024 and unit < len(SIZE_UNITS) - 1:
            value /= 1024
            unit += 1
        return f"{round(value, 2):g} {SIZE_UNITS[unit]}"
