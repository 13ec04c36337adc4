from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import files.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("orders", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="OrderFile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("file_name", models.CharField(max_length=255)),
                ("original_name", models.CharField(max_length=255)),
                ("storage_path", models.CharField(max_length=500)),
                ("url", models.CharField(max_length=500)),
                ("size", models.PositiveBigIntegerField()),
                ("mime_type", models.CharField(max_length=100)),
                ("file_type", models.CharField(choices=[("stl", "stl"), ("pdf", "pdf"), ("image", "image"), ("document", "document"), ("other", "other")], default="other", max_length=10)),
                ("category", models.CharField(choices=[("patient_scan", "patient_scan"), ("dental_impression", "dental_impression"), ("xray", "xray"), ("photo", "photo"), ("specification", "specification"), ("quote_document", "quote_document"), ("invoice", "invoice"), ("other", "other")], default="other", max_length=20)),
                ("description", models.TextField(blank=True, default="")),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("is_public", models.BooleanField(default=False)),
                ("access_token", models.CharField(blank=True, default=files.models.new_access_token, max_length=64, null=True, unique=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("download_count", models.PositiveIntegerField(default=0)),
                ("last_downloaded_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="files", to="orders.order")),
                ("uploaded_by", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="uploaded_files", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "files",
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(fields=["order"], name="file_order_idx"),
                    models.Index(fields=["file_type"], name="file_type_idx"),
                    models.Index(fields=["category"], name="file_category_idx"),
                ],
            },
        ),
    ]
