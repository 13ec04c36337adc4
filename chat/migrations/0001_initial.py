from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

LANGUAGES = [("fr", "fr"), ("en", "en"), ("zh", "zh")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("orders", "0001_initial"),
        ("files", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ChatMessage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("message", models.TextField()),
                ("original_language", models.CharField(choices=LANGUAGES, max_length=2)),
                ("translated_message", models.TextField(blank=True, default="")),
                ("target_language", models.CharField(blank=True, choices=LANGUAGES, default="", max_length=2)),
                ("translation_status", models.CharField(choices=[("pending", "pending"), ("completed", "completed"), ("failed", "failed")], default="pending", max_length=10)),
                ("translation_error", models.TextField(blank=True, default="")),
                ("message_type", models.CharField(choices=[("text", "text"), ("file", "file"), ("image", "image"), ("quote_update", "quote_update"), ("status_change", "status_change"), ("system", "system")], default="text", max_length=20)),
                ("file_url", models.CharField(blank=True, default="", max_length=500)),
                ("file_name", models.CharField(blank=True, default="", max_length=255)),
                ("file_size", models.PositiveBigIntegerField(blank=True, null=True)),
                ("file_type", models.CharField(blank=True, default="", max_length=100)),
                ("is_read", models.BooleanField(default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("is_system_message", models.BooleanField(default=False)),
                ("system_action", models.CharField(blank=True, choices=[("order_created", "order_created"), ("quote_sent", "quote_sent"), ("quote_updated", "quote_updated"), ("quote_accepted", "quote_accepted"), ("quote_rejected", "quote_rejected"), ("status_changed", "status_changed"), ("file_uploaded", "file_uploaded")], default="", max_length=20)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("file", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="chat_messages", to="files.orderfile")),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="messages", to="orders.order")),
                ("reply_to", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="replies", to="chat.chatmessage")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="chat_messages", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "chat_messages",
                "ordering": ("created_at", "id"),
                "indexes": [
                    models.Index(fields=["order", "created_at"], name="chat_order_created_idx"),
                    models.Index(fields=["translation_status"], name="chat_translation_idx"),
                ],
            },
        ),
    ]
