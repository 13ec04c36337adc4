from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("admin", "admin"), ("dentist", "dentist"), ("supplier", "supplier")], max_length=20)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("address", models.CharField(blank=True, default="", max_length=255)),
                ("city", models.CharField(blank=True, default="", max_length=100)),
                ("country", models.CharField(blank=True, default="", max_length=100)),
                ("postal_code", models.CharField(blank=True, default="", max_length=20)),
                ("practice_name", models.CharField(blank=True, default="", max_length=200)),
                ("license_number", models.CharField(blank=True, default="", max_length=100)),
                ("company_name", models.CharField(blank=True, default="", max_length=200)),
                ("business_registration", models.CharField(blank=True, default="", max_length=100)),
                ("is_verified", models.BooleanField(default=False)),
                ("preferred_language", models.CharField(choices=[("fr", "fr"), ("en", "en"), ("zh", "zh")], default="fr", max_length=2)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL)),
            ],
        ),
    ]
