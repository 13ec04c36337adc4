from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PricingFactor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("is_default", models.BooleanField(default=False)),
                ("factor", models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal("1.00")), django.core.validators.MaxValueValidator(Decimal("10.00"))])),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("valid_from", models.DateTimeField(default=django.utils.timezone.now)),
                ("valid_until", models.DateTimeField(blank=True, null=True)),
                ("category", models.CharField(choices=[("crown", "crown"), ("bridge", "bridge"), ("implant", "implant"), ("denture", "denture"), ("veneer", "veneer"), ("inlay", "inlay"), ("onlay", "onlay"), ("general", "general")], default="general", max_length=20)),
                ("material", models.CharField(choices=[("ceramic", "ceramic"), ("porcelain", "porcelain"), ("metal", "metal"), ("zirconia", "zirconia"), ("composite", "composite"), ("acrylic", "acrylic"), ("general", "general")], default="general", max_length=20)),
                ("urgency", models.CharField(choices=[("low", "low"), ("medium", "medium"), ("high", "high"), ("urgent", "urgent"), ("general", "general")], default="general", max_length=20)),
                ("min_order_value", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("max_order_value", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="pricing_factors_created", to=settings.AUTH_USER_MODEL)),
                ("supplier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="pricing_factors", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "pricing_factors",
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(fields=["is_default"], name="pf_is_default_idx"),
                    models.Index(fields=["category"], name="pf_category_idx"),
                    models.Index(fields=["material"], name="pf_material_idx"),
                    models.Index(fields=["is_active"], name="pf_is_active_idx"),
                ],
            },
        ),
    ]
