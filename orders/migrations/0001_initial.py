from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_number", models.CharField(editable=False, max_length=20, unique=True)),
                ("status", models.CharField(choices=[("quote_asked", "quote_asked"), ("quote_sent", "quote_sent"), ("quote_validated", "quote_validated"), ("in_production", "in_production"), ("in_shipping", "in_shipping"), ("delivered", "delivered"), ("cancelled", "cancelled")], default="quote_asked", max_length=20)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("patient_info", models.JSONField(blank=True, default=dict)),
                ("patient_name", models.CharField(blank=True, default="", max_length=200)),
                ("patient_age", models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(150)])),
                ("patient_gender", models.CharField(blank=True, choices=[("male", "male"), ("female", "female"), ("other", "other")], default="", max_length=10)),
                ("tooth_numbers", models.JSONField(blank=True, default=list)),
                ("prosthesis_type", models.CharField(choices=[("crown", "crown"), ("bridge", "bridge"), ("implant", "implant"), ("denture", "denture"), ("veneer", "veneer"), ("inlay", "inlay"), ("onlay", "onlay"), ("other", "other")], max_length=20)),
                ("material", models.CharField(choices=[("ceramic", "ceramic"), ("porcelain", "porcelain"), ("metal", "metal"), ("zirconia", "zirconia"), ("composite", "composite"), ("acrylic", "acrylic"), ("other", "other")], max_length=20)),
                ("color", models.CharField(blank=True, default="", max_length=50)),
                ("urgency", models.CharField(choices=[("low", "low"), ("medium", "medium"), ("high", "high"), ("urgent", "urgent")], default="medium", max_length=10)),
                ("expected_delivery", models.DateTimeField(blank=True, null=True)),
                ("actual_delivery", models.DateTimeField(blank=True, null=True)),
                ("original_quote", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("adjusted_quote", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("pricing_factor", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("tracking_number", models.CharField(blank=True, default="", max_length=100)),
                ("shipping_company", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("dentist", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="orders_placed", to=settings.AUTH_USER_MODEL)),
                ("supplier", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="orders_received", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "orders",
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(fields=["status"], name="order_status_idx"),
                    models.Index(fields=["dentist", "status"], name="order_dentist_status_idx"),
                    models.Index(fields=["supplier", "status"], name="order_supplier_status_idx"),
                ],
            },
        ),
    ]
