from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


def _money(**kwargs):
    return models.DecimalField(decimal_places=2, max_digits=10, **kwargs)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("orders", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Quote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("draft", "draft"), ("sent", "sent"), ("accepted", "accepted"), ("rejected", "rejected"), ("modified", "modified")], default="draft", max_length=10)),
                ("base_price", _money(validators=[django.core.validators.MinValueValidator(0)])),
                ("material_cost", _money(default=Decimal("0.00"), validators=[django.core.validators.MinValueValidator(0)])),
                ("labor_cost", _money(default=Decimal("0.00"), validators=[django.core.validators.MinValueValidator(0)])),
                ("shipping_cost", _money(default=Decimal("0.00"), validators=[django.core.validators.MinValueValidator(0)])),
                ("tax_amount", _money(default=Decimal("0.00"), validators=[django.core.validators.MinValueValidator(0)])),
                ("total_price", _money(default=Decimal("0.00"), editable=False)),
                ("pricing_factor", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=5)),
                ("adjusted_price", _money(default=Decimal("0.00"), editable=False)),
                ("valid_until", models.DateTimeField(blank=True, null=True)),
                ("production_time", models.PositiveIntegerField(blank=True, help_text="days", null=True)),
                ("shipping_time", models.PositiveIntegerField(blank=True, help_text="days", null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("specifications", models.JSONField(blank=True, default=dict)),
                ("revision_number", models.PositiveIntegerField(default=1)),
                ("accepted_at", models.DateTimeField(blank=True, null=True)),
                ("rejection_reason", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("accepted_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="quotes_accepted", to=settings.AUTH_USER_MODEL)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="quotes", to="orders.order")),
                ("parent_quote", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="revisions", to="quotes.quote")),
                ("supplier", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="quotes", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "quotes",
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(fields=["order", "status"], name="quote_order_status_idx"),
                    models.Index(fields=["supplier"], name="quote_supplier_idx"),
                ],
            },
        ),
    ]
