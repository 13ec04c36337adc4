"""Pricing app models.

Defines the PricingFactor markup rule. A rule may be scoped to a supplier, a
prosthesis category, a material and an urgency (each of the last three may be
the wildcard ``general``), an order value range and a validity window. Rules
are deactivated, never deleted.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Case, IntegerField, Q, Value, When
from django.utils import timezone

GENERAL = "general"

MIN_FACTOR = Decimal("1.00")
MAX_FACTOR = Decimal("10.00")


class PricingFactorQuerySet(models.QuerySet):
    """Composable filters used by the factor resolver."""

    def active_at(self, moment=None):
        moment = moment or timezone.now()
        return self.filter(is_active=True, valid_from__lte=moment).filter(
            Q(valid_until__isnull=True) | Q(valid_until__gte=moment)
        )

    def matching(self, category, material, urgency):
        return self.filter(
            category__in=[category, GENERAL],
            material__in=[material, GENERAL],
            urgency__in=[urgency, GENERAL],
        )

    def for_order_value(self, value):
        return self.filter(
            Q(min_order_value__isnull=True) | Q(min_order_value__lte=value),
            Q(max_order_value__isnull=True) | Q(max_order_value__gte=value),
        )

    def by_specificity(self):
        """Specific category first, then material, then urgency, then newest."""

        def _specific(field):
            return Case(
                When(**{field: GENERAL}, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )

        return self.annotate(
            _category_specific=_specific("category"),
            _material_specific=_specific("material"),
            _urgency_specific=_specific("urgency"),
        ).order_by(
            "-_category_specific",
            "-_material_specific",
            "-_urgency_specific",
            "-created_at",
            "-id",
        )


class PricingFactor(models.Model):
    """A markup multiplier applied to a quote total."""

    class Category(models.TextChoices):
        CROWN = "crown", "crown"
        BRIDGE = "bridge", "bridge"
        IMPLANT = "implant", "implant"
        DENTURE = "denture", "denture"
        VENEER = "veneer", "veneer"
        INLAY = "inlay", "inlay"
        ONLAY = "onlay", "onlay"
        GENERAL = "general", "general"

    class Material(models.TextChoices):
        CERAMIC = "ceramic", "ceramic"
        PORCELAIN = "porcelain", "porcelain"
        METAL = "metal", "metal"
        ZIRCONIA = "zirconia", "zirconia"
        COMPOSITE = "composite", "composite"
        ACRYLIC = "acrylic", "acrylic"
        GENERAL = "general", "general"

    class Urgency(models.TextChoices):
        LOW = "low", "low"
        MEDIUM = "medium", "medium"
        HIGH = "high", "high"
        URGENT = "urgent", "urgent"
        GENERAL = "general", "general"

    supplier = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="pricing_factors",
        null=True,
        blank=True,
    )
    is_default = models.BooleanField(default=False)
    factor = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(MIN_FACTOR), MaxValueValidator(MAX_FACTOR)],
    )
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")

    valid_from = models.DateTimeField(default=timezone.now)
    valid_until = models.DateTimeField(null=True, blank=True)

    category = models.CharField(max_length=20, choices=Category.choices, default=GENERAL)
    material = models.CharField(max_length=20, choices=Material.choices, default=GENERAL)
    urgency = models.CharField(max_length=20, choices=Urgency.choices, default=GENERAL)

    min_order_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    max_order_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="pricing_factors_created",
    )
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PricingFactorQuerySet.as_manager()

    class Meta:
        db_table = "pricing_factors"
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=["is_default"], name="pf_is_default_idx"),
            models.Index(fields=["category"], name="pf_category_idx"),
            models.Index(fields=["material"], name="pf_material_idx"),
            models.Index(fields=["is_active"], name="pf_is_active_idx"),
        ]

    def __str__(self) -> str:
        return f"PricingFactor<{self.id} {self.name} x{self.factor}>"
