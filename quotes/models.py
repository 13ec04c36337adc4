"""Quotes app models.

Defines the Quote: a supplier's priced answer to an order. The total is the
sum of the cost components and the adjusted price is the total multiplied by
the applied pricing factor; both are recomputed on every save and are never
written directly.
"""

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

COST_FIELDS = ("base_price", "material_cost", "labor_cost", "shipping_cost", "tax_amount")


def compute_total(base_price, material_cost=None, labor_cost=None, shipping_cost=None, tax_amount=None) -> Decimal:
    """Sum of the cost components, missing components count as zero."""
    parts = (base_price, material_cost, labor_cost, shipping_cost, tax_amount)
    return sum((Decimal(p or 0) for p in parts), ZERO).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_adjusted(total, factor) -> Decimal:
    return (Decimal(total) * Decimal(factor)).quantize(CENT, rounding=ROUND_HALF_UP)


class Quote(models.Model):
    """A priced offer for one order, revised in place until accepted."""

    class Status(models.TextChoices):
        DRAFT = "draft", "draft"
        SENT = "sent", "sent"
        ACCEPTED = "accepted", "accepted"
        REJECTED = "rejected", "rejected"
        MODIFIED = "modified", "modified"

    # quote states that can still be accepted or rejected
    OPEN_STATUSES = (Status.SENT, Status.MODIFIED)

    order = models.ForeignKey("orders.Order", on_delete=models.CASCADE, related_name="quotes")
    supplier = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="quotes",
    )
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.DRAFT)

    base_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    material_cost = models.DecimalField(max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)])
    labor_cost = models.DecimalField(max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)])
    shipping_cost = models.DecimalField(max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)])
    tax_amount = models.DecimalField(max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)])

    total_price = models.DecimalField(max_digits=10, decimal_places=2, editable=False, default=ZERO)
    pricing_factor = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("1.00"))
    adjusted_price = models.DecimalField(max_digits=10, decimal_places=2, editable=False, default=ZERO)

    valid_until = models.DateTimeField(null=True, blank=True)
    production_time = models.PositiveIntegerField(null=True, blank=True, help_text="days")
    shipping_time = models.PositiveIntegerField(null=True, blank=True, help_text="days")

    notes = models.TextField(blank=True, default="")
    specifications = models.JSONField(default=dict, blank=True)

    revision_number = models.PositiveIntegerField(default=1)
    parent_quote = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        related_name="revisions",
        null=True,
        blank=True,
    )

    accepted_at = models.DateTimeField(null=True, blank=True)
    accepted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="quotes_accepted",
        null=True,
        blank=True,
    )
    rejection_reason = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "quotes"
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=["order", "status"], name="quote_order_status_idx"),
            models.Index(fields=["supplier"], name="quote_supplier_idx"),
        ]

    def __str__(self) -> str:
        return f"Quote<{self.id} order={self.order_id} {self.status} r{self.revision_number}>"

    def recompute(self):
        self.total_price = compute_total(*(getattr(self, f) for f in COST_FIELDS))
        self.adjusted_price = compute_adjusted(self.total_price, self.pricing_factor)

    def save(self, *args, **kwargs):
        self.recompute()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | {"total_price", "adjusted_price"}
        super().save(*args, **kwargs)
