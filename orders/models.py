"""Orders app models.

Defines the Order model: one prosthesis request from a dentist to a supplier.
An order walks a fixed status graph from ``quote_asked`` to ``delivered`` (or
``cancelled``) and snapshots the accepted quote's pricing. Orders are never
deleted.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from profiles.models import Profile, role_of


class OrderQuerySet(models.QuerySet):
    """Role scoping and search for order listings."""

    def visible_to(self, user):
        """Dentists see their own orders, suppliers their assigned ones, admins all."""
        role = role_of(user)
        if role == Profile.Role.ADMIN:
            return self
        if role == Profile.Role.DENTIST:
            return self.filter(dentist=user)
        if role == Profile.Role.SUPPLIER:
            return self.filter(supplier=user)
        return self.none()

    def search(self, term):
        term = (term or "").strip()
        if not term:
            return self
        return self.filter(
            Q(title__icontains=term)
            | Q(order_number__icontains=term)
            | Q(patient_name__icontains=term)
        )

    def with_parties(self):
        return self.select_related("dentist__profile", "supplier__profile")


class Order(models.Model):
    """A prosthesis order placed by a dentist with one supplier."""

    class Status(models.TextChoices):
        QUOTE_ASKED = "quote_asked", "quote_asked"
        QUOTE_SENT = "quote_sent", "quote_sent"
        QUOTE_VALIDATED = "quote_validated", "quote_validated"
        IN_PRODUCTION = "in_production", "in_production"
        IN_SHIPPING = "in_shipping", "in_shipping"
        DELIVERED = "delivered", "delivered"
        CANCELLED = "cancelled", "cancelled"

    class ProsthesisType(models.TextChoices):
        CROWN = "crown", "crown"
        BRIDGE = "bridge", "bridge"
        IMPLANT = "implant", "implant"
        DENTURE = "denture", "denture"
        VENEER = "veneer", "veneer"
        INLAY = "inlay", "inlay"
        ONLAY = "onlay", "onlay"
        OTHER = "other", "other"

    class Material(models.TextChoices):
        CERAMIC = "ceramic", "ceramic"
        PORCELAIN = "porcelain", "porcelain"
        METAL = "metal", "metal"
        ZIRCONIA = "zirconia", "zirconia"
        COMPOSITE = "composite", "composite"
        ACRYLIC = "acrylic", "acrylic"
        OTHER = "other", "other"

    class Urgency(models.TextChoices):
        LOW = "low", "low"
        MEDIUM = "medium", "medium"
        HIGH = "high", "high"
        URGENT = "urgent", "urgent"

    class Gender(models.TextChoices):
        MALE = "male", "male"
        FEMALE = "female", "female"
        OTHER = "other", "other"

    # status -> statuses reachable through the status endpoint
    TRANSITIONS = {
        Status.QUOTE_ASKED: (Status.QUOTE_SENT, Status.CANCELLED),
        Status.QUOTE_SENT: (Status.QUOTE_VALIDATED, Status.CANCELLED),
        Status.QUOTE_VALIDATED: (Status.IN_PRODUCTION, Status.CANCELLED),
        Status.IN_PRODUCTION: (Status.IN_SHIPPING, Status.CANCELLED),
        Status.IN_SHIPPING: (Status.DELIVERED, Status.CANCELLED),
        Status.DELIVERED: (),
        Status.CANCELLED: (),
    }
    # statuses in which descriptive fields can no longer change
    LOCKED_STATUSES = (
        Status.IN_PRODUCTION,
        Status.IN_SHIPPING,
        Status.DELIVERED,
        Status.CANCELLED,
    )

    order_number = models.CharField(max_length=20, unique=True, editable=False)
    dentist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders_placed",
    )
    supplier = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders_received",
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.QUOTE_ASKED
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")

    patient_info = models.JSONField(default=dict, blank=True)
    patient_name = models.CharField(max_length=200, blank=True, default="")
    patient_age = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(0), MaxValueValidator(150)]
    )
    patient_gender = models.CharField(max_length=10, choices=Gender.choices, blank=True, default="")

    tooth_numbers = models.JSONField(default=list, blank=True)
    prosthesis_type = models.CharField(max_length=20, choices=ProsthesisType.choices)
    material = models.CharField(max_length=20, choices=Material.choices)
    color = models.CharField(max_length=50, blank=True, default="")
    urgency = models.CharField(max_length=10, choices=Urgency.choices, default=Urgency.MEDIUM)

    expected_delivery = models.DateTimeField(null=True, blank=True)
    actual_delivery = models.DateTimeField(null=True, blank=True)

    original_quote = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    adjusted_quote = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    pricing_factor = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)

    notes = models.TextField(blank=True, default="")
    tracking_number = models.CharField(max_length=100, blank=True, default="")
    shipping_company = models.CharField(max_length=100, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        db_table = "orders"
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["dentist", "status"], name="order_dentist_status_idx"),
            models.Index(fields=["supplier", "status"], name="order_supplier_status_idx"),
        ]

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Order<{self.order_number} {self.title} {self.status}>"

    def can_transition_to(self, new_status) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, ())

    @property
    def is_locked(self) -> bool:
        return self.status in self.LOCKED_STATUSES


def next_order_number() -> str:
    """Next sequential human-readable order number (ORD-000001, ...)."""
    last = Order.objects.order_by("-id").values_list("order_number", flat=True).first()
    seq = int(last.split("-")[-1]) + 1 if last else 1
    return f"ORD-{seq:06d}"
