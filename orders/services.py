"""Order workflow services.

Order creation, status changes along the fixed status graph, detail edits
and the status moves driven by the quote workflow. Each mutation runs in one
transaction together with the system chat message it records.
"""

import logging
from datetime import timedelta

from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from chat.models import ChatMessage
from chat.services import post_system_message
from common.exceptions import InvalidTransition, OrderLocked
from .models import Order, next_order_number

logger = logging.getLogger(__name__)

PRODUCTION_LEAD_TIME = timedelta(days=14)
ORDER_NUMBER_ATTEMPTS = 5

DETAIL_FIELDS = (
    "title",
    "description",
    "patient_info",
    "patient_name",
    "patient_age",
    "patient_gender",
    "tooth_numbers",
    "prosthesis_type",
    "material",
    "color",
    "urgency",
    "expected_delivery",
    "notes",
)

# order moves made by the quote workflow; rejecting the last open quote re-opens quoting
QUOTE_MOVES = {
    Order.Status.QUOTE_ASKED: (Order.Status.QUOTE_SENT, Order.Status.QUOTE_VALIDATED),
    Order.Status.QUOTE_SENT: (Order.Status.QUOTE_VALIDATED, Order.Status.QUOTE_ASKED),
}


@transaction.atomic
def create_order(actor, dentist, supplier, **fields) -> Order:
    """Create an order in ``quote_asked`` and log it in the order's chat.

    A concurrent request may take the same order number; the insert is then
    retried with a fresh number.
    """
    for attempt in range(1, ORDER_NUMBER_ATTEMPTS + 1):
        number = next_order_number()
        try:
            with transaction.atomic():
                order = Order.objects.create(
                    order_number=number,
                    dentist=dentist,
                    supplier=supplier,
                    status=Order.Status.QUOTE_ASKED,
                    **fields,
                )
            break
        except IntegrityError:
            if attempt == ORDER_NUMBER_ATTEMPTS:
                raise
            logger.warning("Order number %s already taken, retrying", number)
    post_system_message(
        order,
        actor,
        ChatMessage.SystemAction.ORDER_CREATED,
        f"New order created: {order.title}",
    )
    logger.info("Order %s created by %s for supplier %s", order.order_number, actor.pk, supplier.pk)
    return order


@transaction.atomic
def change_status(order, actor, new_status, notes="", tracking_number="", shipping_company="") -> Order:
    """Move an order along the status graph; raises InvalidTransition otherwise."""
    order = Order.objects.select_for_update().get(pk=order.pk)
    if not order.can_transition_to(new_status):
        raise InvalidTransition(from_state=order.status, to_state=new_status)

    update_fields = ["status", "updated_at"]
    order.status = new_status
    for attr, value in (
        ("notes", notes),
        ("tracking_number", tracking_number),
        ("shipping_company", shipping_company),
    ):
        if value:
            setattr(order, attr, value)
            update_fields.append(attr)

    now = timezone.now()
    if new_status == Order.Status.IN_PRODUCTION:
        order.expected_delivery = now + PRODUCTION_LEAD_TIME
        update_fields.append("expected_delivery")
    elif new_status == Order.Status.DELIVERED:
        order.actual_delivery = now
        update_fields.append("actual_delivery")

    order.save(update_fields=update_fields)
    post_system_message(
        order,
        actor,
        ChatMessage.SystemAction.STATUS_CHANGED,
        f"Order status changed to: {new_status}",
        message_type=ChatMessage.MessageType.STATUS_CHANGE,
    )
    logger.info("Order %s status -> %s by %s", order.order_number, new_status, actor.pk)
    return order


@transaction.atomic
def update_details(order, data: dict) -> Order:
    """Apply descriptive edits; raises OrderLocked from production on."""
    order = Order.objects.select_for_update().get(pk=order.pk)
    if order.is_locked:
        raise OrderLocked()
    changed = [f for f in DETAIL_FIELDS if f in data]
    for attr in changed:
        setattr(order, attr, data[attr])
    if changed:
        order.save(update_fields=changed + ["updated_at"])
    return order


def move_for_quote(order, new_status) -> Order:
    """Status move triggered by a quote event; caller holds the order lock."""
    if new_status not in QUOTE_MOVES.get(order.status, ()):
        raise InvalidTransition(from_state=order.status, to_state=new_status)
    order.status = new_status
    order.save(update_fields=["status", "updated_at"])
    return order


def order_stats(queryset, recent=5) -> dict:
    """Total, per-status counts and the most recent orders of a queryset."""
    counts = {s: 0 for s in Order.Status.values}
    for row in queryset.order_by().values("status").annotate(n=Count("id")):
        counts[row["status"]] = row["n"]
    return {
        "total_orders": queryset.count(),
        "status_counts": counts,
        "recent_orders": list(queryset.with_parties().order_by("-created_at", "-id")[:recent]),
    }