"""Quote workflow services.

Create, revise, accept and reject quotes. Each operation locks the order
row, updates the quote and the order and records a system chat message in
one transaction.
"""

import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from chat.models import ChatMessage
from chat.services import post_system_message
from common.exceptions import InvalidTransition
from orders.models import Order
from orders.services import move_for_quote
from pricing.resolver import resolve
from user_auth_app.api.permissions import is_admin
from .models import Quote

logger = logging.getLogger(__name__)

QUOTE_VALIDITY = timedelta(days=30)

REVISABLE_FIELDS = (
    "base_price",
    "material_cost",
    "labor_cost",
    "shipping_cost",
    "tax_amount",
    "production_time",
    "shipping_time",
    "notes",
    "specifications",
)


# ------------------------------ helpers ------------------------------

def _lock_order(order_id) -> Order:
    return Order.objects.select_for_update().get(pk=order_id)


def _ensure_open(quote, action):
    if quote.status not in Quote.OPEN_STATUSES:
        raise InvalidTransition(
            f"Only sent or modified quotes can be {action}.",
            from_state=quote.status,
            to_state=Quote.Status.ACCEPTED if action == "accepted" else Quote.Status.REJECTED,
        )


def _ensure_may_decide(quote, user):
    """Only the order's dentist or an admin accepts or rejects."""
    if not (is_admin(user) or quote.order.dentist_id == user.id):
        raise PermissionDenied("Only the order's dentist can decide on this quote.")


# ------------------------------ operations ------------------------------

@transaction.atomic
def create_quote(order, actor, **costs) -> Quote:
    """Price an order in ``quote_asked`` and move it to ``quote_sent``."""
    order = _lock_order(order.pk)
    if order.status != Order.Status.QUOTE_ASKED:
        raise InvalidTransition(
            "Cannot create quote for order in this status.",
            from_state=order.status,
            to_state=Order.Status.QUOTE_SENT,
        )

    factor = resolve(
        order.supplier_id,
        order.prosthesis_type,
        order.material,
        order.urgency,
        costs["base_price"],
    )
    quote = Quote.objects.create(
        order=order,
        supplier_id=order.supplier_id,
        status=Quote.Status.SENT,
        pricing_factor=factor,
        valid_until=timezone.now() + QUOTE_VALIDITY,
        **costs,
    )
    move_for_quote(order, Order.Status.QUOTE_SENT)
    post_system_message(
        order,
        actor,
        ChatMessage.SystemAction.QUOTE_SENT,
        f"Quote sent for {order.title}",
        message_type=ChatMessage.MessageType.QUOTE_UPDATE,
        metadata={"quote_id": quote.id},
    )
    logger.info("Quote %s for order %s: total=%s x%s", quote.pk, order.order_number, quote.total_price, factor)
    return quote


@transaction.atomic
def revise_quote(quote, actor, changes: dict) -> Quote:
    """Edit a quote that is not accepted; bumps the revision and recomputes prices.

    An order still waiting in ``quote_asked`` moves to ``quote_sent``.
    """
    order = _lock_order(quote.order_id)
    quote = Quote.objects.select_for_update().get(pk=quote.pk)
    if quote.status == Quote.Status.ACCEPTED:
        raise InvalidTransition(
            "Cannot update accepted quote.",
            from_state=quote.status,
            to_state=Quote.Status.MODIFIED,
        )

    for attr in REVISABLE_FIELDS:
        if attr in changes:
            setattr(quote, attr, changes[attr])
    quote.revision_number += 1
    quote.status = Quote.Status.MODIFIED
    quote.save()

    if order.status == Order.Status.QUOTE_ASKED:
        move_for_quote(order, Order.Status.QUOTE_SENT)
    post_system_message(
        order,
        actor,
        ChatMessage.SystemAction.QUOTE_UPDATED,
        f"Quote updated (Revision {quote.revision_number})",
        message_type=ChatMessage.MessageType.QUOTE_UPDATE,
        metadata={"quote_id": quote.id, "revision": quote.revision_number},
    )
    return quote


@transaction.atomic
def accept_quote(quote, actor) -> Quote:
    """Accept an open quote and copy its pricing onto the order."""
    order = _lock_order(quote.order_id)
    quote = Quote.objects.select_for_update().select_related("order").get(pk=quote.pk)
    _ensure_may_decide(quote, actor)
    _ensure_open(quote, "accepted")

    quote.status = Quote.Status.ACCEPTED
    quote.accepted_at = timezone.now()
    quote.accepted_by = actor
    quote.save(update_fields=["status", "accepted_at", "accepted_by", "updated_at"])

    move_for_quote(order, Order.Status.QUOTE_VALIDATED)
    order.original_quote = quote.total_price
    order.adjusted_quote = quote.adjusted_price
    order.pricing_factor = quote.pricing_factor
    order.save(update_fields=["original_quote", "adjusted_quote", "pricing_factor", "updated_at"])

    post_system_message(
        order,
        actor,
        ChatMessage.SystemAction.QUOTE_ACCEPTED,
        f"Quote accepted for {order.title}",
        message_type=ChatMessage.MessageType.QUOTE_UPDATE,
        metadata={"quote_id": quote.id},
    )
    logger.info("Quote %s accepted by %s", quote.pk, actor.pk)
    return quote


@transaction.atomic
def reject_quote(quote, actor, reason="") -> Quote:
    """Reject an open quote; the order re-opens for quoting once no open quote is left."""
    order = _lock_order(quote.order_id)
    quote = Quote.objects.select_for_update().select_related("order").get(pk=quote.pk)
    _ensure_may_decide(quote, actor)
    _ensure_open(quote, "rejected")

    quote.status = Quote.Status.REJECTED
    quote.rejection_reason = reason or ""
    quote.save(update_fields=["status", "rejection_reason", "updated_at"])

    others_open = order.quotes.filter(status__in=Quote.OPEN_STATUSES).exclude(pk=quote.pk).exists()
    if order.status == Order.Status.QUOTE_SENT and not others_open:
        move_for_quote(order, Order.Status.QUOTE_ASKED)
    post_system_message(
        order,
        actor,
        ChatMessage.SystemAction.QUOTE_REJECTED,
        f"Quote rejected for {order.title}",
        message_type=ChatMessage.MessageType.QUOTE_UPDATE,
        metadata={"quote_id": quote.id},
    )
    logger.info("Quote %s rejected by %s", quote.pk, actor.pk)
    return quote
