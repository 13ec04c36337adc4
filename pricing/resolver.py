"""Pricing factor resolution.

``resolve`` picks the single markup multiplier that applies to an order:
supplier-scoped rules first, then rules flagged as default, then no markup.
Within each search the most specific matching rule wins (see
``PricingFactorQuerySet.by_specificity``).
"""

import logging
from decimal import Decimal
from typing import Optional

from django.utils import timezone

from .models import PricingFactor

logger = logging.getLogger(__name__)

NO_MARKUP = Decimal("1.00")


def find_applicable_rule(
    supplier_id, category, material, urgency, order_value, at=None
) -> Optional[PricingFactor]:
    """Return the winning rule or None."""
    moment = at or timezone.now()
    candidates = (
        PricingFactor.objects.active_at(moment)
        .matching(category, material, urgency)
        .for_order_value(order_value)
    )

    rule = None
    if supplier_id is not None:
        rule = candidates.filter(supplier_id=supplier_id).by_specificity().first()
    if rule is None:
        rule = candidates.filter(is_default=True).by_specificity().first()
    return rule


def resolve(supplier_id, category, material, urgency, order_value, at=None) -> Decimal:
    """Return the markup factor for the given order attributes (1.00 if none match)."""
    rule = find_applicable_rule(supplier_id, category, material, urgency, order_value, at=at)
    if rule is None:
        logger.debug(
            "No pricing factor for supplier=%s %s/%s/%s value=%s",
            supplier_id, category, material, urgency, order_value,
        )
        return NO_MARKUP
    logger.debug("Pricing factor %s (%s) applies", rule.pk, rule.factor)
    return rule.factor
