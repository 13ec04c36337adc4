"""Orders API permissions.

Order-level access control shared by the order, quote, file and chat
endpoints: admins may access every order, dentists and suppliers only the
orders they are a party to.
"""

from django.shortcuts import get_object_or_404
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission

from profiles.models import Profile, role_of
from orders.models import Order


def can_access_order(user, order) -> bool:
    """Admin, or the order's dentist, or the order's supplier."""
    if not user or not user.is_authenticated:
        return False
    role = role_of(user)
    if role == Profile.Role.ADMIN:
        return True
    if role == Profile.Role.DENTIST:
        return order.dentist_id == user.id
    if role == Profile.Role.SUPPLIER:
        return order.supplier_id == user.id
    return False


def get_accessible_order(user, order_id) -> Order:
    """Load an order or raise 404; raise 403 if the user may not access it."""
    qs = Order.objects.select_related("dentist__profile", "supplier__profile")
    order = get_object_or_404(qs, pk=order_id)
    if not can_access_order(user, order):
        raise PermissionDenied("Access denied to this order.")
    return order


class CanAccessOrder(BasePermission):
    """Object-level check for views whose object is an Order."""

    message = "Access denied to this order."

    def has_object_permission(self, request, view, obj):
        return can_access_order(request.user, obj)
