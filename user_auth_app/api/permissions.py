"""Auth API permissions.

Role-based permission classes shared by every app, plus the lightweight
permissions used by registration/login endpoints.
"""

from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, BasePermission

from profiles.models import Profile, role_of

ADMIN_ONLY = (Profile.Role.ADMIN,)
DENTIST_OR_ADMIN = (Profile.Role.DENTIST, Profile.Role.ADMIN)
SUPPLIER_OR_ADMIN = (Profile.Role.SUPPLIER, Profile.Role.ADMIN)


class AllowAnyRegistration(AllowAny):
    """Explicit alias for registration endpoints (semantics: allow any)."""
    pass


class AllowedAnyLogin(AllowAny):
    """Explicit alias for login endpoints (semantics: allow any)."""
    pass


def authorize(user, roles) -> None:
    """Raise PermissionDenied unless the user's role is one of ``roles``."""
    if role_of(user) not in roles:
        raise PermissionDenied(f"Access denied. Required role: {' or '.join(roles)}")


def is_admin(user) -> bool:
    return role_of(user) == Profile.Role.ADMIN


class HasRole(BasePermission):
    """Allow access only to authenticated users whose profile role is allowed."""

    allowed_roles = ()

    @property
    def message(self):
        return f"Access denied. Required role: {' or '.join(self.allowed_roles)}"

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return role_of(user) in self.allowed_roles


class IsAdminRole(HasRole):
    allowed_roles = ADMIN_ONLY


class IsDentistOrAdmin(HasRole):
    allowed_roles = DENTIST_OR_ADMIN


class IsSupplierOrAdmin(HasRole):
    allowed_roles = SUPPLIER_OR_ADMIN
