"""Profiles API views.

Provides the caller's own profile (read and partial update) and the admin
user management endpoints: list and detail, active/verified flags, soft
deletion (deactivation, users are never removed), the lists of active
dentists and suppliers used for order intake and user statistics.
"""

import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.pagination import StandardPagination
from user_auth_app.api.permissions import IsAdminRole, IsDentistOrAdmin
from ..models import Profile
from .serializers import (
    ProfilePatchSerializer,
    UserSerializer,
    UserStatusPatchSerializer,
    UserSummarySerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


# ----------------------------- helpers (module-level) -----------------------------

def _parse_bool_param(params, name):
    """Return True/False for 'true'/'false' query values, None when absent."""
    raw = params.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value not in {"true", "false"}:
        raise ValidationError({name: "Must be 'true' or 'false'."})
    return value == "true"


def _users_with_profile():
    return User.objects.select_related("profile").filter(profile__isnull=False)


# --------------------------------------- views ---------------------------------------

class ProfileView(generics.RetrieveUpdateAPIView):
    """
    GET `/api/profile/` returns the authenticated user's profile.
    PATCH `/api/profile/` updates only the fields provided.
    """

    permission_classes = [IsAuthenticated]

    def get_serializer_class(self):
        if self.request.method in ("PATCH", "PUT"):
            return ProfilePatchSerializer
        return UserSerializer

    def get_object(self):
        return self.request.user

    def update(self, request, *args, **kwargs):
        """Force partial updates via PATCH semantics."""
        serializer = self.get_serializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)


class UserListView(generics.ListAPIView):
    """GET `/api/users/` -> paginated users, filterable by `role` and `is_active` (admin)."""

    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = StandardPagination

    def get_queryset(self):
        qs = _users_with_profile()
        params = self.request.query_params

        role = params.get("role")
        if role:
            if role not in Profile.Role.values:
                raise ValidationError({"role": "Allowed values: admin, dentist, supplier."})
            qs = qs.filter(profile__role=role)

        is_active = _parse_bool_param(params, "is_active")
        if is_active is not None:
            qs = qs.filter(is_active=is_active)
        return qs.order_by("-date_joined", "-id")


class UserDetailView(generics.RetrieveDestroyAPIView):
    """GET: user detail. DELETE: deactivate the user (soft delete, admin only)."""

    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return _users_with_profile()

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        user.is_active = False
        user.save(update_fields=["is_active"])
        logger.info("User %s deactivated by %s", user.pk, request.user.pk)
        return Response({"detail": "User deactivated successfully."}, status=status.HTTP_200_OK)


class UserStatusView(APIView):
    """PATCH `/api/users/{id}/status/` -> update `is_active` / `is_verified` (admin)."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def patch(self, request, pk: int):
        user = get_object_or_404(_users_with_profile(), pk=pk)
        serializer = UserStatusPatchSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("User %s status updated by %s: %s", user.pk, request.user.pk, serializer.validated_data)
        return Response(serializer.data, status=status.HTTP_200_OK)


class AvailableDentistsView(generics.ListAPIView):
    """GET `/api/users/dentists/available/` -> active dentists (admin)."""

    serializer_class = UserSummarySerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return (
            _users_with_profile()
            .filter(profile__role=Profile.Role.DENTIST, is_active=True)
            .order_by("last_name", "id")
        )


class AvailableSuppliersView(generics.ListAPIView):
    """GET `/api/users/suppliers/available/` -> active suppliers (dentist or admin)."""

    serializer_class = UserSummarySerializer
    permission_classes = [IsAuthenticated, IsDentistOrAdmin]

    def get_queryset(self):
        return (
            _users_with_profile()
            .filter(profile__role=Profile.Role.SUPPLIER, is_active=True)
            .order_by("profile__company_name", "id")
        )


class UserStatsView(APIView):
    """GET `/api/users/stats/` -> user counters (admin)."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        users = _users_with_profile()
        total = users.count()
        active = users.filter(is_active=True).count()
        data = {
            "total_users": total,
            "active_users": active,
            "inactive_users": total - active,
            "dentists": users.filter(profile__role=Profile.Role.DENTIST, is_active=True).count(),
            "suppliers": users.filter(profile__role=Profile.Role.SUPPLIER, is_active=True).count(),
            "verified_users": users.filter(profile__is_verified=True).count(),
        }
        return Response(data, status=status.HTTP_200_OK)
