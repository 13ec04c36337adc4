"""Auth API views.

Implements bearer-token registration and login plus password changes.
Registration creates the Profile with the requested role; login updates the
last-login timestamp.
"""

import logging

from django.contrib.auth.models import update_last_login
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from profiles.api.serializers import UserSerializer
from ..authentication import JWTAuthentication
from ..tokens import issue_token
from .permissions import AllowAnyRegistration, AllowedAnyLogin
from .serializers import ChangePasswordSerializer, LoginSerializer, RegistrationSerializer

logger = logging.getLogger(__name__)


def _token_payload(user) -> dict:
    return {"token": issue_token(user), "user": UserSerializer(user).data}


class RegistrationView(APIView):
    """POST /api/auth/register/ -> create user + profile, return bearer token."""

    authentication_classes = []
    permission_classes = [AllowAnyRegistration]

    def post(self, request, *args, **kwargs):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered %s user %s", user.profile.role, user.pk)
        return Response(_token_payload(user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/auth/login/ -> validate credentials and return bearer token."""

    authentication_classes = []
    permission_classes = [AllowedAnyLogin]

    def get_authenticate_header(self, request):
        """Keep 401 for bad credentials although no authenticator runs here."""
        return JWTAuthentication.keyword

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]
        update_last_login(None, user)
        return Response(_token_payload(user), status=status.HTTP_200_OK)


class ChangePasswordView(APIView):
    """PUT /api/auth/change-password/ -> replace the caller's password."""

    permission_classes = [IsAuthenticated]

    def put(self, request, *args, **kwargs):
        serializer = ChangePasswordSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"detail": "Password changed successfully."}, status=status.HTTP_200_OK)
