"""DRF authentication backend for ``Authorization: Bearer <token>`` headers."""

import logging

from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from .tokens import verify_token

logger = logging.getLogger(__name__)

User = get_user_model()


class JWTAuthentication(BaseAuthentication):
    """Resolve a bearer token to an active user.

    Requests without an Authorization header stay anonymous so that
    permission classes can answer with 401. A header that is present but
    malformed, expired or pointing to an inactive user fails immediately.
    """

    keyword = "Bearer"

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise AuthenticationFailed("Invalid token header.")

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise AuthenticationFailed("Invalid token header.")
        return self.authenticate_credentials(token)

    def authenticate_credentials(self, token: str):
        user_id, _expires_at = verify_token(token)
        user = User.objects.select_related("profile").filter(pk=user_id).first()
        if user is None or not user.is_active:
            logger.info("Rejected token for missing or inactive user %s", user_id)
            raise AuthenticationFailed("Invalid or inactive user.")
        return user, token

    def authenticate_header(self, request):
        return self.keyword


def authenticate(credential: str):
    """Resolve a raw bearer credential to a user or raise AuthenticationFailed."""
    user, _ = JWTAuthentication().authenticate_credentials(credential)
    return user
