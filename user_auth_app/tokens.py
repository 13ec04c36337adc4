"""Bearer credential issuing and verification.

Credentials are HS256 JWTs carrying the user id as subject. They are opaque
to the rest of the code base: ``issue_token`` produces one and
``verify_token`` yields the user id and expiry or raises AuthenticationFailed.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from django.conf import settings
from jose import ExpiredSignatureError, JWTError, jwt
from rest_framework.exceptions import AuthenticationFailed


def issue_token(user, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token for ``user``."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.JWT_EXPIRE_DAYS))
    payload = {
        "sub": str(user.pk),
        "exp": expire,
        "iat": now,
        "jti": str(uuid.uuid4()),
        "type": "access",
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> Tuple[int, datetime]:
    """Decode ``token`` and return ``(user_id, expires_at)``.

    Raises AuthenticationFailed for malformed, tampered or expired tokens.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationFailed("Token expired.")
    except JWTError:
        raise AuthenticationFailed("Invalid token.")

    if payload.get("type") != "access":
        raise AuthenticationFailed("Invalid token.")
    try:
        user_id = int(payload["sub"])
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
    except (KeyError, TypeError, ValueError):
        raise AuthenticationFailed("Invalid token.")
    return user_id, expires_at
