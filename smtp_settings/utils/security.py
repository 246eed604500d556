"""Access tokens and action-scoped authenticity tokens (nonces)."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from smtp_settings.config import settings

NONCE_SAVE_SETTINGS = "smtp_save_settings"
NONCE_TEST_EMAIL = "smtp_test_email"


def _encode(payload: dict[str, Any]) -> str:
    return jwt.encode(
        payload,
        settings.effective_jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def create_access_token(
    user_id: uuid.UUID,
    role: str = "",
    name: str = "",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token.

    Args:
        user_id: User's UUID
        role: User's role
        name: User's display name
        expires_delta: Custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    now = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id),
        "role": role,
        "name": name,
        "exp": now + expires_delta,
        "iat": now,
        "jti": str(uuid.uuid4()),  # Unique token ID
        "type": "access",
    }
    return _encode(payload)


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT token.

    Returns:
        Token payload dictionary if valid, None if invalid/expired
    """
    try:
        return jwt.decode(
            token,
            settings.effective_jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode an access token and verify it's an access token type."""
    payload = decode_token(token)
    if payload and payload.get("type") == "access":
        return payload
    return None


def create_nonce(
    action: str,
    user_id: uuid.UUID | None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a fresh authenticity token for one action and one user.

    Every call carries a new ``jti`` so each rendered form gets its own token.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.nonce_expire_minutes)

    now = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id) if user_id else "",
        "action": action,
        "exp": now + expires_delta,
        "iat": now,
        "jti": str(uuid.uuid4()),
        "type": "nonce",
    }
    return _encode(payload)


def verify_nonce(token: str | None, action: str, user_id: uuid.UUID | None) -> bool:
    """Check a nonce was issued for this action to this user and has not expired."""
    if not token:
        return False
    payload = decode_token(token)
    if not payload or payload.get("type") != "nonce":
        return False
    if payload.get("action") != action:
        return False
    return payload.get("sub") == (str(user_id) if user_id else "")
