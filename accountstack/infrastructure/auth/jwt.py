"""
JWT Token Management.

HS256 signing for access tokens; the only claim the services rely on is user_id.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from accountstack.config import Settings, settings as default_settings


class TokenError(Exception):
    """Raised when token creation or validation fails."""

    pass


def create_access_token(
    user_id: str,
    email: str,
    settings: Settings = default_settings,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expire_minutes)

    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings = default_settings) -> dict:
    """
    Decode and validate a JWT access token.

    Raises TokenError on any failure.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise TokenError(f"Invalid token: {e}") from e
    if not payload.get("user_id"):
        raise TokenError("Token missing required claims")
    return payload
