"""Password hashing and JWT creation/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import (
    InvalidTokenError,
    MissingTokenError,
    PasswordHashError,
    TokenError,
)

# Fixed scheme prefix of the Authorization header value.
BEARER_PREFIX = "Bearer "

# Min/max lengths for name and password validation.
NAME_MIN_LEN = 1
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.

    Raises PasswordHashError if bcrypt fails or the fresh hash does not verify.
    """
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS))
        if not bcrypt.checkpw(pw_bytes, hashed):
            raise PasswordHashError()
    except (ValueError, TypeError) as e:
        raise PasswordHashError() from e
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: uuid.UUID,
    name: str,
    secret: str | None = None,
    ttl: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    """Create a JWT access token carrying the user id (sub), display name and exp."""
    issued_at = now or datetime.now(UTC)
    lifetime = ttl if ttl is not None else timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "name": name,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    key = secret or settings.JWT_SECRET.get_secret_value()
    try:
        return jwt.encode(payload, key, algorithm=settings.JWT_ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise TokenError() from e


def decode_access_token(token: str, secret: str | None = None) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, name, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    key = secret or settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        key,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )


def get_user_id(authorization: str | None, secret: str | None = None) -> uuid.UUID:
    """
    Resolve the user id from a raw Authorization header value ("Bearer <token>").

    Raises MissingTokenError when the header is absent and InvalidTokenError
    for a wrong scheme, bad signature, malformed token or expired token.
    """
    if not authorization or not authorization.strip():
        raise MissingTokenError()
    if not authorization.startswith(BEARER_PREFIX):
        raise InvalidTokenError("Authorization header must use the Bearer scheme")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise MissingTokenError()
    try:
        payload = decode_access_token(token, secret)
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e
    try:
        return uuid.UUID(str(payload.get("sub")))
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Invalid token payload") from e
