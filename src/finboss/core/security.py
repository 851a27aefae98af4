"""Security utilities for password hashing and JWT token management."""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from finboss.config import settings

# Password hashing with Argon2
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Password to verify
        hashed_password: Stored password hash

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def hash_token(raw_token: str) -> str:
    """One-way hash of a refresh token for storage (sha256 hex)."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def create_access_token(
    user_id: UUID, email: str, expires_delta: timedelta | None = None
) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: User ID to encode in token
        email: User email, carried for convenience of clients
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.jwt_access_expire_days)

    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_refresh_token(
    user_id: UUID, email: str, expires_delta: timedelta | None = None
) -> str:
    """
    Create a JWT refresh token.

    The random ``jti`` makes every refresh token unique, even when two are
    issued for the same user within the same second.

    Args:
        user_id: User ID to encode in token
        email: User email
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT refresh token string
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.jwt_refresh_expire_days)

    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
        "type": REFRESH_TOKEN_TYPE,
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(
        to_encode, settings.jwt_refresh_secret, algorithm=settings.jwt_algorithm
    )


def _decode(token: str, secret: str, expected_type: str) -> dict[str, Any]:
    payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    if payload.get("type") != expected_type:
        raise JWTError("Invalid token type")
    if payload.get("sub") is None:
        raise JWTError("Token missing 'sub' claim")
    return payload


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an access token.

    Raises:
        JWTError: If token is invalid, expired, or not an access token
    """
    return _decode(token, settings.jwt_secret, ACCESS_TOKEN_TYPE)


def decode_refresh_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a refresh token.

    Raises:
        JWTError: If token is invalid, expired, or not a refresh token
    """
    return _decode(token, settings.jwt_refresh_secret, REFRESH_TOKEN_TYPE)


def get_user_id_from_token(token: str) -> UUID:
    """
    Extract user ID from an access token.

    Args:
        token: JWT access token string

    Returns:
        User ID as UUID

    Raises:
        JWTError: If token is invalid or expired
        ValueError: If user ID is not a valid UUID
    """
    payload = decode_access_token(token)
    return UUID(payload["sub"])
