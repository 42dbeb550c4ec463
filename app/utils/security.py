"""
EarthSafe API - Security Utilities

Password hashing, JWT token management, and security helpers.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings


# pbkdf2_sha256 is pure passlib and does not depend on the bcrypt wheel
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storing."""
    return pwd_context.hash(password)


def _encode(data: dict, token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary containing token payload ("sub" must be the user id)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    return _encode(
        data,
        "access",
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_refresh_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT refresh token.

    Args:
        data: Dictionary containing token payload
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT refresh token string
    """
    return _encode(
        data,
        "refresh",
        expires_delta or timedelta(days=settings.refresh_token_expire_days),
    )


def create_password_reset_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a short-lived JWT password reset token."""
    return _encode(
        data,
        "password_reset",
        expires_delta or timedelta(minutes=settings.password_reset_expire_minutes),
    )


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and verify a JWT token.

    Returns:
        Token payload dict or None if invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None


def _verify_typed(token: str, token_type: str) -> Optional[dict]:
    payload = decode_token(token)
    if payload and payload.get("type") == token_type:
        return payload
    return None


def verify_access_token(token: str) -> Optional[dict]:
    """Verify an access token and return payload."""
    return _verify_typed(token, "access")


def verify_refresh_token(token: str) -> Optional[dict]:
    """Verify a refresh token and return payload."""
    return _verify_typed(token, "refresh")


def verify_password_reset_token(token: str) -> Optional[dict]:
    """Verify a password reset token and return payload."""
    return _verify_typed(token, "password_reset")
