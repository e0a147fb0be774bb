"""
Security utilities for authentication.

Provides password hashing (bcrypt), JWT token management and the
in-process revocation list used by sign-out.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from talenthub.core.config import settings

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Token id (jti) -> expiry (unix seconds) of tokens revoked by sign-out.
# Entries are dropped once the token has expired anyway. Lost on restart.
_revoked_token_ids: dict[str, int] = {}


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: The data to encode in the token (typically {"sub": uid})
        expires_delta: Optional custom expiration time

    Returns:
        The encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT access token.

    Returns:
        The decoded token payload, or None if invalid, expired or revoked
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except InvalidTokenError:
        return None

    if payload.get("jti") in _revoked_token_ids:
        return None
    return payload


def revoke_token(token: str) -> bool:
    """Revoke a token so later decodes fail. Returns False for invalid tokens."""
    payload = decode_access_token(token)
    if payload is None or not payload.get("jti"):
        return False
    _prune_revoked_tokens()
    _revoked_token_ids[payload["jti"]] = payload["exp"]
    return True


def _prune_revoked_tokens() -> None:
    now = datetime.now(timezone.utc).timestamp()
    for jti in [jti for jti, exp in _revoked_token_ids.items() if exp <= now]:
        del _revoked_token_ids[jti]
