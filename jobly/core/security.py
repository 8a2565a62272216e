"""Token signing and password hashing primitives."""

from __future__ import annotations

import time
from dataclasses import dataclass

import bcrypt
import jwt


@dataclass(frozen=True)
class SecurityConfig:
    """Process-wide security settings, fixed at application start."""

    secret_key: str
    algorithm: str = "HS256"
    bcrypt_work_factor: int = 12


def create_token(username: str, is_admin: bool, config: SecurityConfig) -> str:
    """Sign a token carrying the caller identity.

    Args:
        username: Authenticated username.
        is_admin: Whether the user holds the admin flag.
        config: Security configuration providing secret and algorithm.

    Returns:
        Encoded JWT with ``username``, ``isAdmin`` and ``iat`` claims.
    """
    payload = {
        "username": username,
        "isAdmin": bool(is_admin),
        "iat": int(time.time()),
    }
    return jwt.encode(payload, config.secret_key, algorithm=config.algorithm)


def decode_token(token: str, config: SecurityConfig) -> dict:
    """Verify a token signature and return its claims.

    Raises:
        jwt.PyJWTError: If the token is malformed, forged or expired.
    """
    return jwt.decode(token, config.secret_key, algorithms=[config.algorithm])


def hash_password(password: str, config: SecurityConfig) -> str:
    """Hash a plain-text password with bcrypt."""
    salt = bcrypt.gensalt(rounds=config.bcrypt_work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


__all__ = [
    "SecurityConfig",
    "create_token",
    "decode_token",
    "hash_password",
    "verify_password",
]
