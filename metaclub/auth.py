import logging
import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from . import config
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt. Truncates to 72 bytes for bcrypt compatibility."""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    password_bytes = plain_password.encode('utf-8')[:72]
    return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))


def check_admin_password(password: Optional[str]) -> bool:
    """
    Compare a submitted password with the configured admin secret.

    ADMIN_PASSWORD_HASH (bcrypt) wins over a plain ADMIN_PASSWORD. With
    neither configured every attempt fails.
    """
    if not password:
        return False
    if config.ADMIN_PASSWORD_HASH:
        return verify_password(password, config.ADMIN_PASSWORD_HASH)
    if config.ADMIN_PASSWORD:
        return secrets.compare_digest(password.encode('utf-8'), config.ADMIN_PASSWORD.encode('utf-8'))

    logger.warning("Admin login attempted but no admin password is configured")
    return False


def create_admin_token(expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed admin session token."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ADMIN_TOKEN_EXPIRE_MINUTES)

    claims = {
        "role": ADMIN_ROLE,
        "exp": datetime.utcnow() + expires_delta,
    }
    return jwt.encode(claims, config.SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_admin_token(token: Optional[str]) -> Dict[str, Any]:
    """
    Verify signature, expiry and role of an admin token.

    Every failure raises the same AuthenticationError so callers learn
    nothing about which check failed.
    """
    if not token:
        raise AuthenticationError()

    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError()

    if payload.get("role") != ADMIN_ROLE:
        raise AuthenticationError()

    return payload
