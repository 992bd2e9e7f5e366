"""Password hashing for stored credentials.

bcrypt only reads the first 72 bytes of its input, so passwords are reduced to
a base64 SHA-256 digest first. The bcrypt cost comes from settings.bcrypt_rounds
(lowered in tests).
"""

import base64
import hashlib

import bcrypt

from nexus_obra.core.config import get_settings

_ENCODING = "utf-8"


def _digest(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode(_ENCODING)).digest())


def get_password_hash(password: str) -> str:
    rounds = get_settings().bcrypt_rounds
    hashed = bcrypt.hashpw(_digest(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode(_ENCODING)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches; a malformed stored hash never matches."""
    try:
        return bcrypt.checkpw(_digest(plain_password), hashed_password.encode(_ENCODING))
    except (ValueError, TypeError):
        return False
