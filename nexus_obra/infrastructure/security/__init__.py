"""Security primitives: JWT issuance/verification and password hashing."""

from nexus_obra.infrastructure.security.jwt import create_access_token, verify_token
from nexus_obra.infrastructure.security.password import get_password_hash, verify_password

__all__ = ["create_access_token", "get_password_hash", "verify_password", "verify_token"]
