"""Security: JWT access tokens and password hashing."""

from taskdesk.infrastructure.security.jwt import create_access_token, verify_token
from taskdesk.infrastructure.security.password import (
    get_password_hash,
    verify_password,
)

__all__ = [
    "create_access_token",
    "verify_token",
    "get_password_hash",
    "verify_password",
]
