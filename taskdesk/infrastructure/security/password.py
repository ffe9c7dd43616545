"""Password hashing for Taskdesk accounts.

bcrypt only reads the first 72 bytes of its input, so passwords are
reduced to a base64 SHA-256 digest first and long passphrases keep all
their entropy.
"""

import base64
import hashlib

import bcrypt


def _digest(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def get_password_hash(password: str) -> str:
    """Hash password with a fresh bcrypt salt."""
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check plain_password against a stored hash. Malformed hashes never match."""
    try:
        return bool(bcrypt.checkpw(_digest(plain_password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False
