"""Bearer access tokens for the Taskdesk API.

A token carries the user id as `sub` and the user's role. The role claim is
informational only: capabilities are always resolved from the stored user.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from taskdesk.core.config import get_settings
from taskdesk.shared.utils.datetime import utc_now


def create_access_token(
    subject: str,
    *,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Encode a signed access token for subject (a user id).

    Args:
        subject: User id stored in the `sub` claim.
        role: Optional role name stored in the `role` claim.
        expires_delta: Token lifetime; defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {"sub": subject, "exp": utc_now() + lifetime}
    if role:
        claims["role"] = role
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Decode token and return its claims.

    Raises:
        ValueError: Signature invalid, token expired, or `sub`/`exp` missing.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
