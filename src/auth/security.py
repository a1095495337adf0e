"""Access token handling.

Tokens are issued by the identity side of the platform; this service only
validates them to learn who the caller is.
"""

from typing import Any

from jose import JWTError, jwt

from src.config.settings import get_settings


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate an access token.

    Validates:
    - JWT signature
    - Expiration time
    - Token type == "access"
    - Presence of a subject

    Raises:
        JWTError: If token is invalid, expired, of the wrong type or has no subject
    """
    settings = get_settings()

    payload = jwt.decode(
        token,
        settings.auth_secret_key,
        algorithms=[settings.auth_algorithm],
    )

    if payload.get("type") != "access":
        msg = "Invalid token type: expected 'access'"
        raise JWTError(msg)

    if not payload.get("sub"):
        msg = "Token has no subject"
        raise JWTError(msg)

    return payload
