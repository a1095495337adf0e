"""Access tokens for tests, shaped like those the identity service issues."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt

from src.config import get_settings


def make_access_token(
    claims: dict[str, Any],
    expires_delta: timedelta = timedelta(minutes=15),
    token_type: str = "access",
    secret_key: str | None = None,
) -> str:
    """Sign ``claims`` with the configured key (or ``secret_key``)."""
    settings = get_settings()
    now = datetime.now(UTC)
    payload = {**claims, "iat": now, "exp": now + expires_delta, "type": token_type}
    return jwt.encode(
        payload,
        secret_key or settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
    )
