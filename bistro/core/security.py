"""
Bearer Token Issuing and Verification

Tokens are HS256-signed JWTs carrying whatever identity payload the client
posted to /jwt, plus ``iat`` and ``exp``. Verification never raises: it
returns a TokenVerification that is either ok (with claims) or a failure
tagged with an ErrorKind.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from bistro.core.config import get_settings
from bistro.core.errors import ErrorKind

logger = logging.getLogger(__name__)


@dataclass
class TokenVerification:
    """
    Outcome of verifying a bearer token.

    Attributes:
        ok: Whether the token is valid
        claims: Decoded payload (empty on failure)
        kind: Failure category, None on success
        reason: Human-readable failure reason
    """
    ok: bool
    claims: dict[str, Any] = field(default_factory=dict)
    kind: Optional[ErrorKind] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, claims: dict[str, Any]) -> "TokenVerification":
        return cls(ok=True, claims=claims)

    @classmethod
    def failure(cls, reason: str) -> "TokenVerification":
        return cls(ok=False, kind=ErrorKind.INVALID_TOKEN, reason=reason)


def issue_token(claims: dict[str, Any], now: Optional[datetime] = None) -> str:
    """
    Sign an identity payload.

    Args:
        claims: Identity payload; copied, never mutated
        now: Issue time (defaults to the current UTC time)

    Returns:
        str: Encoded JWT valid for ACCESS_TOKEN_EXPIRE_HOURS
    """
    settings = get_settings()
    issued_at = now or datetime.now(timezone.utc)

    payload = dict(claims)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + timedelta(hours=settings.access_token_expire_hours)

    return jwt.encode(
        payload,
        settings.access_token_secret,
        algorithm=settings.jwt_algorithm,
    )


def verify_token(token: Optional[str]) -> TokenVerification:
    """Decode and check a token's signature and expiry."""
    if not token:
        return TokenVerification.failure("Missing token")

    settings = get_settings()

    try:
        claims = jwt.decode(
            token,
            settings.access_token_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Token rejected: expired")
        return TokenVerification.failure("Token expired")
    except jwt.InvalidTokenError as e:
        logger.debug(f"Token rejected: {e}")
        return TokenVerification.failure("Invalid token")

    return TokenVerification.success(claims)
