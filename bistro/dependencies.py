"""
Request Dependencies

Authentication and authorization chain shared by the routers:

    bearer_claims   -> 401 unless a valid bearer token is presented
    require_admin   -> bearer_claims, then 403 unless the caller is an admin
    cart_access     -> bearer_claims when PROTECT_CARTS is on, else nothing
"""

import logging
from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from bistro.core.config import get_settings
from bistro.core.errors import Forbidden, InvalidToken, Unauthenticated
from bistro.core.security import verify_token
from bistro.database import get_db
from bistro.models import Collections, UserRole

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def bearer_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict[str, Any]:
    """
    Verify the bearer token and return its claims.

    The decoded claims are also left on ``request.state.decoded``.

    Raises:
        Unauthenticated: No Authorization header, or not a Bearer scheme
        InvalidToken: Bad signature, malformed or expired token
    """
    if credentials is None or not credentials.credentials:
        logger.debug(f"Rejected {request.method} {request.url.path}: no bearer token")
        raise Unauthenticated()

    verification = verify_token(credentials.credentials)
    if not verification.ok:
        logger.info(
            f"Rejected {request.method} {request.url.path}: {verification.reason}"
        )
        raise InvalidToken()

    request.state.decoded = verification.claims
    return verification.claims


def is_admin(db: Database, email: Optional[str]) -> bool:
    """Check whether the stored user with this email holds the admin role."""
    if not email:
        return False
    user = db[Collections.USERS].find_one({"email": email})
    return bool(user) and user.get("role") == UserRole.ADMIN.value


def require_admin(
    claims: dict[str, Any] = Depends(bearer_claims),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    """
    Allow the request only if the token's email belongs to an admin.

    Raises:
        Forbidden: No such user, or the user is not an admin
    """
    email = claims.get("email")
    if not is_admin(db, email):
        logger.info(f"Admin access denied for {email!r}")
        raise Forbidden()
    return claims


def cart_access(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[dict[str, Any]]:
    """Token check for the cart endpoints, switchable with PROTECT_CARTS."""
    if not get_settings().protect_carts:
        return None
    return bearer_claims(request, credentials)
