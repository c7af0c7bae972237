"""Token issuing endpoint."""

import logging

from fastapi import APIRouter

from bistro.core.security import issue_token
from bistro.schemas import TokenRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/jwt", response_model=TokenResponse, summary="Issue Bearer Token")
def create_token(identity: TokenRequest) -> TokenResponse:
    """Sign the posted identity payload into a 2-hour bearer token."""
    token = issue_token(identity.model_dump(exclude_none=True))
    logger.info(f"Issued token for {identity.email!r}")
    return TokenResponse(token=token)
