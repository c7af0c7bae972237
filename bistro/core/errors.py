"""
Error Taxonomy

Every failure the API reports falls into one of the ErrorKind buckets.
Authentication and authorization failures carry their own HTTP status;
upstream faults (store or payment provider) are reported through the
error envelope configured in main.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    INVALID_TOKEN = "invalid_token"
    FORBIDDEN = "forbidden"
    UPSTREAM_FAULT = "upstream_fault"


class BistroError(Exception):
    """Base class for errors raised deliberately by the API."""

    kind: ErrorKind = ErrorKind.UPSTREAM_FAULT
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


class Unauthenticated(BistroError):
    """No usable bearer credentials on the request."""

    kind = ErrorKind.UNAUTHENTICATED
    status_code = 401

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)

    def to_body(self) -> dict[str, Any]:
        return {"auth": False, "message": self.message}


class InvalidToken(BistroError):
    """Token signature, format or expiry check failed."""

    kind = ErrorKind.INVALID_TOKEN
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class Forbidden(BistroError):
    """Authenticated, but not allowed to touch this resource."""

    kind = ErrorKind.FORBIDDEN
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class UpstreamFault(BistroError):
    """The store or the payment provider failed."""

    kind = ErrorKind.UPSTREAM_FAULT
    status_code = 502
