"""
Core module initialization.
Exports configuration, errors and token utilities.
"""

from bistro.core.config import get_settings, Settings, EnvironmentMode
from bistro.core.errors import (
    ErrorKind,
    BistroError,
    Unauthenticated,
    InvalidToken,
    Forbidden,
    UpstreamFault,
)
from bistro.core.security import issue_token, verify_token, TokenVerification

__all__ = [
    "get_settings",
    "Settings",
    "EnvironmentMode",
    "ErrorKind",
    "BistroError",
    "Unauthenticated",
    "InvalidToken",
    "Forbidden",
    "UpstreamFault",
    "issue_token",
    "verify_token",
    "TokenVerification",
]
