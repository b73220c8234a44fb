"""
Request dependencies: bearer-token authentication and operation checks.

The verified ``Identity`` is handed to route handlers as a parameter.
"""
import logging
from typing import Callable, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from tracknest.core.authorization import Operation, authorize
from tracknest.core.exceptions import AuthError, ValidationFailed
from tracknest.core.security import Identity, verify_access_token

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)
) -> Optional[Identity]:
    """Identity from ``Authorization: Bearer``; None when no token was sent."""
    if credentials is None or not credentials.credentials:
        return None
    # A token that was sent but does not verify is a 401
    return verify_access_token(credentials.credentials)


def get_registration_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)
) -> Optional[Identity]:
    """
    Identity for public registration. A stale or invalid token makes the
    caller anonymous instead of failing the request.
    """
    try:
        return get_optional_identity(credentials)
    except AuthError as e:
        logger.debug(f"Ignoring unusable token on registration: {e.message}")
        return None


def require(operation: Operation) -> Callable[..., Identity]:
    """Build a dependency that authorizes ``operation`` and yields the caller."""

    def dependency(identity: Optional[Identity] = Depends(get_optional_identity)) -> Identity:
        authorize(identity, operation)
        return identity

    dependency.__name__ = f"require_{operation.value}"
    return dependency


get_current_identity = require(Operation.READ_PROFILE)
require_admin = require(Operation.MANAGE_USERS)


async def read_text_body(request: Request) -> str:
    """Raw request body as text; used where the body is a bare string."""
    raw = await request.body()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationFailed("Request body must be UTF-8 text")
