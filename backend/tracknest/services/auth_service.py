"""
Login: credential check and token issuance.
"""
import logging
from sqlalchemy.orm import Session
from tracknest.core.exceptions import AuthError
from tracknest.core.security import check_credentials, create_access_token
from tracknest.schemas.auth import AccessToken
from tracknest.services.user_service import get_credentials, get_roles

logger = logging.getLogger(__name__)


def login(db: Session, username: str, password: str) -> AccessToken:
    """Verify credentials and issue a bearer token carrying the user's roles."""
    credentials = get_credentials(db, username)
    if not check_credentials(password, credentials):
        logger.info(f"Failed login for '{username}'")
        raise AuthError("Invalid username or password")

    authorities = get_roles(db, credentials.username)
    token, expires_at = create_access_token(credentials.username, authorities)
    logger.info(f"User '{credentials.username}' logged in")
    return AccessToken(token=token, expires_at=expires_at)
