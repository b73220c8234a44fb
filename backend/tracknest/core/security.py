"""
Security utilities for JWT authentication and password hashing.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import FrozenSet, Iterable, Optional, Tuple
import hashlib
import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from tracknest.core.config import settings
from tracknest.core.exceptions import AuthError

ADMIN = "ADMIN"


@dataclass(frozen=True)
class Credentials:
    """Stored login credentials: username plus bcrypt digest."""
    username: str
    digest: str


@dataclass(frozen=True)
class Identity:
    """The verified caller: subject username and granted authorities."""
    username: str
    authorities: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return ADMIN in self.authorities


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    if not hashed_password:
        return False
    pre_hashed = _pre_hash_password(plain_password)
    try:
        return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt digest
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password.
    Pre-hashes with SHA256 first to support passwords longer than 72 bytes.
    """
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


@lru_cache(maxsize=1)
def _dummy_digest() -> str:
    return get_password_hash("tracknest-timing-equaliser")


def check_credentials(plain_password: str, credentials: Optional[Credentials]) -> bool:
    """
    Verify a login attempt.

    When the user does not exist a dummy digest is still checked so that the
    response time does not depend on whether the username is known.
    """
    if credentials is None:
        verify_password(plain_password, _dummy_digest())
        return False
    return verify_password(plain_password, credentials.digest)


def create_access_token(
    username: str,
    authorities: Iterable[str],
    expires_delta: Optional[timedelta] = None
) -> Tuple[str, datetime]:
    """Create a JWT access token. Returns the token and its expiry time."""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = now + expires_delta
    to_encode = {
        "sub": username,
        "authorities": sorted(set(authorities)),
        "iss": settings.TOKEN_ISSUER,
        "iat": now,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt, expire


def verify_access_token(token: str) -> Identity:
    """Validate signature, expiry and issuer and return the caller identity."""
    if not token:
        raise AuthError("Missing bearer token")
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            issuer=settings.TOKEN_ISSUER,
        )
    except ExpiredSignatureError:
        raise AuthError("Token has expired")
    except JWTError:
        raise AuthError("Invalid token")

    username = payload.get("sub")
    if not isinstance(username, str) or not username:
        raise AuthError("Invalid token")

    authorities = payload.get("authorities") or []
    if not isinstance(authorities, list) or not all(isinstance(a, str) for a in authorities):
        raise AuthError("Invalid token")

    return Identity(username=username, authorities=frozenset(authorities))
