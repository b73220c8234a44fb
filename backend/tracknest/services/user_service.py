"""
User service for account and role persistence.
"""
import logging
from typing import List, Optional
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tracknest.core.exceptions import AuthError, Conflict, NotFound, PersistenceError, ValidationFailed
from tracknest.core.security import Credentials, Identity, get_password_hash
from tracknest.db.session import db_errors
from tracknest.models.entry import Entry, EntryGroup
from tracknest.models.user import User, Role

logger = logging.getLogger(__name__)


def normalize_role(role: str) -> str:
    """Roles are stored upper-cased."""
    value = (role or "").strip().upper()
    if not value:
        raise ValidationFailed("Role must not be empty")
    return value


def list_users(db: Session) -> List[User]:
    """All users ordered by username."""
    with db_errors(db, "list users"):
        return db.query(User).order_by(User.username).all()


def get_user(db: Session, username: str) -> Optional[User]:
    with db_errors(db, "load user"):
        return db.query(User).filter(User.username == username).first()


def require_user(db: Session, username: str) -> User:
    user = get_user(db, username)
    if user is None:
        raise NotFound(f"User {username} not found")
    return user


def require_account(db: Session, identity: Identity) -> User:
    """The caller's own account. A token outliving its deleted user is a 401."""
    user = get_user(db, identity.username)
    if user is None:
        raise AuthError("Account no longer exists")
    return user


def get_credentials(db: Session, username: str) -> Optional[Credentials]:
    """Stored username and digest, or None for an unknown user."""
    user = get_user(db, username)
    if user is None:
        return None
    return Credentials(username=user.username, digest=user.password)


def create_user(db: Session, username: str, password: str, role: Optional[str] = None) -> User:
    """Create a user with a hashed password and an optional initial role."""
    if not username:
        raise ValidationFailed("Username must not be empty")
    if not password:
        raise ValidationFailed("Password must not be empty")

    if get_user(db, username) is not None:
        raise Conflict("Username already exists")

    user = User(username=username, password=get_password_hash(password))
    if role:
        user.roles.append(Role(role=normalize_role(role)))

    with db_errors(db, "create user"):
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            db.rollback()
            raise Conflict("Username already exists")
        db.refresh(user)

    logger.info(f"Created user '{username}' with roles {user.role_names}")
    return user


def update_password(db: Session, username: str, new_password: str) -> User:
    """Replace a user's password digest."""
    if not new_password:
        raise ValidationFailed("Password must not be empty")
    user = require_user(db, username)
    with db_errors(db, "update password"):
        user.password = get_password_hash(new_password)
        db.commit()
        db.refresh(user)
    logger.info(f"Password changed for user '{username}'")
    return user


def delete_user(db: Session, username: str) -> int:
    """
    Delete a user together with everything it owns.

    Entries filed in the user's groups are removed with those groups, even
    when another user created them. Returns the number of users deleted.
    """
    user = get_user(db, username)
    if user is None:
        return 0

    with db_errors(db, "delete user"):
        owned_groups = select(EntryGroup.id).where(EntryGroup.created_by == username)
        db.query(Entry).filter(
            or_(Entry.created_by == username, Entry.group_id.in_(owned_groups))
        ).delete(synchronize_session=False)
        db.query(EntryGroup).filter(
            EntryGroup.created_by == username
        ).delete(synchronize_session=False)
        db.delete(user)
        db.commit()

    logger.info(f"Deleted user '{username}'")
    return 1


def get_roles(db: Session, username: str) -> List[str]:
    with db_errors(db, "list roles"):
        rows = db.query(Role.role).filter(Role.username == username).order_by(Role.role).all()
    return [row.role for row in rows]


def add_role(db: Session, username: str, role: str) -> List[str]:
    """
    Grant a role. Granting a role the user already has is a no-op.

    Returns the user's roles afterwards.
    """
    role = normalize_role(role)
    require_user(db, username)

    with db_errors(db, "add role"):
        exists = db.query(Role).filter(Role.username == username, Role.role == role).first()
        if exists is None:
            db.add(Role(username=username, role=role))
            try:
                db.commit()
                logger.info(f"Granted role {role} to '{username}'")
            except IntegrityError as e:
                db.rollback()
                # A concurrent grant of the same role is fine, anything else is not
                granted = db.query(Role).filter(Role.username == username, Role.role == role).first()
                if granted is None:
                    logger.error(f"Failed to grant role {role} to '{username}': {e}")
                    raise PersistenceError("Failed to add role") from e

    return get_roles(db, username)


def remove_role(db: Session, username: str, role: str) -> int:
    """Revoke a role. Returns the number of rows removed."""
    role = normalize_role(role)
    with db_errors(db, "remove role"):
        deleted = db.query(Role).filter(
            Role.username == username,
            Role.role == role
        ).delete(synchronize_session=False)
        db.commit()
    if deleted:
        logger.info(f"Revoked role {role} from '{username}'")
    return deleted
