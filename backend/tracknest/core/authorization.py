"""
Access-control policy.

Every route declares the operation it performs; ``authorize`` decides whether
the caller may perform it at all. For list and search operations the policy
does not filter results itself: ``entry_scope`` and ``group_scope`` return
SQL predicates that the persistence layer adds to its WHERE clause, so rows a
caller may not see are never loaded.
"""
import enum
from typing import Dict, Optional, Tuple

from sqlalchemy import or_, true
from sqlalchemy.sql.elements import ColumnElement

from tracknest.core.exceptions import AuthError, PolicyDenied
from tracknest.core.security import Identity
from tracknest.models.entry import Entry, EntryGroup, Visibility

DEFAULT_ROLE = "USER"


class Operation(str, enum.Enum):
    REGISTER_USER = "register_user"
    MANAGE_USERS = "manage_users"
    READ_PROFILE = "read_profile"
    CHANGE_OWN_PASSWORD = "change_own_password"
    LIST_ENTRIES = "list_entries"
    SEARCH_ENTRIES = "search_entries"
    READ_USER_CONTENT = "read_user_content"
    LIST_GROUPS = "list_groups"
    CREATE_CONTENT = "create_content"
    UPDATE_CONTENT = "update_content"
    DELETE_CONTENT = "delete_content"


# operation -> (anonymous, authenticated, admin)
POLICY: Dict[Operation, Tuple[bool, bool, bool]] = {
    Operation.REGISTER_USER: (True, True, True),
    Operation.MANAGE_USERS: (False, False, True),
    Operation.READ_PROFILE: (False, True, True),
    Operation.CHANGE_OWN_PASSWORD: (False, True, True),
    Operation.LIST_ENTRIES: (False, True, True),
    Operation.SEARCH_ENTRIES: (False, True, True),
    Operation.READ_USER_CONTENT: (False, True, True),
    Operation.LIST_GROUPS: (False, True, True),
    Operation.CREATE_CONTENT: (False, True, True),
    Operation.UPDATE_CONTENT: (False, True, True),
    Operation.DELETE_CONTENT: (False, True, True),
}


def is_allowed(identity: Optional[Identity], operation: Operation) -> bool:
    anonymous, authenticated, admin = POLICY[operation]
    if identity is None:
        return anonymous
    if identity.is_admin:
        return admin
    return authenticated


def authorize(identity: Optional[Identity], operation: Operation) -> None:
    """Raise AuthError (no identity) or PolicyDenied when not allowed."""
    if is_allowed(identity, operation):
        return
    if identity is None:
        raise AuthError()
    raise PolicyDenied()


def entry_scope(identity: Identity) -> ColumnElement:
    """Rows of ``entries`` the caller may read."""
    if identity.is_admin:
        return true()
    return or_(Entry.created_by == identity.username, Entry.visibility == Visibility.PUBLIC)


def group_scope(identity: Identity) -> ColumnElement:
    """Rows of ``entry_groups`` the caller may read."""
    if identity.is_admin:
        return true()
    return or_(EntryGroup.created_by == identity.username, EntryGroup.visibility == Visibility.PUBLIC)


def owned_groups_scope(identity: Identity) -> ColumnElement:
    """Groups shown on the caller's own group listing."""
    if identity.is_admin:
        return true()
    return EntryGroup.created_by == identity.username


def can_read(identity: Identity, created_by: str, visibility: Visibility) -> bool:
    """In-memory counterpart of the scope predicates, for single-row checks."""
    return identity.is_admin or created_by == identity.username or visibility == Visibility.PUBLIC


def check_owner(identity: Identity, created_by: str) -> None:
    """Mutations on an existing row require ownership or ADMIN."""
    if identity.is_admin or created_by == identity.username:
        return
    raise PolicyDenied("Only the owner may modify this resource")


def check_role_request(identity: Optional[Identity], role: Optional[str]) -> str:
    """
    Resolve the role assigned at registration.

    Only administrators may hand out roles other than the default one.
    """
    requested = (role or "").strip().upper() or DEFAULT_ROLE
    if requested == DEFAULT_ROLE:
        return requested
    if identity is not None and identity.is_admin:
        return requested
    raise PolicyDenied(f"Only administrators may assign role {requested}")
