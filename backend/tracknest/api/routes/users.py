"""
User management routes.

Registration is public; everything else requires ADMIN.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from tracknest.db.session import get_db
from tracknest.core.authorization import Operation, authorize, check_role_request
from tracknest.core.exceptions import NotFound
from tracknest.core.security import Identity
from tracknest.schemas.user import UserCreate, UserResponse
from tracknest.services import user_service
from tracknest.api.dependencies import get_registration_identity, read_text_body, require_admin

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_data: UserCreate,
    identity: Optional[Identity] = Depends(get_registration_identity),
    db: Session = Depends(get_db)
):
    """Register a new user. Only administrators may request a non-default role."""
    authorize(identity, Operation.REGISTER_USER)
    role = check_role_request(identity, user_data.role)
    user = user_service.create_user(db, user_data.username, user_data.password, role)
    return UserResponse.from_user(user)


@router.get("", response_model=List[UserResponse])
def list_users(
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """List all users ordered by username."""
    return [UserResponse.from_user(u) for u in user_service.list_users(db)]


@router.get("/{username}", response_model=UserResponse)
def get_user(
    username: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get user by username."""
    return UserResponse.from_user(user_service.require_user(db, username))


@router.put("/{username}/password", response_model=UserResponse)
def update_password(
    username: str,
    admin: Identity = Depends(require_admin),
    new_password: str = Depends(read_text_body),
    db: Session = Depends(get_db)
):
    """Set a user's password. The body is the raw new password."""
    user = user_service.update_password(db, username, new_password)
    return UserResponse.from_user(user)


@router.delete("/{username}", response_model=int)
def delete_user(
    username: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a user and everything it owns. Returns rows affected."""
    deleted = user_service.delete_user(db, username)
    if not deleted:
        raise NotFound(f"User {username} not found")
    return deleted


@router.get("/{username}/roles", response_model=List[str])
def get_roles(
    username: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """List roles assigned to a user."""
    return user_service.get_roles(db, username)


@router.post("/{username}/roles", response_model=List[str])
def add_role(
    username: str,
    admin: Identity = Depends(require_admin),
    role: str = Depends(read_text_body),
    db: Session = Depends(get_db)
):
    """Grant a role (raw string body). Returns the user's roles."""
    return user_service.add_role(db, username, role)


@router.delete("/{username}/roles/{role}", response_model=int)
def remove_role(
    username: str,
    role: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Revoke a role. Returns rows affected."""
    deleted = user_service.remove_role(db, username, role)
    if not deleted:
        raise NotFound("Role not found")
    return deleted
