"""
Routes acting on the caller's own account.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from tracknest.db.session import get_db
from tracknest.core.authorization import Operation
from tracknest.core.security import Identity
from tracknest.schemas.user import UserResponse
from tracknest.services import user_service
from tracknest.api.dependencies import get_current_identity, read_text_body, require

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserResponse)
def get_profile(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get the current user's profile."""
    return UserResponse.from_user(user_service.require_account(db, identity))


@router.get("/roles", response_model=List[str])
def get_profile_roles(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Roles of the current user."""
    return user_service.get_roles(db, identity.username)


@router.put("/change-password", response_model=UserResponse)
def change_password(
    identity: Identity = Depends(require(Operation.CHANGE_OWN_PASSWORD)),
    new_password: str = Depends(read_text_body),
    db: Session = Depends(get_db)
):
    """Change the current user's password. The body is the raw new password."""
    user_service.require_account(db, identity)
    user = user_service.update_password(db, identity.username, new_password)
    return UserResponse.from_user(user)
