"""
Entry group routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from tracknest.db.session import get_db
from tracknest.core.authorization import Operation, group_scope, owned_groups_scope
from tracknest.core.security import Identity
from tracknest.models.entry import EntryGroup
from tracknest.schemas.entry import EntryGroupCreate, EntryGroupResponse, EntryGroupUpdate
from tracknest.services import group_service
from tracknest.services.search_service import group_name_filter
from tracknest.api.dependencies import require

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("", response_model=List[EntryGroupResponse])
def list_groups(
    search: Optional[str] = None,
    identity: Identity = Depends(require(Operation.LIST_GROUPS)),
    db: Session = Depends(get_db)
):
    """Administrators get every group; other users get their own."""
    return group_service.list_groups(db, owned_groups_scope(identity), group_name_filter(search))


@router.get("/user/{username}", response_model=List[EntryGroupResponse])
def list_groups_by_user(
    username: str,
    identity: Identity = Depends(require(Operation.READ_USER_CONTENT)),
    db: Session = Depends(get_db)
):
    """Groups created by a user, limited to what the caller may see."""
    return group_service.list_groups(db, EntryGroup.created_by == username, group_scope(identity))


@router.post("", response_model=EntryGroupResponse)
def create_group(
    group_data: EntryGroupCreate,
    identity: Identity = Depends(require(Operation.CREATE_CONTENT)),
    db: Session = Depends(get_db)
):
    """Create a group owned by the caller."""
    return group_service.create_group(db, identity, group_data)


@router.put("/{group_id}", response_model=EntryGroupResponse)
def update_group(
    group_id: int,
    group_data: EntryGroupUpdate,
    identity: Identity = Depends(require(Operation.UPDATE_CONTENT)),
    db: Session = Depends(get_db)
):
    """Update a group."""
    return group_service.update_group(db, identity, group_id, group_data)


@router.delete("/{group_id}")
def delete_group(
    group_id: int,
    identity: Identity = Depends(require(Operation.DELETE_CONTENT)),
    db: Session = Depends(get_db)
):
    """Delete a group together with its entries."""
    group_service.delete_group(db, identity, group_id)
