"""
Journal entry routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from tracknest.db.session import get_db
from tracknest.core.authorization import Operation, entry_scope
from tracknest.core.security import Identity
from tracknest.schemas.entry import EntryCreate, EntryResponse, EntryUpdate
from tracknest.services import entry_service, search_service
from tracknest.api.dependencies import require

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("", response_model=List[EntryResponse])
def list_entries(
    identity: Identity = Depends(require(Operation.LIST_ENTRIES)),
    db: Session = Depends(get_db)
):
    """Administrators get every entry; other users get their own and public ones."""
    entries = entry_service.list_entries(db, entry_scope(identity))
    return [EntryResponse.for_caller(e, identity) for e in entries]


@router.get("/search", response_model=List[EntryResponse])
def search_entries(
    field: str,
    query: str,
    identity: Identity = Depends(require(Operation.SEARCH_ENTRIES)),
    db: Session = Depends(get_db)
):
    """Case-insensitive contains search on title, description or type."""
    entries = search_service.search_entries(db, identity, field, query)
    return [EntryResponse.for_caller(e, identity) for e in entries]


@router.get("/user/{username}", response_model=List[EntryResponse])
def list_entries_by_user(
    username: str,
    identity: Identity = Depends(require(Operation.READ_USER_CONTENT)),
    db: Session = Depends(get_db)
):
    """Entries created by a user, limited to what the caller may see."""
    entries = entry_service.list_entries_by_owner(db, username, entry_scope(identity))
    return [EntryResponse.for_caller(e, identity) for e in entries]


@router.post("", response_model=EntryResponse)
def create_entry(
    entry_data: EntryCreate,
    identity: Identity = Depends(require(Operation.CREATE_CONTENT)),
    db: Session = Depends(get_db)
):
    """Create an entry owned by the caller."""
    entry = entry_service.create_entry(db, identity, entry_data)
    return EntryResponse.for_caller(entry, identity)


@router.put("/{entry_id}", response_model=EntryResponse)
def update_entry(
    entry_id: int,
    entry_data: EntryUpdate,
    identity: Identity = Depends(require(Operation.UPDATE_CONTENT)),
    db: Session = Depends(get_db)
):
    """Update an entry."""
    entry = entry_service.update_entry(db, identity, entry_id, entry_data)
    return EntryResponse.for_caller(entry, identity)


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: int,
    identity: Identity = Depends(require(Operation.DELETE_CONTENT)),
    db: Session = Depends(get_db)
):
    """Delete an entry."""
    entry_service.delete_entry(db, identity, entry_id)
