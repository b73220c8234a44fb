"""
Entry service for entry-related persistence.

Every read joins the owning group so responses carry it without a second
round-trip.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session, contains_eager
from sqlalchemy.sql.elements import ColumnElement
from tracknest.core.authorization import can_read, check_owner
from tracknest.core.exceptions import NotFound, ValidationFailed
from tracknest.core.security import Identity
from tracknest.db.session import db_errors
from tracknest.models.entry import Entry, EntryGroup
from tracknest.schemas.entry import EntryCreate, EntryUpdate
from tracknest.services.group_service import get_group
from tracknest.services.user_service import require_account

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "type", "visibility", "date", "group")


def _entries_with_group(db: Session):
    return db.query(Entry).join(Entry.group).options(contains_eager(Entry.group))


def list_entries(db: Session, *criteria: ColumnElement) -> List[Entry]:
    """Entries matching every given predicate, with their groups."""
    with db_errors(db, "list entries"):
        query = _entries_with_group(db)
        for criterion in criteria:
            query = query.filter(criterion)
        return query.order_by(Entry.id).all()


def list_entries_by_owner(db: Session, username: str, scope: ColumnElement) -> List[Entry]:
    """Entries created by ``username`` that are also inside the caller's scope."""
    return list_entries(db, Entry.created_by == username, scope)


def get_entry(db: Session, entry_id: int) -> Optional[Entry]:
    with db_errors(db, "load entry"):
        return _entries_with_group(db).filter(Entry.id == entry_id).first()


def require_entry(db: Session, entry_id: int) -> Entry:
    entry = get_entry(db, entry_id)
    if entry is None:
        raise NotFound(f"Entry not found with id {entry_id}")
    return entry


def resolve_group(db: Session, identity: Identity, group_id: int) -> EntryGroup:
    """The group an entry is filed under must exist and be readable by the caller."""
    group = get_group(db, group_id)
    if group is None or not can_read(identity, group.created_by, group.visibility):
        raise ValidationFailed(f"Entry group {group_id} does not exist")
    return group


def create_entry(db: Session, identity: Identity, data: EntryCreate) -> Entry:
    """Create an entry owned by the caller."""
    require_account(db, identity)
    group = resolve_group(db, identity, data.group.id)
    entry = Entry(
        title=data.title,
        type=data.type,
        description=data.description,
        visibility=data.visibility,
        date=data.date,
        created_by=identity.username,
        group_id=group.id
    )
    with db_errors(db, "create entry"):
        db.add(entry)
        db.commit()
        entry_id = entry.id
    logger.info(f"User '{identity.username}' created entry {entry_id}")
    return require_entry(db, entry_id)


def update_entry(db: Session, identity: Identity, entry_id: int, data: EntryUpdate) -> Entry:
    """
    Apply the provided fields to an existing entry.

    Existence and ownership are checked before the body, so an unknown id is
    a 404 whatever was sent. ``created_by`` is never touched.
    """
    entry = require_entry(db, entry_id)
    check_owner(identity, entry.created_by)

    changes = data.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in changes and changes[key] is None:
            raise ValidationFailed(f"Field '{key}' must not be null")

    group_ref = changes.pop("group", None)
    group_id = entry.group_id
    if group_ref is not None:
        group_id = resolve_group(db, identity, group_ref["id"]).id

    with db_errors(db, "update entry"):
        for key, value in changes.items():
            setattr(entry, key, value)
        entry.group_id = group_id
        db.commit()
    return require_entry(db, entry_id)


def delete_entry(db: Session, identity: Identity, entry_id: int) -> None:
    entry = require_entry(db, entry_id)
    check_owner(identity, entry.created_by)
    with db_errors(db, "delete entry"):
        db.delete(entry)
        db.commit()
    logger.info(f"User '{identity.username}' deleted entry {entry_id}")
