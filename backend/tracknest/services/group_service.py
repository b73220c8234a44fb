"""
Entry group service.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement
from tracknest.core.authorization import check_owner
from tracknest.core.exceptions import NotFound, ValidationFailed
from tracknest.core.security import Identity
from tracknest.db.session import db_errors
from tracknest.models.entry import EntryGroup
from tracknest.schemas.entry import EntryGroupCreate, EntryGroupUpdate
from tracknest.services.user_service import require_account

logger = logging.getLogger(__name__)


def list_groups(db: Session, *criteria: Optional[ColumnElement]) -> List[EntryGroup]:
    """Groups matching every given predicate; None predicates are skipped."""
    with db_errors(db, "list groups"):
        query = db.query(EntryGroup)
        for criterion in criteria:
            if criterion is not None:
                query = query.filter(criterion)
        return query.order_by(EntryGroup.id).all()


def get_group(db: Session, group_id: int) -> Optional[EntryGroup]:
    with db_errors(db, "load group"):
        return db.query(EntryGroup).filter(EntryGroup.id == group_id).first()


def require_group(db: Session, group_id: int) -> EntryGroup:
    group = get_group(db, group_id)
    if group is None:
        raise NotFound(f"Entry group not found with id {group_id}")
    return group


def create_group(db: Session, identity: Identity, data: EntryGroupCreate) -> EntryGroup:
    """Create a group owned by the caller."""
    require_account(db, identity)
    group = EntryGroup(
        name=data.name,
        description=data.description,
        visibility=data.visibility,
        created_by=identity.username
    )
    with db_errors(db, "create group"):
        db.add(group)
        db.commit()
        db.refresh(group)
    logger.info(f"User '{identity.username}' created group {group.id}")
    return group


def update_group(db: Session, identity: Identity, group_id: int, data: EntryGroupUpdate) -> EntryGroup:
    """Apply the provided fields to an existing group. The owner never changes."""
    group = require_group(db, group_id)
    check_owner(identity, group.created_by)

    changes = data.model_dump(exclude_unset=True)
    for key in ("name", "visibility"):
        if key in changes and changes[key] is None:
            raise ValidationFailed(f"Field '{key}' must not be null")

    with db_errors(db, "update group"):
        for key, value in changes.items():
            setattr(group, key, value)
        db.commit()
        db.refresh(group)
    return group


def delete_group(db: Session, identity: Identity, group_id: int) -> None:
    """Delete a group and every entry filed in it."""
    group = require_group(db, group_id)
    check_owner(identity, group.created_by)
    with db_errors(db, "delete group"):
        db.delete(group)
        db.commit()
    logger.info(f"User '{identity.username}' deleted group {group_id}")
