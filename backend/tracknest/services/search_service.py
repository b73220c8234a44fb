"""
Search over entries and groups.

The searchable entry fields are a fixed allow-list of mapped columns. A field
name from the request is only ever used to look up a column here; it never
reaches the SQL text as a string. Search terms are bound parameters.
"""
import logging
from typing import Dict, List, Optional
from sqlalchemy import String, func, literal
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement
from tracknest.core.authorization import entry_scope
from tracknest.core.exceptions import ValidationFailed
from tracknest.core.security import Identity
from tracknest.models.entry import Entry, EntryGroup
from tracknest.services.entry_service import list_entries

logger = logging.getLogger(__name__)

SEARCHABLE_ENTRY_FIELDS: Dict[str, InstrumentedAttribute] = {
    "title": Entry.title,
    "description": Entry.description,
    "type": Entry.type,
}

LIKE_ESCAPE = "\\"


def resolve_entry_field(field: str) -> InstrumentedAttribute:
    """Map a requested field name onto its column, or fail with 400."""
    column = SEARCHABLE_ENTRY_FIELDS.get(field)
    if column is None:
        allowed = ", ".join(sorted(SEARCHABLE_ENTRY_FIELDS))
        raise ValidationFailed(f"Invalid search field: {field}. Allowed fields: {allowed}")
    return column


def contains_pattern(query: str) -> str:
    """LIKE pattern matching ``query`` anywhere, wildcards escaped."""
    escaped = (
        query
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def contains_match(column, query: str) -> ColumnElement:
    """
    ``LOWER(column) LIKE LOWER('%query%')`` with the term bound as a parameter.

    Both sides are folded by the database so they agree on which characters
    have a lower case.
    """
    pattern = literal(contains_pattern(query), String)
    return func.lower(column, type_=String).like(func.lower(pattern, type_=String), escape=LIKE_ESCAPE)


def search_entries(db: Session, identity: Identity, field: str, query: str) -> List[Entry]:
    """Entries visible to the caller whose ``field`` contains ``query``."""
    column = resolve_entry_field(field)
    logger.debug(f"Entry search by '{identity.username}' on {field}")
    return list_entries(db, entry_scope(identity), contains_match(column, query))


def group_name_filter(search: Optional[str]) -> Optional[ColumnElement]:
    """Name filter for group listings; blank input means no filter."""
    if search is None or not search.strip():
        return None
    return contains_match(EntryGroup.name, search)
