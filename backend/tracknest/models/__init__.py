"""Models package - Import all models for SQLAlchemy registration."""
from tracknest.models.user import User, Role
from tracknest.models.entry import Entry, EntryGroup, EntryType, Visibility

__all__ = [
    "User",
    "Role",
    "Entry",
    "EntryGroup",
    "EntryType",
    "Visibility",
]
