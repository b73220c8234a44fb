"""
Known fixtures for development and tests.

Users and passwords: admin/admin and test-admin/admin (ADMIN),
alice/alice, bob/bob and carol/carol (USER). Every group and entry is
PRIVATE, so a non-admin sees exactly its own rows.
"""
import logging
from datetime import date
from sqlalchemy.orm import Session
from tracknest.core.security import get_password_hash
from tracknest.models.entry import Entry, EntryGroup, EntryType, Visibility
from tracknest.models.user import User, Role

logger = logging.getLogger(__name__)

USERS = [
    ("admin", "admin", "ADMIN"),
    ("alice", "alice", "USER"),
    ("bob", "bob", "USER"),
    ("carol", "carol", "USER"),
    ("test-admin", "admin", "ADMIN"),
]

# (name, description, owner)
GROUPS = [
    ("Morning Training", "Runs and gym sessions before work", "alice"),
    ("Weekend Activities", "Longer sessions on Saturdays and Sundays", "alice"),
    ("Bob's Health Log", "Meals and how I feel", "bob"),
    ("Carol's Journal", None, "carol"),
]

# (title, type, description, date, owner, group index)
ENTRIES = [
    ("Morning Run", EntryType.WORKOUT, "5k easy pace around the park", date(2025, 5, 1), "alice", 0),
    ("Leg Day", EntryType.WORKOUT, "Squats and lunges, 4 sets each", date(2025, 5, 3), "alice", 0),
    ("Evening Swim", EntryType.WORKOUT, "30 minutes freestyle", date(2025, 5, 10), "alice", 1),
    ("Breakfast", EntryType.DIET, "Oatmeal with berries", date(2025, 5, 2), "bob", 2),
    ("Headache", EntryType.SYMPTOM, "Mild headache after lunch", date(2025, 5, 4), "bob", 2),
    ("Doctor Visit", EntryType.OTHER, "Annual check-up", date(2025, 5, 6), "carol", 3),
    ("Cycling", EntryType.WORKOUT, "Hill repeats, 20 km", date(2025, 5, 8), "carol", 3),
]


def seed_fixtures(db: Session) -> bool:
    """Insert the fixtures into an empty database. Returns False if users exist."""
    if db.query(User).first() is not None:
        logger.info("Database already has users; skipping fixture seed")
        return False

    for username, password, role in USERS:
        user = User(username=username, password=get_password_hash(password))
        user.roles.append(Role(role=role))
        db.add(user)
    db.flush()

    groups = []
    for name, description, owner in GROUPS:
        group = EntryGroup(
            name=name,
            description=description,
            visibility=Visibility.PRIVATE,
            created_by=owner
        )
        db.add(group)
        # Flush one at a time so ids follow list order
        db.flush()
        groups.append(group)

    for title, entry_type, description, entry_date, owner, group_index in ENTRIES:
        db.add(Entry(
            title=title,
            type=entry_type,
            description=description,
            visibility=Visibility.PRIVATE,
            date=entry_date,
            created_by=owner,
            group_id=groups[group_index].id
        ))
        db.flush()

    db.commit()
    logger.info(f"Seeded {len(USERS)} users, {len(GROUPS)} groups and {len(ENTRIES)} entries")
    return True
