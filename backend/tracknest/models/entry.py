"""
Journal entry and entry group models.
"""
from sqlalchemy import Column, String, Date, Text, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from tracknest.db.base import BaseModel
import enum


class Visibility(str, enum.Enum):
    """Who may read a row besides its owner and administrators."""
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class EntryType(str, enum.Enum):
    """Entry category."""
    WORKOUT = "Workout"
    DIET = "Diet"
    SYMPTOM = "Symptom"
    OTHER = "Other"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class EntryGroup(BaseModel):
    """Named container for a user's entries."""
    __tablename__ = "entry_groups"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    visibility = Column(
        SQLEnum(Visibility, native_enum=False, length=16, values_callable=_enum_values),
        nullable=False,
        default=Visibility.PRIVATE
    )
    created_by = Column(String(50), ForeignKey("users.username"), nullable=False, index=True)

    # Relationships
    entries = relationship("Entry", back_populates="group", cascade="all, delete-orphan")


class Entry(BaseModel):
    """Dated, categorised note owned by one user."""
    __tablename__ = "entries"

    title = Column(String(200), nullable=False)
    type = Column(
        SQLEnum(EntryType, native_enum=False, length=16, values_callable=_enum_values),
        nullable=False
    )
    description = Column(Text, nullable=True)
    visibility = Column(
        SQLEnum(Visibility, native_enum=False, length=16, values_callable=_enum_values),
        nullable=False,
        default=Visibility.PRIVATE
    )
    date = Column(Date, nullable=False, index=True)
    created_by = Column(String(50), ForeignKey("users.username"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("entry_groups.id"), nullable=False, index=True)

    # Relationships
    group = relationship("EntryGroup", back_populates="entries")
