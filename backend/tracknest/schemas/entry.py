"""
Pydantic schemas for Entry and EntryGroup entities.

Wire keys are camelCase (``createdBy``). ``createdBy`` sent by a client is
ignored: input schemas do not declare it.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Union
import datetime as dt
from tracknest.core.authorization import can_read
from tracknest.core.security import Identity
from tracknest.models.entry import EntryType, Visibility


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class GroupRef(CamelModel):
    """Reference to an existing group by id."""
    id: int


class EntryGroupCreate(CamelModel):
    """Schema for group creation."""
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    visibility: Visibility = Visibility.PRIVATE


class EntryGroupUpdate(CamelModel):
    """Schema for group update; omitted fields keep their stored value."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    visibility: Optional[Visibility] = None


class EntryGroupResponse(CamelModel):
    """Schema for group response."""
    id: int
    name: str
    description: Optional[str] = None
    visibility: Visibility
    created_by: str


class RedactedGroup(CamelModel):
    """A group the caller may not read: only its id is shown."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="forbid"
    )

    id: int


class EntryCreate(CamelModel):
    """Schema for entry creation."""
    title: str = Field(min_length=1, max_length=200)
    type: EntryType
    description: Optional[str] = None
    visibility: Visibility = Visibility.PRIVATE
    date: dt.date
    group: GroupRef


class EntryUpdate(CamelModel):
    """Schema for entry update; omitted fields keep their stored value."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    type: Optional[EntryType] = None
    description: Optional[str] = None
    visibility: Optional[Visibility] = None
    date: Optional[dt.date] = None
    group: Optional[GroupRef] = None


class EntryResponse(CamelModel):
    """
    Schema for entry response with its group joined in.

    A PUBLIC entry may sit in a group the caller cannot read; that group is
    then reduced to its id.
    """
    id: int
    title: str
    type: EntryType
    description: Optional[str] = None
    visibility: Visibility
    date: dt.date
    created_by: str
    group: Union[EntryGroupResponse, RedactedGroup]

    @classmethod
    def for_caller(cls, entry, identity: Identity) -> "EntryResponse":
        group = entry.group
        if can_read(identity, group.created_by, group.visibility):
            group_view = EntryGroupResponse.model_validate(group)
        else:
            group_view = RedactedGroup(id=group.id)
        return cls(
            id=entry.id,
            title=entry.title,
            type=entry.type,
            description=entry.description,
            visibility=entry.visibility,
            date=entry.date,
            created_by=entry.created_by,
            group=group_view
        )
