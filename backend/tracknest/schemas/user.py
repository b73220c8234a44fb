"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class UserCreate(BaseModel):
    """Schema for user registration."""
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)
    role: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for user response. The password digest is never included."""
    username: str
    role: Optional[str] = None
    roles: List[str] = []

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        roles = user.role_names
        return cls(username=user.username, role=roles[0] if roles else None, roles=roles)
