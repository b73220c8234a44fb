"""
User and role models for authentication and user management.
"""
from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from tracknest.db.base import Base


class User(Base):
    """User account keyed by its case-sensitive username."""
    __tablename__ = "users"

    username = Column(String(50), primary_key=True)
    password = Column(String(255), nullable=False)  # bcrypt digest, never plaintext

    # Relationships
    roles = relationship("Role", back_populates="user", cascade="all, delete-orphan")

    @property
    def role_names(self):
        return sorted(r.role for r in self.roles)


class Role(Base):
    """Role assignment; (username, role) is unique."""
    __tablename__ = "roles"

    username = Column(String(50), ForeignKey("users.username"), primary_key=True)
    role = Column(String(50), primary_key=True)

    # Relationships
    user = relationship("User", back_populates="roles")
