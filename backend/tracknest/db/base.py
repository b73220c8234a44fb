"""
SQLAlchemy declarative base shared by all models.
"""
from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BaseModel(Base):
    """Abstract base for tables with a server-assigned integer id."""
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
