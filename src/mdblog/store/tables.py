"""Database table definitions for the SQL-backed post store"""

from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class PostRow(SQLModel, table=True):
    """Raw post text keyed by slug; content hash drives change detection on sync"""
    __tablename__ = "posts"
    slug: str = Field(primary_key=True)
    raw: str = Field(..., sa_column=Column(Text, nullable=False))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
