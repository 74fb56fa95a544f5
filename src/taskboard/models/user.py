from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from .base import UTCDateTime, new_id, utcnow


class User(SQLModel, table=True):
    """An account created on first sign-in through the identity provider."""
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    external_id: str = Field(unique=True, index=True, max_length=255)
    email: str = Field(unique=True, index=True, max_length=320)
    name: str = Field(max_length=200)
    picture: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
