from datetime import datetime
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from .base import UTCDateTime, new_id, utcnow


class TaskList(SQLModel, table=True):
    """A named, ordered container of tasks owned by one user.

    Attributes:
        id: Unique identifier for the list
        user_id: Owning user
        name: Display name (required)
        description: Optional description
        color: Optional display color
        order: Position among the user's lists; gaps are allowed
        created_at: Timestamp when the list was created
        updated_at: Timestamp when the list was last updated
    """
    __tablename__ = "task_lists"
    __table_args__ = (
        Index("ix_task_lists_user_order", "user_id", "order"),
        Index("ix_task_lists_user_created", "user_id", "created_at"),
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(max_length=36)
    name: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    color: Optional[str] = Field(default=None, max_length=32)
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
