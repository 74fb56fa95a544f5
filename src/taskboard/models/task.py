from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from .base import UTCDateTime, new_id, utcnow


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Task(SQLModel, table=True):
    """A unit of work belonging to exactly one task list.

    ``user_id`` is denormalized from the owning list so every query and
    mutation can be scoped by owner without a join. It is kept in sync by
    the task store, not by a foreign key.
    """
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_list_order", "task_list_id", "order"),
        Index("ix_tasks_user", "user_id"),
        Index("ix_tasks_user_completed", "user_id", "completed"),
        Index("ix_tasks_user_due", "user_id", "due_date"),
        Index("ix_tasks_user_priority", "user_id", "priority"),
        Index("ix_tasks_user_due_completed", "user_id", "due_date", "completed"),
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(max_length=36)
    task_list_id: str = Field(max_length=36)
    title: str = Field(max_length=500)
    description: Optional[str] = Field(default=None, max_length=2000)
    notes: Optional[str] = Field(default=None, max_length=5000)
    color: Optional[str] = Field(default=None, max_length=32)
    due_date: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    completed: bool = Field(default=False)
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
