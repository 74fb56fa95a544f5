from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..models import MAX_ORDER, TaskPriority
from .base import CamelModel, ReadModel, as_utc


def _blank_to_none(value):
    # An empty dueDate clears the field, same as null
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TaskCreate(CamelModel):
    task_list_id: str
    title: str = Field(..., max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: Optional[datetime] = None
    priority: Optional[TaskPriority] = None
    notes: Optional[str] = Field(None, max_length=5000)
    color: Optional[str] = Field(None, max_length=32)
    order: Optional[int] = Field(None, ge=0, le=MAX_ORDER)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value):
        return _blank_to_none(value)


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: Optional[datetime] = None
    priority: Optional[TaskPriority] = None
    notes: Optional[str] = Field(None, max_length=5000)
    color: Optional[str] = Field(None, max_length=32)
    completed: Optional[bool] = None
    order: Optional[int] = Field(None, ge=0, le=MAX_ORDER)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value):
        return _blank_to_none(value)


class TaskMove(CamelModel):
    new_task_list_id: str
    new_order: Optional[int] = Field(None, ge=0, le=MAX_ORDER)


class TaskOrder(CamelModel):
    task_id: str
    order: int = Field(..., ge=0, le=MAX_ORDER)


class TaskReorderRequest(CamelModel):
    task_orders: List[TaskOrder] = Field(..., min_length=1)


class TaskRead(ReadModel):
    id: str
    user_id: str
    task_list_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: TaskPriority
    notes: Optional[str] = None
    color: Optional[str] = None
    completed: bool
    order: int
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def attach_utc(cls, value):
        return as_utc(value)


class TaskEnvelope(CamelModel):
    task: TaskRead


class TasksEnvelope(CamelModel):
    tasks: List[TaskRead]


class UpcomingTasksEnvelope(TasksEnvelope):
    days: int


class OverdueTasksEnvelope(TasksEnvelope):
    count: int


class PriorityTasksEnvelope(TasksEnvelope):
    priority: TaskPriority
