from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..models import MAX_ORDER
from .base import CamelModel, ReadModel, StatusResponse, as_utc


class TaskListCreate(CamelModel):
    name: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    color: Optional[str] = Field(None, max_length=32)
    order: Optional[int] = Field(None, ge=0, le=MAX_ORDER)


class TaskListUpdate(CamelModel):
    # Unset fields are left alone; see model_dump(exclude_unset=True)
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    color: Optional[str] = Field(None, max_length=32)
    order: Optional[int] = Field(None, ge=0, le=MAX_ORDER)


class TaskListOrder(CamelModel):
    task_list_id: str
    order: int = Field(..., ge=0, le=MAX_ORDER)


class TaskListReorderRequest(CamelModel):
    task_list_orders: List[TaskListOrder] = Field(..., min_length=1)


class TaskListRead(ReadModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    order: int
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def attach_utc(cls, value):
        return as_utc(value)


class TaskListEnvelope(CamelModel):
    task_list: TaskListRead


class TaskListsEnvelope(CamelModel):
    task_lists: List[TaskListRead]


class TaskListDeleteResponse(StatusResponse):
    deleted_tasks_count: int
