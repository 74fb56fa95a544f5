import logging

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..crud import TaskListStorage, delete_task_list_cascade
from ..db.session import get_session
from ..dependencies.auth import get_current_user
from ..errors import ForbiddenError, NotFoundOrUnauthorizedError
from ..models import User, parse_id
from ..schemas.base import ReorderResponse
from ..schemas.task_list import (
    TaskListCreate,
    TaskListDeleteResponse,
    TaskListEnvelope,
    TaskListReorderRequest,
    TaskListsEnvelope,
    TaskListUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_storage(session: Session = Depends(get_session)) -> TaskListStorage:
    return TaskListStorage(session)


@router.get("", response_model=TaskListsEnvelope)
def list_task_lists(
    user: User = Depends(get_current_user),
    storage: TaskListStorage = Depends(get_storage),
):
    return {"task_lists": storage.get_task_lists_by_user(user.id)}


@router.post("", response_model=TaskListEnvelope, status_code=status.HTTP_201_CREATED)
def create_task_list(
    payload: TaskListCreate,
    user: User = Depends(get_current_user),
    storage: TaskListStorage = Depends(get_storage),
):
    task_list = storage.create_task_list(
        user_id=user.id,
        name=payload.name,
        description=payload.description,
        color=payload.color,
        order=payload.order,
    )
    return {"task_list": task_list}


@router.post("/reorder", response_model=ReorderResponse)
def reorder_task_lists(
    payload: TaskListReorderRequest,
    user: User = Depends(get_current_user),
    storage: TaskListStorage = Depends(get_storage),
):
    orders = [
        (parse_id(entry.task_list_id, "taskListId in taskListOrders"), entry.order)
        for entry in payload.task_list_orders
    ]
    result = storage.reorder_task_lists(user.id, orders)
    return {
        "success": True,
        "message": "Task lists reordered successfully",
        "updated_count": result.updated_count,
        "skipped_ids": result.skipped_ids,
    }


@router.get("/{task_list_id}", response_model=TaskListEnvelope)
def get_task_list(
    task_list_id: str,
    user: User = Depends(get_current_user),
    storage: TaskListStorage = Depends(get_storage),
):
    task_list = storage.get_task_list_by_id(parse_id(task_list_id, "task list ID"))
    if task_list is None:
        raise NotFoundOrUnauthorizedError("Task list not found")
    if task_list.user_id != user.id:
        raise ForbiddenError("Forbidden")
    return {"task_list": task_list}


@router.put("/{task_list_id}", response_model=TaskListEnvelope)
def update_task_list(
    task_list_id: str,
    payload: TaskListUpdate,
    user: User = Depends(get_current_user),
    storage: TaskListStorage = Depends(get_storage),
):
    task_list_id = parse_id(task_list_id, "task list ID")
    task_list = storage.update_task_list(
        task_list_id, user.id, payload.model_dump(exclude_unset=True)
    )
    if task_list is None:
        raise NotFoundOrUnauthorizedError("Task list not found or unauthorized")
    return {"task_list": task_list}


@router.delete("/{task_list_id}", response_model=TaskListDeleteResponse)
def delete_task_list(
    task_list_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Delete a task list and every task in it."""
    result = delete_task_list_cascade(session, parse_id(task_list_id, "task list ID"), user.id)
    if not result.deleted:
        raise NotFoundOrUnauthorizedError("Task list not found or unauthorized")
    return {
        "success": True,
        "message": "Task list deleted successfully",
        "deleted_tasks_count": result.deleted_tasks_count,
    }
