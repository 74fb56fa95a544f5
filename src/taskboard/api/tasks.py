from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from ..crud import TaskStorage
from ..crud.tasks import DEFAULT_UPCOMING_DAYS, MAX_UPCOMING_DAYS
from ..db.session import get_session
from ..dependencies.auth import get_current_user
from ..errors import ForbiddenError, NotFoundOrUnauthorizedError
from ..models import User, parse_id
from ..schemas.base import ReorderResponse, StatusResponse
from ..schemas.task import (
    OverdueTasksEnvelope,
    PriorityTasksEnvelope,
    TaskCreate,
    TaskEnvelope,
    TaskMove,
    TaskReorderRequest,
    TasksEnvelope,
    TaskUpdate,
    UpcomingTasksEnvelope,
)

router = APIRouter()

NOT_FOUND_OR_UNAUTHORIZED = "Task not found or unauthorized"


def get_storage(session: Session = Depends(get_session)) -> TaskStorage:
    return TaskStorage(session)


@router.get("", response_model=TasksEnvelope)
def list_tasks(
    task_list_id: Optional[str] = Query(None, alias="taskListId"),
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    if task_list_id:
        tasks = storage.get_tasks_by_task_list(parse_id(task_list_id, "task list ID"), user.id)
    else:
        tasks = storage.get_tasks_by_user(user.id)
    return {"tasks": tasks}


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    task = storage.create_task(
        task_list_id=parse_id(payload.task_list_id, "taskListId"),
        user_id=user.id,
        title=payload.title,
        description=payload.description,
        due_date=payload.due_date,
        priority=payload.priority,
        notes=payload.notes,
        color=payload.color,
        order=payload.order,
    )
    return {"task": task}


@router.post("/reorder", response_model=ReorderResponse)
def reorder_tasks(
    payload: TaskReorderRequest,
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    orders = [
        (parse_id(entry.task_id, "taskId in taskOrders"), entry.order)
        for entry in payload.task_orders
    ]
    result = storage.reorder_tasks(user.id, orders)
    return {
        "success": True,
        "message": "Tasks reordered successfully",
        "updated_count": result.updated_count,
        "skipped_ids": result.skipped_ids,
    }


@router.get("/upcoming", response_model=UpcomingTasksEnvelope)
def get_upcoming_tasks(
    days: float = Query(DEFAULT_UPCOMING_DAYS, ge=0, le=MAX_UPCOMING_DAYS),
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    """Incomplete tasks due within the next ``days`` days.

    Fractional values are truncated to whole days.
    """
    days = int(days)
    return {"tasks": storage.get_upcoming_tasks(user.id, days), "days": days}


@router.get("/overdue", response_model=OverdueTasksEnvelope)
def get_overdue_tasks(
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    tasks = storage.get_overdue_tasks(user.id)
    return {"tasks": tasks, "count": len(tasks)}


@router.get("/priority/{priority}", response_model=PriorityTasksEnvelope)
def get_tasks_by_priority(
    priority: str,
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    tasks = storage.get_tasks_by_priority(user.id, priority)
    return {"tasks": tasks, "priority": priority}


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(
    task_id: str,
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    task = storage.get_task_by_id(parse_id(task_id, "task ID"))
    if task is None:
        raise NotFoundOrUnauthorizedError("Task not found")
    if task.user_id != user.id:
        raise ForbiddenError("Forbidden")
    return {"task": task}


@router.put("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: str,
    payload: TaskUpdate,
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    task_id = parse_id(task_id, "task ID")
    task = storage.update_task(task_id, user.id, payload.model_dump(exclude_unset=True))
    if task is None:
        raise NotFoundOrUnauthorizedError(NOT_FOUND_OR_UNAUTHORIZED)
    return {"task": task}


@router.delete("/{task_id}", response_model=StatusResponse)
def delete_task(
    task_id: str,
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    if not storage.delete_task(parse_id(task_id, "task ID"), user.id):
        raise NotFoundOrUnauthorizedError(NOT_FOUND_OR_UNAUTHORIZED)
    return {"success": True, "message": "Task deleted successfully"}


@router.post("/{task_id}/toggle", response_model=TaskEnvelope)
def toggle_task_completion(
    task_id: str,
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    task = storage.toggle_task_completion(parse_id(task_id, "task ID"), user.id)
    if task is None:
        raise NotFoundOrUnauthorizedError(NOT_FOUND_OR_UNAUTHORIZED)
    return {"task": task}


@router.post("/{task_id}/move", response_model=TaskEnvelope)
def move_task(
    task_id: str,
    payload: TaskMove,
    user: User = Depends(get_current_user),
    storage: TaskStorage = Depends(get_storage),
):
    task_id = parse_id(task_id, "task ID")
    new_task_list_id = parse_id(payload.new_task_list_id, "newTaskListId")
    task = storage.move_task_to_list(task_id, user.id, new_task_list_id, payload.new_order)
    if task is None:
        raise NotFoundOrUnauthorizedError(NOT_FOUND_OR_UNAUTHORIZED)
    return {"task": task}
