"""Deleting a task list together with its tasks."""

import logging
from dataclasses import dataclass

from sqlmodel import Session

from .task_lists import TaskListStorage
from .tasks import TaskStorage

logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    deleted: bool
    deleted_tasks_count: int


def delete_task_list_cascade(session: Session, task_list_id: str, user_id: str) -> CascadeResult:
    """Delete a user's task list and the user's tasks in it.

    Tasks are deleted first and committed, then the list. The two steps are
    separate transactions: if the second fails the tasks stay deleted.

    Args:
        session: Database session
        task_list_id: List to delete
        user_id: Requesting user

    Returns:
        CascadeResult; ``deleted`` is False when the user does not own the list
    """
    deleted_tasks_count = TaskStorage(session).delete_tasks_by_task_list(task_list_id, user_id)
    deleted = TaskListStorage(session).delete_task_list(task_list_id, user_id)
    if deleted:
        logger.info(f"Deleted task list {task_list_id} with {deleted_tasks_count} task(s)")
    return CascadeResult(deleted=deleted, deleted_tasks_count=deleted_tasks_count)
