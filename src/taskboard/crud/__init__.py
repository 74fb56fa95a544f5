"""Storage layer for Taskboard."""
from .cascade import CascadeResult, delete_task_list_cascade
from .base import BatchResult
from .ordering import next_order
from .task_lists import TaskListStorage
from .tasks import TaskStorage
from .users import IdentityProfile, UserStorage

__all__ = [
    "BatchResult",
    "CascadeResult",
    "IdentityProfile",
    "TaskListStorage",
    "TaskStorage",
    "UserStorage",
    "delete_task_list_cascade",
    "next_order",
]
