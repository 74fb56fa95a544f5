"""Models package."""
from .base import MAX_ORDER, new_id, parse_id, utcnow
from .task import Task, TaskPriority
from .task_list import TaskList
from .user import User

__all__ = ["MAX_ORDER", "Task", "TaskPriority", "TaskList", "User", "new_id", "parse_id", "utcnow"]
