"""Storage layer for tasks."""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlmodel import Session, select

from ..errors import NotFoundOrUnauthorizedError, ValidationError
from ..models import Task, TaskList, TaskPriority, utcnow
from ..models.base import to_storage_datetime
from .base import BatchResult, touch
from .ordering import next_order, validate_order

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "title",
    "description",
    "due_date",
    "priority",
    "notes",
    "color",
    "completed",
    "order",
)
CLEARABLE_FIELDS = ("description", "due_date", "notes", "color")

DEFAULT_UPCOMING_DAYS = 7
MAX_UPCOMING_DAYS = 36500


def _validate_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required and must be a string")
    return title


def _parse_priority(priority: Any) -> TaskPriority:
    if isinstance(priority, TaskPriority):
        return priority
    try:
        return TaskPriority(priority)
    except ValueError:
        raise ValidationError("Invalid priority value")


def _normalize_due_date(due_date: Optional[datetime]) -> Optional[datetime]:
    if due_date is None:
        return None
    if not isinstance(due_date, datetime):
        raise ValidationError("Due date must be a datetime")
    return to_storage_datetime(due_date)


class TaskStorage:
    """Reads and writes tasks, and answers the due-date views.

    Attributes:
        session: Database session used for every call
    """

    def __init__(self, session: Session):
        self.session = session

    def _owned_task(self, task_id: str, user_id: str, for_update: bool = False) -> Optional[Task]:
        statement = select(Task).where(Task.id == task_id, Task.user_id == user_id)
        if for_update:
            statement = statement.with_for_update()
        return self.session.exec(statement).first()

    def _owns_task_list(self, task_list_id: str, user_id: str) -> bool:
        statement = select(TaskList.id).where(
            TaskList.id == task_list_id, TaskList.user_id == user_id
        )
        return self.session.exec(statement).first() is not None

    def _save(self, task: Task) -> Task:
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    # ---- reads ----

    def get_tasks_by_task_list(self, task_list_id: str, user_id: str) -> List[Task]:
        """Get the tasks of one list, in display order.

        Results are limited to tasks owned by ``user_id``, so asking for
        another user's list yields an empty sequence.
        """
        statement = (
            select(Task)
            .where(Task.task_list_id == task_list_id, Task.user_id == user_id)
            .order_by(Task.order, Task.created_at)
        )
        return list(self.session.exec(statement).all())

    def get_tasks_by_user(self, user_id: str) -> List[Task]:
        """Get every task of a user, newest first."""
        statement = (
            select(Task).where(Task.user_id == user_id).order_by(Task.created_at.desc())
        )
        return list(self.session.exec(statement).all())

    def get_task_by_id(self, task_id: str) -> Optional[Task]:
        """Get a task by ID without checking ownership."""
        return self.session.get(Task, task_id)

    def get_tasks_by_priority(self, user_id: str, priority: Any) -> List[Task]:
        """Get a user's tasks with the given priority, soonest due first.

        Undated tasks sort before dated ones.

        Raises:
            ValidationError: If the priority is not a known level
        """
        priority = _parse_priority(priority)
        statement = (
            select(Task)
            .where(Task.user_id == user_id, Task.priority == priority)
            .order_by(Task.due_date.asc().nulls_first(), Task.created_at)
        )
        return list(self.session.exec(statement).all())

    def get_upcoming_tasks(
        self, user_id: str, days: int = DEFAULT_UPCOMING_DAYS, now: Optional[datetime] = None
    ) -> List[Task]:
        """Get incomplete tasks due between now and ``days`` days from now.

        Args:
            user_id: Owner of the tasks
            days: Size of the window, inclusive at both ends
            now: Reference time (defaults to the current time)

        Returns:
            Tasks sorted by due date ascending

        Raises:
            ValidationError: If days is negative or larger than MAX_UPCOMING_DAYS
        """
        if isinstance(days, bool) or not isinstance(days, int) or days < 0:
            raise ValidationError("Days must be a non-negative number")
        if days > MAX_UPCOMING_DAYS:
            raise ValidationError(f"Days must not exceed {MAX_UPCOMING_DAYS}")
        now = to_storage_datetime(now) if now is not None else utcnow()
        try:
            until = now + timedelta(days=days)
        except OverflowError:
            raise ValidationError("Date is out of range")
        statement = (
            select(Task)
            .where(
                Task.user_id == user_id,
                Task.completed == False,  # noqa: E712
                Task.due_date >= now,
                Task.due_date <= until,
            )
            .order_by(Task.due_date)
        )
        return list(self.session.exec(statement).all())

    def get_overdue_tasks(self, user_id: str, now: Optional[datetime] = None) -> List[Task]:
        """Get incomplete tasks whose due date has passed, oldest first."""
        now = to_storage_datetime(now) if now is not None else utcnow()
        statement = (
            select(Task)
            .where(
                Task.user_id == user_id,
                Task.completed == False,  # noqa: E712
                Task.due_date < now,
            )
            .order_by(Task.due_date)
        )
        return list(self.session.exec(statement).all())

    # ---- writes ----

    def create_task(
        self,
        task_list_id: str,
        user_id: str,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        priority: Optional[Any] = None,
        notes: Optional[str] = None,
        color: Optional[str] = None,
        order: Optional[int] = None,
    ) -> Task:
        """Create a task in one of the user's lists.

        Args:
            task_list_id: List the task belongs to
            user_id: Owner; must also own the list
            title: Task title (required)
            description: Optional description
            due_date: Optional due date
            priority: Priority level (defaults to medium)
            notes: Optional notes
            color: Optional display color
            order: Position in the list; appended to the end if omitted

        Returns:
            The newly created Task

        Raises:
            ValidationError: If the title, priority or order is invalid
            NotFoundOrUnauthorizedError: If the list is missing or not owned
        """
        title = _validate_title(title)
        priority = TaskPriority.MEDIUM if priority is None else _parse_priority(priority)
        due_date = _normalize_due_date(due_date)
        validate_order(order)

        if not self._owns_task_list(task_list_id, user_id):
            raise NotFoundOrUnauthorizedError("Task list not found or unauthorized")

        if order is None:
            order = next_order(self.session, Task, Task.task_list_id, task_list_id)

        now = utcnow()
        task = Task(
            user_id=user_id,
            task_list_id=task_list_id,
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
            notes=notes,
            color=color,
            completed=False,
            order=order,
            created_at=now,
            updated_at=now,
        )
        self._save(task)
        logger.info(f"Created task {task.id} in list {task_list_id} for user {user_id}")
        return task

    def update_task(self, task_id: str, user_id: str, updates: Dict[str, Any]) -> Optional[Task]:
        """Apply a partial update to a task.

        A key missing from ``updates`` leaves the field unchanged; a key
        mapped to ``None`` clears it (only for optional fields).

        Args:
            task_id: Task to update
            user_id: Requesting user; must own the task
            updates: Field names and new values

        Returns:
            The updated Task, or None if no task matches both id and owner

        Raises:
            ValidationError: If no fields are supplied or a value is invalid
        """
        updates = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS}
        if not updates:
            raise ValidationError("No fields to update")

        for key, value in updates.items():
            if value is None and key not in CLEARABLE_FIELDS:
                raise ValidationError(f"{key} cannot be cleared")
        if "title" in updates:
            _validate_title(updates["title"])
        if "priority" in updates:
            updates["priority"] = _parse_priority(updates["priority"])
        if "due_date" in updates:
            updates["due_date"] = _normalize_due_date(updates["due_date"])
        if "order" in updates:
            validate_order(updates["order"])
        if "completed" in updates and not isinstance(updates["completed"], bool):
            raise ValidationError("Completed must be a boolean")

        task = self._owned_task(task_id, user_id)
        if task is None:
            return None

        for key, value in updates.items():
            setattr(task, key, value)
        touch(task, utcnow())
        return self._save(task)

    def toggle_task_completion(self, task_id: str, user_id: str) -> Optional[Task]:
        """Flip a task's completed flag.

        The read and the write share one transaction, with the row locked
        where the database supports it.

        Returns:
            The updated Task, or None if no task matches both id and owner
        """
        task = self._owned_task(task_id, user_id, for_update=True)
        if task is None:
            self.session.rollback()
            return None

        task.completed = not task.completed
        touch(task, utcnow())
        self._save(task)
        logger.debug(f"Toggled task {task_id} to completed={task.completed}")
        return task

    def delete_task(self, task_id: str, user_id: str) -> bool:
        """Delete a task owned by ``user_id``.

        Returns:
            True if a task was deleted, False if none matched
        """
        task = self._owned_task(task_id, user_id)
        if task is None:
            return False
        self.session.delete(task)
        self.session.commit()
        logger.info(f"Deleted task {task_id} for user {user_id}")
        return True

    def delete_tasks_by_task_list(self, task_list_id: str, user_id: str) -> int:
        """Delete every task of ``user_id`` in a list.

        Returns:
            Number of tasks deleted
        """
        statement = select(Task).where(
            Task.task_list_id == task_list_id, Task.user_id == user_id
        )
        tasks = self.session.exec(statement).all()
        for task in tasks:
            self.session.delete(task)
        self.session.commit()
        return len(tasks)

    def move_task_to_list(
        self,
        task_id: str,
        user_id: str,
        new_task_list_id: str,
        new_order: Optional[int] = None,
    ) -> Optional[Task]:
        """Move a task into another of the user's lists.

        Tasks left behind in the source list keep their order values.

        Args:
            task_id: Task to move
            user_id: Requesting user; must own the task and the destination
            new_task_list_id: Destination list
            new_order: Position in the destination; appended if omitted

        Returns:
            The moved Task, or None if the task or the destination list is
            missing or not owned
        """
        validate_order(new_order)

        task = self._owned_task(task_id, user_id)
        if task is None or not self._owns_task_list(new_task_list_id, user_id):
            return None

        if new_order is None:
            new_order = next_order(self.session, Task, Task.task_list_id, new_task_list_id)

        source_list_id = task.task_list_id
        task.task_list_id = new_task_list_id
        task.order = new_order
        touch(task, utcnow())
        self._save(task)
        logger.info(
            f"Moved task {task_id} from list {source_list_id} to {new_task_list_id} at order {new_order}"
        )
        return task

    def reorder_tasks(self, user_id: str, task_orders: Iterable[Tuple[str, int]]) -> BatchResult:
        """Overwrite the order of several tasks.

        Each entry is committed on its own, so a failure midway leaves the
        earlier entries applied.

        Args:
            user_id: Requesting user
            task_orders: ``(task_id, order)`` pairs

        Returns:
            BatchResult with the count applied and the ids skipped
        """
        task_orders = list(task_orders)
        for _, order in task_orders:
            validate_order(order)

        result = BatchResult()
        for task_id, order in task_orders:
            task = self._owned_task(task_id, user_id)
            if task is None:
                result.skipped_ids.append(task_id)
                continue
            task.order = order
            touch(task, utcnow())
            self.session.add(task)
            self.session.commit()
            result.updated_count += 1

        if result.skipped_ids:
            logger.warning(f"Reorder for user {user_id} skipped {len(result.skipped_ids)} task(s)")
        return result
