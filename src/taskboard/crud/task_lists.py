"""Storage layer for task lists."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlmodel import Session, select

from ..errors import ValidationError
from ..models import TaskList, utcnow
from .base import BatchResult, touch
from .ordering import ORDER_ERROR, next_order, validate_order

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "color", "order")


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required and must be a string")
    return name


class TaskListStorage:
    """Reads and writes task lists.

    Attributes:
        session: Database session used for every call
    """

    def __init__(self, session: Session):
        self.session = session

    def get_task_lists_by_user(self, user_id: str) -> List[TaskList]:
        """Get all task lists owned by a user.

        Returns:
            Lists ordered by ``order``, ties broken by creation time
        """
        statement = (
            select(TaskList)
            .where(TaskList.user_id == user_id)
            .order_by(TaskList.order, TaskList.created_at)
        )
        return list(self.session.exec(statement).all())

    def get_task_list_by_id(self, task_list_id: str) -> Optional[TaskList]:
        """Get a task list by ID without checking ownership."""
        return self.session.get(TaskList, task_list_id)

    def get_owned_task_list(self, task_list_id: str, user_id: str) -> Optional[TaskList]:
        """Get a task list only if it belongs to ``user_id``."""
        statement = select(TaskList).where(
            TaskList.id == task_list_id, TaskList.user_id == user_id
        )
        return self.session.exec(statement).first()

    def create_task_list(
        self,
        user_id: str,
        name: str,
        description: Optional[str] = None,
        color: Optional[str] = None,
        order: Optional[int] = None,
    ) -> TaskList:
        """Create a task list.

        Args:
            user_id: Owner of the new list
            name: List name (required)
            description: Optional description
            color: Optional display color
            order: Position among the user's lists; appended to the end if omitted

        Returns:
            The newly created TaskList

        Raises:
            ValidationError: If the name is empty or the order is invalid
        """
        name = _validate_name(name)
        validate_order(order)
        if order is None:
            order = next_order(self.session, TaskList, TaskList.user_id, user_id)

        now = utcnow()
        task_list = TaskList(
            user_id=user_id,
            name=name,
            description=description,
            color=color,
            order=order,
            created_at=now,
            updated_at=now,
        )
        self.session.add(task_list)
        self.session.commit()
        self.session.refresh(task_list)
        logger.info(f"Created task list {task_list.id} for user {user_id} at order {order}")
        return task_list

    def update_task_list(
        self, task_list_id: str, user_id: str, updates: Dict[str, Any]
    ) -> Optional[TaskList]:
        """Apply a partial update to a task list.

        Only keys present in ``updates`` are changed. ``description`` and
        ``color`` may be cleared with ``None``.

        Args:
            task_list_id: List to update
            user_id: Requesting user; must own the list
            updates: Field names and new values

        Returns:
            The updated TaskList, or None if no list matches both id and owner

        Raises:
            ValidationError: If no fields are supplied or a value is invalid
        """
        updates = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS}
        if not updates:
            raise ValidationError("No fields to update")
        if "name" in updates:
            _validate_name(updates["name"])
        if "order" in updates:
            if updates["order"] is None:
                raise ValidationError(ORDER_ERROR)
            validate_order(updates["order"])

        task_list = self.get_owned_task_list(task_list_id, user_id)
        if task_list is None:
            return None

        for key, value in updates.items():
            setattr(task_list, key, value)
        touch(task_list, utcnow())
        self.session.add(task_list)
        self.session.commit()
        self.session.refresh(task_list)
        return task_list

    def delete_task_list(self, task_list_id: str, user_id: str) -> bool:
        """Delete a task list owned by ``user_id``.

        Member tasks are left alone; use ``delete_task_list_cascade``.

        Returns:
            True if a list was deleted, False if none matched
        """
        task_list = self.get_owned_task_list(task_list_id, user_id)
        if task_list is None:
            return False
        self.session.delete(task_list)
        self.session.commit()
        logger.info(f"Deleted task list {task_list_id} for user {user_id}")
        return True

    def reorder_task_lists(
        self, user_id: str, task_list_orders: Iterable[Tuple[str, int]]
    ) -> BatchResult:
        """Overwrite the order of several task lists.

        Each entry is committed on its own, so a failure midway leaves the
        earlier entries applied.

        Args:
            user_id: Requesting user
            task_list_orders: ``(task_list_id, order)`` pairs

        Returns:
            BatchResult with the count applied and the ids skipped
        """
        task_list_orders = list(task_list_orders)
        for _, order in task_list_orders:
            validate_order(order)

        result = BatchResult()
        for task_list_id, order in task_list_orders:
            task_list = self.get_owned_task_list(task_list_id, user_id)
            if task_list is None:
                result.skipped_ids.append(task_list_id)
                continue
            task_list.order = order
            touch(task_list, utcnow())
            self.session.add(task_list)
            self.session.commit()
            result.updated_count += 1

        if result.skipped_ids:
            logger.warning(
                f"Reorder for user {user_id} skipped {len(result.skipped_ids)} task list(s)"
            )
        return result
