"""Order assignment shared by the task-list and task stores."""

from typing import Optional, Type

from sqlalchemy import func
from sqlmodel import Session, SQLModel, select

from ..errors import ValidationError
from ..models import MAX_ORDER

ORDER_ERROR = "Order must be a non-negative integer"


def next_order(session: Session, model: Type[SQLModel], scope_column, scope_value) -> int:
    """Get the order value for a new sibling.

    Args:
        session: Database session
        model: Table model holding an ``order`` column
        scope_column: Column defining the sibling scope
        scope_value: Value of the scope column

    Returns:
        One past the highest existing order in the scope, or 0 if it is empty

    Raises:
        ValidationError: If the scope already holds the largest order value
    """
    highest = session.exec(
        select(func.max(model.order)).where(scope_column == scope_value)
    ).one()
    if highest is None:
        return 0
    if highest >= MAX_ORDER:
        raise ValidationError("No order value left; reorder first")
    return highest + 1


def validate_order(order: Optional[int]) -> None:
    """Reject order values that are not integers in ``0..MAX_ORDER``."""
    if order is None:
        return
    if isinstance(order, bool) or not isinstance(order, int) or order < 0:
        raise ValidationError(ORDER_ERROR)
    if order > MAX_ORDER:
        raise ValidationError(f"Order must not exceed {MAX_ORDER}")
