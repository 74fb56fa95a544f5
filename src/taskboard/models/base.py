"""Identifier and timestamp helpers shared by the table models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

from ..errors import ValidationError

# Largest value a 64-bit signed INTEGER column holds
MAX_ORDER = 2**63 - 1


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid.uuid4())


def parse_id(value, label: str = "ID") -> str:
    """Validate an identifier and return its canonical form.

    Args:
        value: Raw identifier from a path, query or body
        label: Name used in the error message

    Returns:
        Canonical lower-case UUID string

    Raises:
        ValidationError: If the value is not a well-formed identifier
    """
    if not isinstance(value, str) or not value:
        raise ValidationError(f"Invalid {label}")
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise ValidationError(f"Invalid {label}")


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_storage_datetime(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC; naive values are taken as UTC.

    Raises:
        ValidationError: If the value falls outside the representable range
            once converted to UTC
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        raise ValidationError("Date is out of range")


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime column.

    Values are written as UTC and always read back as aware UTC datetimes,
    including on SQLite, which keeps no offset.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = to_storage_datetime(value)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
