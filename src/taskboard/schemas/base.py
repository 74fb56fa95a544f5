from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReadModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to the naive datetimes coming out of the database."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class StatusResponse(CamelModel):
    success: bool = True
    message: str


class ReorderResponse(StatusResponse):
    updated_count: int
    skipped_ids: List[str] = []
