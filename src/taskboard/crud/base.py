"""Result types and timestamp bookkeeping shared by the stores."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List


@dataclass
class BatchResult:
    """Outcome of a batch reorder.

    Entries that did not match an entity owned by the caller are skipped and
    listed in ``skipped_ids``; the batch as a whole still succeeds.
    """
    updated_count: int = 0
    skipped_ids: List[str] = field(default_factory=list)


def touch(entity, now: datetime) -> None:
    """Set ``updated_at`` to ``now``, keeping it strictly increasing."""
    previous = entity.updated_at
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    entity.updated_at = now
