from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import WorkSegment


class WorkSegmentRepository(Protocol):
    def save(self, segment: WorkSegment) -> WorkSegment:
        raise NotImplementedError

    def update(self, segment: WorkSegment) -> WorkSegment:
        raise NotImplementedError

    def close_and_open(self, closed: WorkSegment, opened: WorkSegment) -> tuple[WorkSegment, WorkSegment]:
        """Persist a closed segment and its successor in one transaction."""

        raise NotImplementedError

    def get(self, segment_id: int) -> Optional[WorkSegment]:
        raise NotImplementedError

    def find_by_work_order(self, work_order_id: int) -> Sequence[WorkSegment]:
        """Segments of one work order ordered by start time."""

        raise NotImplementedError

    def find_by_date_range(self, start: datetime, end: datetime) -> Sequence[WorkSegment]:
        """Segments with ``start <= start_time < end`` ordered by start time."""

        raise NotImplementedError
