from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.exceptions import InvalidStateError, StoreError
from .model import WorkSegment
from .repository import WorkSegmentRepository


class InMemoryWorkSegmentRepository(WorkSegmentRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, WorkSegment] = {}
        self._next_id = 1

    def _insert(self, segment: WorkSegment) -> WorkSegment:
        stored = replace(segment, segment_id=self._next_id)
        self._by_id[stored.segment_id] = stored
        self._next_id += 1
        return stored

    def _check_open(self, segment: WorkSegment) -> None:
        current = self._by_id.get(segment.segment_id)
        if current is None:
            raise StoreError(f"Work segment {segment.segment_id} not found")
        if not current.is_active:
            raise InvalidStateError(f"Work segment {segment.segment_id} is already closed")

    def save(self, segment: WorkSegment) -> WorkSegment:
        with self._lock:
            return self._insert(segment)

    def update(self, segment: WorkSegment) -> WorkSegment:
        with self._lock:
            self._check_open(segment)
            self._by_id[segment.segment_id] = segment
            return segment

    def close_and_open(self, closed: WorkSegment, opened: WorkSegment) -> tuple[WorkSegment, WorkSegment]:
        with self._lock:
            self._check_open(closed)
            stored = self._insert(opened)
            self._by_id[closed.segment_id] = closed
            return closed, stored

    def get(self, segment_id: int) -> Optional[WorkSegment]:
        with self._lock:
            return self._by_id.get(segment_id)

    def find_by_work_order(self, work_order_id: int) -> Sequence[WorkSegment]:
        with self._lock:
            items = [s for s in self._by_id.values() if s.work_order_id == work_order_id]
        items.sort(key=lambda s: (s.start_time, s.segment_id))
        return items

    def find_by_date_range(self, start: datetime, end: datetime) -> Sequence[WorkSegment]:
        with self._lock:
            items = [s for s in self._by_id.values() if start <= s.start_time < end]
        items.sort(key=lambda s: (s.start_time, s.segment_id))
        return items
