from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import AlreadyClockedInError, NotClockedInError, StoreError
from .model import TimeBlock
from .repository import TimeBlockRepository


class InMemoryTimeBlockRepository(TimeBlockRepository):
    """Thread-safe in-process store used by tests and the ``memory`` storage mode."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, TimeBlock] = {}
        self._next_id = 1

    def save(self, block: TimeBlock) -> TimeBlock:
        with self._lock:
            if block.is_active and any(
                b.is_active and b.worker_id == block.worker_id for b in self._by_id.values()
            ):
                raise AlreadyClockedInError(block.worker_id)
            if any(
                b.worker_id == block.worker_id
                and b.work_date == block.work_date
                and b.block_number == block.block_number
                for b in self._by_id.values()
            ):
                raise StoreError(
                    f"Duplicate block {block.block_number} for worker {block.worker_id} on {block.work_date}"
                )
            stored = replace(block, block_id=self._next_id)
            self._by_id[stored.block_id] = stored
            self._next_id += 1
            return stored

    def update(self, block: TimeBlock) -> TimeBlock:
        with self._lock:
            current = self._by_id.get(block.block_id)
            if current is None:
                raise StoreError(f"Time block {block.block_id} not found")
            if not current.is_active:
                raise NotClockedInError(block.worker_id)
            self._by_id[block.block_id] = block
            return block

    def find_active(self, worker_id: int) -> Optional[TimeBlock]:
        with self._lock:
            for b in self._by_id.values():
                if b.worker_id == worker_id and b.is_active:
                    return b
            return None

    def find_by_date_range(self, worker_id: int, start: date, end: date) -> Sequence[TimeBlock]:
        with self._lock:
            items = [b for b in self._by_id.values() if b.worker_id == worker_id and start <= b.work_date < end]
        items.sort(key=lambda b: (b.work_date, b.block_number))
        return items

    def find_workers_with_active_blocks(self) -> Sequence[int]:
        with self._lock:
            return sorted({b.worker_id for b in self._by_id.values() if b.is_active})
