from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeBlock


class TimeBlockRepository(Protocol):
    """Persistence contract for time blocks.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def save(self, block: TimeBlock) -> TimeBlock:
        """Insert a new block and return it with ``block_id`` assigned.

        Must atomically reject a second active block for the same worker
        with ``AlreadyClockedInError``.
        """

        raise NotImplementedError

    def update(self, block: TimeBlock) -> TimeBlock:
        raise NotImplementedError

    def find_active(self, worker_id: int) -> Optional[TimeBlock]:
        raise NotImplementedError

    def find_by_date_range(self, worker_id: int, start: date, end: date) -> Sequence[TimeBlock]:
        """Blocks with ``start <= work_date < end`` ordered by date, block number."""

        raise NotImplementedError

    def find_workers_with_active_blocks(self) -> Sequence[int]:
        raise NotImplementedError
