from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from .model import TimeBlock
from .repository import TimeBlockRepository


class TimeBlockQueryService:
    """Read side over the time block store.

    Used by the clock state machine, the aggregation engine and the HTTP
    layer. Has no side effects.
    """

    def __init__(self, blocks: TimeBlockRepository):
        self._blocks = blocks

    def find_active_block(self, worker_id: int) -> Optional[TimeBlock]:
        return self._blocks.find_active(worker_id)

    def is_clocked_in(self, worker_id: int) -> bool:
        return self._blocks.find_active(worker_id) is not None

    def find_blocks(self, worker_id: int, day: date) -> list[TimeBlock]:
        blocks = list(self._blocks.find_by_date_range(worker_id, day, day + timedelta(days=1)))
        blocks.sort(key=lambda b: b.block_number)
        return blocks

    def next_block_number(self, worker_id: int, day: date) -> int:
        return max((b.block_number for b in self.find_blocks(worker_id, day)), default=0) + 1

    def total_hours(
        self,
        worker_id: int,
        day: date,
        *,
        now: datetime | None = None,
        include_active: bool = True,
    ) -> float:
        """Sum of ``hours_worked`` for the day.

        An open block is projected to ``now`` when ``include_active`` is set;
        the projection is never written back.
        """
        now = now or now_local()
        total = 0.0
        for b in self.find_blocks(worker_id, day):
            if b.is_active:
                if include_active:
                    total += b.elapsed_hours(now)
                continue
            total += b.hours_worked
        return total

    def closed_blocks(self, worker_id: int, start: date, end: date) -> Sequence[TimeBlock]:
        return [b for b in self._blocks.find_by_date_range(worker_id, start, end) if not b.is_active]

    def clocked_in_workers(self) -> Sequence[int]:
        return list(self._blocks.find_workers_with_active_blocks())
