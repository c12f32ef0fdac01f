from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import structlog

from ..common.datetime_utils import calendar_day, hours_between, now_local, to_local_naive
from ..core.enums import ClockState
from ..core.exceptions import (
    AlreadyClockedInError,
    InvalidStateError,
    NotClockedInError,
    WorkerNotFoundError,
)
from ..timeblocks.model import TimeBlock
from ..timeblocks.query import TimeBlockQueryService
from ..timeblocks.repository import TimeBlockRepository
from ..workers.repository import WorkerDirectory
from ..common.locks import KeyedLocks

logger = structlog.get_logger(__name__)


class ClockService:
    """Clock state machine: CLOCKED_OUT <-> CLOCKED_IN per worker.

    Each transition runs its checks and its single write while holding the
    worker's lock, so two concurrent clock-ins for one worker cannot both
    pass the "no active block" check. The repository's own uniqueness guard
    covers writers in other processes.
    """

    def __init__(
        self,
        blocks: TimeBlockRepository,
        queries: TimeBlockQueryService | None = None,
        workers: WorkerDirectory | None = None,
        *,
        locks: KeyedLocks | None = None,
    ):
        self._blocks = blocks
        self._queries = queries or TimeBlockQueryService(blocks)
        self._workers = workers
        self._locks = locks or KeyedLocks()

    def _require_worker(self, worker_id: int) -> None:
        if self._workers is None:
            return
        worker = self._workers.get_by_id(worker_id)
        if not worker or not worker.is_active:
            raise WorkerNotFoundError(f"Worker {worker_id} not found or inactive")

    def clock_in(self, worker_id: int, timestamp: datetime | None = None) -> TimeBlock:
        timestamp = to_local_naive(timestamp) if timestamp else now_local()
        self._require_worker(worker_id)

        with self._locks.for_key(worker_id):
            if self._queries.find_active_block(worker_id) is not None:
                logger.info("clock_in_rejected", worker_id=worker_id, reason="already_clocked_in")
                raise AlreadyClockedInError(worker_id)

            day = calendar_day(timestamp)
            block = TimeBlock(
                worker_id=worker_id,
                work_date=day,
                block_number=self._queries.next_block_number(worker_id, day),
                clock_in_time=timestamp,
                clock_out_time=None,
                hours_worked=0.0,
                is_active=True,
            )
            saved = self._blocks.save(block)

        logger.info(
            "clock_in",
            worker_id=worker_id,
            block_id=saved.block_id,
            work_date=saved.work_date.isoformat(),
            block_number=saved.block_number,
        )
        return saved

    def clock_out(self, worker_id: int, timestamp: datetime | None = None) -> TimeBlock:
        timestamp = to_local_naive(timestamp) if timestamp else now_local()

        with self._locks.for_key(worker_id):
            active = self._queries.find_active_block(worker_id)
            if active is None:
                logger.info("clock_out_rejected", worker_id=worker_id, reason="not_clocked_in")
                raise NotClockedInError(worker_id)
            if active.clock_in_time is None:
                logger.error("clock_out_invalid_block", worker_id=worker_id, block_id=active.block_id)
                raise InvalidStateError(f"Active time block {active.block_id} has no clock-in time")

            # A clock-out before clock-in yields negative hours; callers validate ordering.
            closed = replace(
                active,
                clock_out_time=timestamp,
                hours_worked=hours_between(active.clock_in_time, timestamp),
                is_active=False,
            )
            saved = self._blocks.update(closed)

        logger.info(
            "clock_out",
            worker_id=worker_id,
            block_id=saved.block_id,
            block_number=saved.block_number,
            hours_worked=round(saved.hours_worked, 4),
        )
        return saved

    def is_clocked_in(self, worker_id: int) -> bool:
        return self._queries.is_clocked_in(worker_id)

    def current_state(self, worker_id: int) -> ClockState:
        return ClockState.CLOCKED_IN if self.is_clocked_in(worker_id) else ClockState.CLOCKED_OUT
