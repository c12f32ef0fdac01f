from __future__ import annotations

from datetime import date, datetime

import pytest

from src.crew_timekeeping.crew_timekeeping.core.exceptions import AlreadyClockedInError, NotClockedInError, StoreError
from src.crew_timekeeping.crew_timekeeping.timeblocks.memory_repository import InMemoryTimeBlockRepository
from src.crew_timekeeping.crew_timekeeping.timeblocks.model import TimeBlock
from src.crew_timekeeping.crew_timekeeping.timeblocks.query import TimeBlockQueryService

DAY = date(2026, 3, 2)


def closed(worker_id: int, number: int, start_h: int, end_h: int, day: date = DAY) -> TimeBlock:
    start = datetime(day.year, day.month, day.day, start_h)
    end = datetime(day.year, day.month, day.day, end_h)
    return TimeBlock(
        worker_id=worker_id,
        work_date=day,
        block_number=number,
        clock_in_time=start,
        clock_out_time=end,
        hours_worked=float(end_h - start_h),
        is_active=False,
    )


def test_find_blocks_orders_by_block_number():
    repo = InMemoryTimeBlockRepository()
    repo.save(closed(1, 2, 13, 17))
    repo.save(closed(1, 1, 7, 10))
    queries = TimeBlockQueryService(repo)

    assert [b.block_number for b in queries.find_blocks(1, DAY)] == [1, 2]
    assert queries.next_block_number(1, DAY) == 3
    assert queries.next_block_number(1, date(2026, 3, 3)) == 1


def test_total_hours_projects_open_block_to_now():
    repo = InMemoryTimeBlockRepository()
    repo.save(closed(1, 1, 7, 10))
    repo.save(
        TimeBlock(worker_id=1, work_date=DAY, block_number=2, clock_in_time=datetime(2026, 3, 2, 13, 0))
    )
    queries = TimeBlockQueryService(repo)
    now = datetime(2026, 3, 2, 14, 30)

    assert queries.total_hours(1, DAY, now=now) == pytest.approx(4.5)
    assert queries.total_hours(1, DAY, now=now, include_active=False) == pytest.approx(3.0)
    # Projection is read-only.
    assert repo.find_active(1).hours_worked == 0.0


def test_closed_blocks_excludes_open_and_out_of_range():
    repo = InMemoryTimeBlockRepository()
    repo.save(closed(1, 1, 8, 12))
    repo.save(closed(1, 1, 8, 12, day=date(2026, 3, 9)))
    repo.save(TimeBlock(worker_id=1, work_date=DAY, block_number=2, clock_in_time=datetime(2026, 3, 2, 13)))
    queries = TimeBlockQueryService(repo)

    blocks = queries.closed_blocks(1, DAY, date(2026, 3, 9))
    assert [(b.work_date, b.block_number) for b in blocks] == [(DAY, 1)]


def test_repository_rejects_second_open_block():
    repo = InMemoryTimeBlockRepository()
    repo.save(TimeBlock(worker_id=1, work_date=DAY, block_number=1, clock_in_time=datetime(2026, 3, 2, 8)))

    with pytest.raises(AlreadyClockedInError):
        repo.save(
            TimeBlock(worker_id=1, work_date=date(2026, 3, 3), block_number=1, clock_in_time=datetime(2026, 3, 3, 8))
        )


def test_repository_rejects_duplicate_block_number_and_unknown_update():
    repo = InMemoryTimeBlockRepository()
    repo.save(closed(1, 1, 8, 9))

    with pytest.raises(StoreError):
        repo.save(closed(1, 1, 10, 11))
    with pytest.raises(StoreError):
        repo.update(closed(1, 5, 8, 9))


def test_clocked_in_workers_and_derived_fields():
    repo = InMemoryTimeBlockRepository()
    repo.save(TimeBlock(worker_id=4, work_date=DAY, block_number=1, clock_in_time=datetime(2026, 3, 2, 6)))
    repo.save(TimeBlock(worker_id=2, work_date=DAY, block_number=1, clock_in_time=datetime(2026, 3, 2, 6)))
    repo.save(closed(3, 1, 6, 16))

    assert TimeBlockQueryService(repo).clocked_in_workers() == [2, 4]

    long_day = closed(3, 2, 6, 16)
    assert long_day.is_daily_overtime
    assert long_day.daily_overtime_hours == pytest.approx(2.0)
    assert (long_day.iso_year, long_day.week_number) == (2026, 10)


def test_closed_block_cannot_be_closed_again():
    repo = InMemoryTimeBlockRepository()
    block = repo.save(closed(1, 1, 8, 9))

    with pytest.raises(NotClockedInError):
        repo.update(block)
