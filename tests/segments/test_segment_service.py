from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.crew_timekeeping.crew_timekeeping.core.exceptions import InvalidStateError, StoreError, ValidationError
from src.crew_timekeeping.crew_timekeeping.segments.memory_repository import InMemoryWorkSegmentRepository
from src.crew_timekeeping.crew_timekeeping.segments.service import WorkSegmentService

T = datetime(2026, 4, 14, 7, 0)


@pytest.fixture()
def repo():
    return InMemoryWorkSegmentRepository()


@pytest.fixture()
def svc(repo):
    return WorkSegmentService(repo)


def test_start_and_close_persist_segment(svc, repo):
    seg = svc.start_segment(T, 3, ["Ana", "Ben", "Cy"], work_order_id=10)
    assert seg.segment_id is not None
    assert repo.get(seg.segment_id).is_active

    closed = svc.close_segment(seg.segment_id, T + timedelta(hours=2))

    assert closed.total_hours == pytest.approx(6.0)
    assert repo.get(seg.segment_id).end_time == T + timedelta(hours=2)


def test_close_twice_is_rejected(svc):
    seg = svc.start_segment(T, 2, work_order_id=10)
    svc.close_segment(seg.segment_id, T + timedelta(hours=1))

    with pytest.raises(InvalidStateError):
        svc.close_segment(seg.segment_id, T + timedelta(hours=2))


def test_close_unknown_segment(svc):
    with pytest.raises(ValidationError):
        svc.close_segment(404, T)


def test_team_change_closes_and_opens_new_segment(svc):
    first = svc.start_segment(T, 2, ["Ana", "Ben"], work_order_id=10)

    closed, opened = svc.change_team(first.segment_id, T + timedelta(hours=1), 4, ["Ana", "Ben", "Cy", "Dee"])

    assert closed.total_hours == pytest.approx(2.0)
    assert opened.is_active
    assert opened.start_time == closed.end_time
    assert opened.work_order_id == 10
    assert opened.team_size == 4

    svc.close_segment(opened.segment_id, T + timedelta(hours=3))
    assert svc.work_order_total_hours(10) == pytest.approx(2.0 + 8.0)
    assert [s.team_size for s in svc.segments_for_work_order(10)] == [2, 4]


def test_invalid_team_change_writes_nothing(svc, repo):
    first = svc.start_segment(T, 2, work_order_id=10)

    with pytest.raises(ValidationError):
        svc.change_team(first.segment_id, T + timedelta(hours=1), -3)

    assert repo.get(first.segment_id).is_active
    assert len(svc.segments_for_work_order(10)) == 1


def test_open_segments_do_not_count_toward_work_order(svc):
    svc.start_segment(T, 6, work_order_id=11)
    done = svc.start_segment(T, 1, work_order_id=11)
    svc.close_segment(done.segment_id, T + timedelta(hours=5))

    assert svc.work_order_total_hours(11) == pytest.approx(5.0)
    assert svc.work_order_total_hours(99) == 0


def test_segments_between_filters_by_start_time(svc):
    svc.start_segment(T, 1, work_order_id=1)
    svc.start_segment(T + timedelta(days=1), 1, work_order_id=2)

    found = svc.segments_between(T, T + timedelta(hours=12))
    assert [s.work_order_id for s in found] == [1]


class FailingInsertRepository(InMemoryWorkSegmentRepository):
    def _insert(self, segment):
        if self._by_id:
            raise StoreError("disk full")
        return super()._insert(segment)


def test_failed_team_change_leaves_segment_open():
    repo = FailingInsertRepository()
    svc = WorkSegmentService(repo)
    first = svc.start_segment(T, 2, work_order_id=10)

    with pytest.raises(StoreError):
        svc.change_team(first.segment_id, T + timedelta(hours=1), 4)

    current = repo.get(first.segment_id)
    assert current.is_active
    assert current.total_hours == 0
    assert len(svc.segments_for_work_order(10)) == 1


def test_team_change_on_closed_segment_is_rejected(svc):
    first = svc.start_segment(T, 2, work_order_id=10)
    svc.close_segment(first.segment_id, T + timedelta(hours=1))

    with pytest.raises(InvalidStateError):
        svc.change_team(first.segment_id, T + timedelta(hours=2), 3)
    assert len(svc.segments_for_work_order(10)) == 1
