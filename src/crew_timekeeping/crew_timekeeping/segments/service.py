from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

import structlog

from ..common.datetime_utils import to_local_naive
from ..common.locks import KeyedLocks
from ..common.validators import require_non_negative_int
from ..core.exceptions import InvalidStateError, ValidationError
from .calculator.base import CrewHoursCalculator
from .calculator.team_multiplier import TeamMultiplierCalculator
from .model import WorkSegment
from .repository import WorkSegmentRepository

logger = structlog.get_logger(__name__)


def start_work_segment(
    start_time: datetime,
    team_size: int,
    team_members: Iterable[str] = (),
    *,
    work_order_id: Optional[int] = None,
) -> WorkSegment:
    """Open a segment. Pure: nothing is persisted."""
    require_non_negative_int(team_size, "team_size")
    return WorkSegment(
        start_time=to_local_naive(start_time),
        team_size=team_size,
        team_members=tuple(team_members),
        work_order_id=work_order_id,
    )


def close_work_segment(
    segment: WorkSegment,
    end_time: datetime,
    *,
    calculator: Optional[CrewHoursCalculator] = None,
) -> WorkSegment:
    """Set ``end_time`` and compute ``total_hours`` once. Pure."""
    if not segment.is_active:
        raise InvalidStateError(f"Work segment {segment.segment_id} is already closed")
    calculator = calculator or TeamMultiplierCalculator()
    end_time = to_local_naive(end_time)
    return replace(
        segment,
        end_time=end_time,
        total_hours=calculator.crew_hours(start=segment.start_time, end=end_time, team_size=segment.team_size),
    )


class WorkSegmentService:
    """Crew task lifecycle on top of the segment store.

    A segment is written twice at most: once when opened, once when closed.
    Close and team changes hold the segment's lock (single writer).
    """

    def __init__(
        self,
        segments: WorkSegmentRepository,
        *,
        calculator: Optional[CrewHoursCalculator] = None,
        locks: Optional[KeyedLocks] = None,
    ):
        self._segments = segments
        self._calculator = calculator or TeamMultiplierCalculator()
        self._locks = locks or KeyedLocks()

    def _get(self, segment_id: int) -> WorkSegment:
        segment = self._segments.get(segment_id)
        if segment is None:
            raise ValidationError(f"Work segment {segment_id} not found")
        return segment

    def start_segment(
        self,
        start_time: datetime,
        team_size: int,
        team_members: Iterable[str] = (),
        *,
        work_order_id: Optional[int] = None,
    ) -> WorkSegment:
        segment = self._segments.save(
            start_work_segment(start_time, team_size, team_members, work_order_id=work_order_id)
        )
        logger.info(
            "segment_started",
            segment_id=segment.segment_id,
            work_order_id=segment.work_order_id,
            team_size=segment.team_size,
            named_members=len(segment.team_members),
        )
        return segment

    def close_segment(self, segment_id: int, end_time: datetime) -> WorkSegment:
        with self._locks.for_key(segment_id):
            closed = close_work_segment(self._get(segment_id), end_time, calculator=self._calculator)
            closed = self._segments.update(closed)
        logger.info("segment_closed", segment_id=segment_id, total_hours=round(closed.total_hours, 4))
        return closed

    def change_team(
        self,
        segment_id: int,
        at: datetime,
        team_size: int,
        team_members: Iterable[str] = (),
    ) -> tuple[WorkSegment, WorkSegment]:
        """Close the running segment at ``at`` and open a new one for the same work order.

        Returns ``(closed, opened)``. Validation happens before either write.
        """
        require_non_negative_int(team_size, "team_size")
        members = tuple(team_members)
        with self._locks.for_key(segment_id):
            current = self._get(segment_id)
            closed, opened = self._segments.close_and_open(
                close_work_segment(current, at, calculator=self._calculator),
                start_work_segment(at, team_size, members, work_order_id=current.work_order_id),
            )
        logger.info(
            "segment_team_changed",
            closed_segment_id=closed.segment_id,
            opened_segment_id=opened.segment_id,
            team_size=team_size,
        )
        return closed, opened

    def segments_for_work_order(self, work_order_id: int) -> Sequence[WorkSegment]:
        return self._segments.find_by_work_order(work_order_id)

    def segments_between(self, start: datetime, end: datetime) -> Sequence[WorkSegment]:
        return self._segments.find_by_date_range(start, end)

    def work_order_total_hours(self, work_order_id: int) -> float:
        """Crew-hours for a work order; open segments count as 0 until closed."""
        return sum(s.total_hours for s in self._segments.find_by_work_order(work_order_id))
