from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import hours_between
from ..core.constants import REGULAR_DAILY_HOURS


@dataclass(frozen=True)
class TimeBlock:
    """Domain entity: one contiguous clocked interval for one worker on one calendar day.

    ``work_date`` is fixed at clock-in; a block that runs past midnight stays
    on the day it started.
    """

    worker_id: int
    work_date: date
    block_number: int
    clock_in_time: Optional[datetime]
    clock_out_time: Optional[datetime] = None
    hours_worked: float = 0.0
    is_active: bool = True
    block_id: Optional[int] = None

    @property
    def iso_year(self) -> int:
        return self.work_date.isocalendar()[0]

    @property
    def week_number(self) -> int:
        return self.work_date.isocalendar()[1]

    @property
    def is_daily_overtime(self) -> bool:
        return self.hours_worked > REGULAR_DAILY_HOURS

    @property
    def daily_overtime_hours(self) -> float:
        return max(0.0, self.hours_worked - REGULAR_DAILY_HOURS)

    def elapsed_hours(self, now: datetime) -> float:
        """Hours so far for an open block, stored hours for a closed one."""
        if self.is_active and self.clock_in_time is not None:
            return hours_between(self.clock_in_time, now)
        return self.hours_worked
