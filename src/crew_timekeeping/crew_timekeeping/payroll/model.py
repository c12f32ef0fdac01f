from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class DailyEntry:
    work_date: date
    hours: float
    block_count: int
    overtime_hours: float = 0.0

    @property
    def is_overtime(self) -> bool:
        return self.overtime_hours > 0


@dataclass(frozen=True)
class WeeklyReport:
    """Derived Monday-Sunday rollup of closed time blocks. Never persisted."""

    worker_id: int
    week_start_date: date
    daily_entries: tuple[DailyEntry, ...]
    total_regular_hours: float
    total_overtime_hours: float
    weekly_total: float
    daily_overtime_hours: float = 0.0

    @property
    def is_weekly_overtime(self) -> bool:
        return self.total_overtime_hours > 0


@dataclass(frozen=True)
class PayrollRecord:
    worker_id: int
    period_start: date
    period_end: date
    total_hours: float
    hourly_rate: float
    estimated_pay: float


@dataclass(frozen=True)
class OvertimeWorkerRow:
    worker_id: int
    worker_name: str
    regular_hours: float
    overtime_hours: float
    daily_overtime_breakdown: dict[date, float] = field(default_factory=dict)


@dataclass(frozen=True)
class OvertimeReport:
    week_start_date: date
    workers: tuple[OvertimeWorkerRow, ...]
    total_overtime_hours: float
    estimated_overtime_cost: float
