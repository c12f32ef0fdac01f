from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Optional

import structlog

from ..common.datetime_utils import iter_days, monday_of
from ..common.validators import require_date_range
from ..core.constants import DAYS_PER_WEEK
from ..core.exceptions import ValidationError
from ..timeblocks.query import TimeBlockQueryService
from ..workers.repository import WorkerDirectory
from .calculator.base import OvertimeCalculator
from .calculator.standard_calculator import StandardOvertimeCalculator
from .model import DailyEntry, OvertimeReport, OvertimeWorkerRow, PayrollRecord, WeeklyReport
from .rates import FixedRateSource, WageRateSource

logger = structlog.get_logger(__name__)


class TimeReportingService:
    """Weekly and pay-period rollups over closed time blocks.

    Reads are not snapshots: a block closed while a report is being built
    may or may not be included.
    """

    def __init__(
        self,
        queries: TimeBlockQueryService,
        *,
        rates: Optional[WageRateSource] = None,
        workers: Optional[WorkerDirectory] = None,
        calculator: Optional[OvertimeCalculator] = None,
    ):
        self._queries = queries
        self._rates = rates or FixedRateSource()
        self._workers = workers
        self._calculator = calculator or StandardOvertimeCalculator()

    def generate_weekly_report(self, worker_id: int, week_start: date) -> WeeklyReport:
        monday = monday_of(week_start)
        sunday_next = monday + timedelta(days=DAYS_PER_WEEK)

        by_day: dict[date, list[float]] = defaultdict(list)
        for b in self._queries.closed_blocks(worker_id, monday, sunday_next):
            by_day[b.work_date].append(b.hours_worked)

        entries: list[DailyEntry] = []
        for day in iter_days(monday, sunday_next):
            hours = sum(by_day.get(day, []))
            entries.append(
                DailyEntry(
                    work_date=day,
                    hours=hours,
                    block_count=len(by_day.get(day, [])),
                    overtime_hours=self._calculator.daily_overtime(hours),
                )
            )

        weekly_total = sum(e.hours for e in entries)
        regular, overtime = self._calculator.weekly_split(weekly_total)

        report = WeeklyReport(
            worker_id=worker_id,
            week_start_date=monday,
            daily_entries=tuple(entries),
            total_regular_hours=regular,
            total_overtime_hours=overtime,
            weekly_total=weekly_total,
            daily_overtime_hours=sum(e.overtime_hours for e in entries),
        )
        logger.debug(
            "weekly_report_generated",
            worker_id=worker_id,
            week_start=monday.isoformat(),
            weekly_total=round(weekly_total, 4),
        )
        return report

    def calculate_payroll(self, worker_id: int, period_start: date, period_end: date) -> PayrollRecord:
        """Pay period ``[period_start, period_end)``; no weekly overtime split."""
        require_date_range(period_start, period_end)

        total = sum(b.hours_worked for b in self._queries.closed_blocks(worker_id, period_start, period_end))
        rate = self._rates.hourly_rate(worker_id)
        return PayrollRecord(
            worker_id=worker_id,
            period_start=period_start,
            period_end=period_end,
            total_hours=total,
            hourly_rate=rate,
            estimated_pay=total * rate,
        )

    def generate_overtime_report(self, week_start: date) -> OvertimeReport:
        """Weekly overtime for every active worker in the directory."""
        if self._workers is None:
            raise ValidationError("Overtime report needs a worker directory")

        monday = monday_of(week_start)
        rows: list[OvertimeWorkerRow] = []
        cost = 0.0
        for worker in self._workers.list_active():
            report = self.generate_weekly_report(worker.worker_id, monday)
            if not report.is_weekly_overtime:
                continue
            rows.append(
                OvertimeWorkerRow(
                    worker_id=worker.worker_id,
                    worker_name=worker.full_name,
                    regular_hours=report.total_regular_hours,
                    overtime_hours=report.total_overtime_hours,
                    daily_overtime_breakdown={
                        e.work_date: e.overtime_hours for e in report.daily_entries if e.is_overtime
                    },
                )
            )
            cost += report.total_overtime_hours * self._calculator.overtime_rate(
                self._rates.hourly_rate(worker.worker_id)
            )

        total_overtime = sum(r.overtime_hours for r in rows)
        logger.info("overtime_report_generated", week_start=monday.isoformat(), workers=len(rows))
        return OvertimeReport(
            week_start_date=monday,
            workers=tuple(rows),
            total_overtime_hours=total_overtime,
            estimated_overtime_cost=cost,
        )
