from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..payroll.model import OvertimeReport, PayrollRecord, WeeklyReport
from ..segments.model import WorkSegment
from ..timeblocks.model import TimeBlock


def format_hours(hours: float) -> str:
    """Decimal hours as ``H:MM``, rounded to the nearest whole minute.

    ``8.5 -> "8:30"``, ``0.1 -> "0:06"``, ``7.999 -> "8:00"``.
    """
    total_minutes = int(round(abs(hours) * 60))
    sign = "-" if hours < 0 and total_minutes else ""
    return f"{sign}{total_minutes // 60}:{total_minutes % 60:02d}"


def round_to_quarter_hour(hours: float) -> float:
    return round(hours * 4.0) / 4.0


def _hhmm(ts: Optional[datetime]) -> str:
    return ts.strftime("%H:%M") if ts else "-"


def format_time_block(block: TimeBlock) -> str:
    """e.g. ``Block 1: 07:00 - 10:00``."""
    label = f"Block {block.block_number}"
    if block.clock_in_time is None:
        return f"{label}: No time recorded"
    if block.clock_out_time is not None:
        return f"{label}: {_hhmm(block.clock_in_time)} - {_hhmm(block.clock_out_time)}"
    if block.is_active:
        return f"{label}: {_hhmm(block.clock_in_time)} - Active"
    return f"{label}: {_hhmm(block.clock_in_time)} - Not completed"


def time_block_view(block: TimeBlock, *, now: Optional[datetime] = None) -> dict:
    hours = block.elapsed_hours(now) if (block.is_active and now) else block.hours_worked
    return {
        "block_id": block.block_id,
        "worker_id": block.worker_id,
        "work_date": block.work_date.isoformat(),
        "block_number": block.block_number,
        "clock_in": block.clock_in_time.isoformat() if block.clock_in_time else None,
        "clock_out": block.clock_out_time.isoformat() if block.clock_out_time else None,
        "hours_worked": hours,
        "hours_display": format_hours(hours),
        "is_active": block.is_active,
        "label": format_time_block(block),
    }


def work_segment_view(segment: WorkSegment) -> dict:
    return {
        "segment_id": segment.segment_id,
        "work_order_id": segment.work_order_id,
        "start_time": segment.start_time.isoformat(),
        "end_time": segment.end_time.isoformat() if segment.end_time else None,
        "team_size": segment.team_size,
        "team_members": list(segment.team_members),
        "total_hours": segment.total_hours,
        "hours_display": format_hours(segment.total_hours),
        "is_active": segment.is_active,
    }


def weekly_report_view(report: WeeklyReport) -> dict:
    return {
        "worker_id": report.worker_id,
        "week_start": report.week_start_date.isoformat(),
        "weekly_total": report.weekly_total,
        "total_hours": format_hours(report.weekly_total),
        "regular_hours": format_hours(report.total_regular_hours),
        "overtime_hours": format_hours(report.total_overtime_hours),
        "daily_overtime_hours": format_hours(report.daily_overtime_hours),
        "is_overtime": report.is_weekly_overtime,
        "daily": [
            {
                "date": e.work_date.isoformat(),
                "hours": format_hours(e.hours),
                "blocks": e.block_count,
                "is_overtime": e.is_overtime,
            }
            for e in report.daily_entries
        ],
    }


def payroll_view(record: PayrollRecord) -> dict:
    return {
        "worker_id": record.worker_id,
        "pay_period": f"{record.period_start.isoformat()} - {record.period_end.isoformat()}",
        "total_hours": format_hours(record.total_hours),
        "total_hours_decimal": record.total_hours,
        "hourly_rate": record.hourly_rate,
        "estimated_pay": f"${record.estimated_pay:.2f}",
    }


def overtime_report_view(report: OvertimeReport) -> dict:
    return {
        "week_start": report.week_start_date.isoformat(),
        "total_overtime_hours": format_hours(report.total_overtime_hours),
        "estimated_overtime_cost": f"${report.estimated_overtime_cost:.2f}",
        "workers": [
            {
                "worker_id": r.worker_id,
                "worker_name": r.worker_name,
                "regular_hours": format_hours(r.regular_hours),
                "overtime_hours": format_hours(r.overtime_hours),
                "daily_overtime": {d.isoformat(): format_hours(h) for d, h in sorted(r.daily_overtime_breakdown.items())},
            }
            for r in report.workers
        ],
    }
