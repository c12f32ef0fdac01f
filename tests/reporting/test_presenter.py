from datetime import date, datetime

import pytest

from src.crew_timekeeping.crew_timekeeping.payroll.model import DailyEntry, PayrollRecord, WeeklyReport
from src.crew_timekeeping.crew_timekeeping.reporting.presenter import (
    format_hours,
    format_time_block,
    payroll_view,
    round_to_quarter_hour,
    time_block_view,
    weekly_report_view,
)
from src.crew_timekeeping.crew_timekeeping.timeblocks.model import TimeBlock


@pytest.mark.parametrize(
    "hours, expected",
    [
        (8.5, "8:30"),
        (0.1, "0:06"),
        (0.0, "0:00"),
        (7.999, "8:00"),
        (0.01, "0:01"),
        (42.25, "42:15"),
        (-1.5, "-1:30"),
    ],
)
def test_format_hours_rounds_to_nearest_minute(hours, expected):
    assert format_hours(hours) == expected


def test_round_to_quarter_hour():
    assert round_to_quarter_hour(7.9) == 8.0
    assert round_to_quarter_hour(7.1) == 7.0
    assert round_to_quarter_hour(7.13) == 7.25


def test_format_time_block_states():
    day = date(2026, 1, 5)
    open_block = TimeBlock(worker_id=1, work_date=day, block_number=2, clock_in_time=datetime(2026, 1, 5, 13, 0))
    done = TimeBlock(
        worker_id=1,
        work_date=day,
        block_number=1,
        clock_in_time=datetime(2026, 1, 5, 7, 0),
        clock_out_time=datetime(2026, 1, 5, 10, 0),
        hours_worked=3.0,
        is_active=False,
    )

    assert format_time_block(done) == "Block 1: 07:00 - 10:00"
    assert format_time_block(open_block) == "Block 2: 13:00 - Active"
    assert format_time_block(TimeBlock(1, day, 3, None)) == "Block 3: No time recorded"

    view = time_block_view(open_block, now=datetime(2026, 1, 5, 14, 15))
    assert view["hours_display"] == "1:15"
    assert view["clock_out"] is None


def test_report_views():
    monday = date(2026, 1, 5)
    report = WeeklyReport(
        worker_id=1,
        week_start_date=monday,
        daily_entries=(DailyEntry(work_date=monday, hours=8.5, block_count=1, overtime_hours=0.5),),
        total_regular_hours=8.5,
        total_overtime_hours=0.0,
        weekly_total=8.5,
        daily_overtime_hours=0.5,
    )
    view = weekly_report_view(report)
    assert view["total_hours"] == "8:30"
    assert view["is_overtime"] is False
    assert view["daily"][0] == {"date": "2026-01-05", "hours": "8:30", "blocks": 1, "is_overtime": True}

    record = PayrollRecord(1, monday, date(2026, 1, 19), 80.25, 15.0, 1203.75)
    assert payroll_view(record)["estimated_pay"] == "$1203.75"
    assert payroll_view(record)["total_hours"] == "80:15"
