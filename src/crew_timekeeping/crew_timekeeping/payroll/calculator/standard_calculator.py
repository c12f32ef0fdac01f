from __future__ import annotations

from .base import OvertimeCalculator
from ...core.constants import OVERTIME_MULTIPLIER, REGULAR_DAILY_HOURS, REGULAR_WEEKLY_HOURS


class StandardOvertimeCalculator(OvertimeCalculator):
    """Standard rule: overtime past 8h a day / 40h a week, paid at 1.5x."""

    def __init__(
        self,
        *,
        daily_threshold: float = REGULAR_DAILY_HOURS,
        weekly_threshold: float = REGULAR_WEEKLY_HOURS,
        multiplier: float = OVERTIME_MULTIPLIER,
    ):
        self.daily_threshold = float(daily_threshold)
        self.weekly_threshold = float(weekly_threshold)
        self.multiplier = float(multiplier)

    def daily_overtime(self, day_total: float) -> float:
        return max(day_total - self.daily_threshold, 0.0)

    def weekly_split(self, weekly_total: float) -> tuple[float, float]:
        regular = min(weekly_total, self.weekly_threshold)
        overtime = max(weekly_total - self.weekly_threshold, 0.0)
        return regular, overtime

    def overtime_rate(self, hourly_rate: float) -> float:
        return hourly_rate * self.multiplier
