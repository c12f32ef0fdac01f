from __future__ import annotations

from abc import ABC, abstractmethod


class OvertimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for overtime rules)."""

    @abstractmethod
    def daily_overtime(self, day_total: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def weekly_split(self, weekly_total: float) -> tuple[float, float]:
        """Return ``(regular, overtime)``; the two always add up to ``weekly_total``."""

        raise NotImplementedError

    @abstractmethod
    def overtime_rate(self, hourly_rate: float) -> float:
        raise NotImplementedError
