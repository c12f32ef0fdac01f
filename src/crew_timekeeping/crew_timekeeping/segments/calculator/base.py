from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class CrewHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for crew labor-hours)."""

    @abstractmethod
    def crew_hours(self, *, start: datetime, end: datetime, team_size: int) -> float:
        raise NotImplementedError
