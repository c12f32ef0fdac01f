from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import hours_between
from .base import CrewHoursCalculator


class TeamMultiplierCalculator(CrewHoursCalculator):
    """Crew multiplier: elapsed hours x declared team size.

    No ordering check: ``end < start`` gives a negative total.
    """

    def crew_hours(self, *, start: datetime, end: datetime, team_size: int) -> float:
        return hours_between(start, end) * int(team_size)
