from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WorkSegment:
    """Team-scoped labor interval valued by headcount x duration.

    ``team_size`` drives the hour formula; ``team_members`` is kept for audit
    and display and may list fewer people than ``team_size``.
    """

    start_time: datetime
    team_size: int
    team_members: tuple[str, ...] = ()
    end_time: Optional[datetime] = None
    total_hours: float = 0.0
    work_order_id: Optional[int] = None
    segment_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.end_time is None
