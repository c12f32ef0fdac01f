from __future__ import annotations

import json
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.exceptions import InvalidStateError, StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkSegment
from .repository import WorkSegmentRepository

_COLUMNS = "segment_id, work_order_id, start_time, end_time, team_size, team_members, total_hours"


def _to_segment(r: dict) -> WorkSegment:
    return WorkSegment(
        segment_id=int(r["segment_id"]),
        work_order_id=int(r["work_order_id"]) if r.get("work_order_id") is not None else None,
        start_time=r["start_time"],
        end_time=r.get("end_time"),
        team_size=int(r["team_size"]),
        team_members=tuple(json.loads(r.get("team_members") or "[]")),
        total_hours=float(r.get("total_hours") or 0.0),
    )


def _insert(cur, segment: WorkSegment) -> WorkSegment:
    cur.execute(
        """
        INSERT INTO work_segments(work_order_id, start_time, end_time, team_size, team_members, total_hours)
        VALUES(%s,%s,%s,%s,%s,%s)
        """,
        (
            segment.work_order_id,
            segment.start_time,
            segment.end_time,
            int(segment.team_size),
            json.dumps(list(segment.team_members)),
            float(segment.total_hours),
        ),
    )
    return replace(segment, segment_id=int(cur.lastrowid))


def _close(cur, segment: WorkSegment) -> WorkSegment:
    # Only an open row may be closed; a second writer matches nothing.
    cur.execute(
        """
        UPDATE work_segments
        SET end_time=%s, total_hours=%s
        WHERE segment_id=%s AND end_time IS NULL
        """,
        (segment.end_time, float(segment.total_hours), segment.segment_id),
    )
    if cur.rowcount == 0:
        cur.execute("SELECT segment_id FROM work_segments WHERE segment_id=%s", (segment.segment_id,))
        if fetchone(cur) is None:
            raise StoreError(f"Work segment {segment.segment_id} not found")
        raise InvalidStateError(f"Work segment {segment.segment_id} is already closed")
    return segment


class MySQLWorkSegmentRepository(WorkSegmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, segment: WorkSegment) -> WorkSegment:
        with db_cursor(self._conn_factory) as (_, cur):
            return _insert(cur, segment)

    def update(self, segment: WorkSegment) -> WorkSegment:
        with db_cursor(self._conn_factory) as (_, cur):
            return _close(cur, segment)

    def close_and_open(self, closed: WorkSegment, opened: WorkSegment) -> tuple[WorkSegment, WorkSegment]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _close(cur, closed), _insert(cur, opened)

    def get(self, segment_id: int) -> Optional[WorkSegment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_segments WHERE segment_id=%s", (int(segment_id),))
            r = fetchone(cur)
            return _to_segment(r) if r else None

    def find_by_work_order(self, work_order_id: int) -> Sequence[WorkSegment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_segments
                WHERE work_order_id=%s
                ORDER BY start_time ASC, segment_id ASC
                """,
                (int(work_order_id),),
            )
            return [_to_segment(r) for r in fetchall(cur)]

    def find_by_date_range(self, start: datetime, end: datetime) -> Sequence[WorkSegment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_segments
                WHERE start_time >= %s AND start_time < %s
                ORDER BY start_time ASC, segment_id ASC
                """,
                (start, end),
            )
            return [_to_segment(r) for r in fetchall(cur)]
