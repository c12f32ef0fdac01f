from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import AlreadyClockedInError, NotClockedInError, StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import TimeBlock
from .repository import TimeBlockRepository

_COLUMNS = "block_id, worker_id, work_date, block_number, clock_in_time, clock_out_time, hours_worked, is_active"

OPEN_WORKER_KEY = "uq_time_blocks_open_worker"


def _to_block(r: dict) -> TimeBlock:
    return TimeBlock(
        block_id=int(r["block_id"]),
        worker_id=int(r["worker_id"]),
        work_date=r["work_date"],
        block_number=int(r["block_number"]),
        clock_in_time=r.get("clock_in_time"),
        clock_out_time=r.get("clock_out_time"),
        hours_worked=float(r.get("hours_worked") or 0.0),
        is_active=bool(r["is_active"]),
    )


class MySQLTimeBlockRepository(TimeBlockRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, block: TimeBlock) -> TimeBlock:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO time_blocks(worker_id, work_date, block_number, clock_in_time,
                                            clock_out_time, hours_worked, is_active)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        block.worker_id,
                        block.work_date,
                        block.block_number,
                        block.clock_in_time,
                        block.clock_out_time,
                        float(block.hours_worked),
                        1 if block.is_active else 0,
                    ),
                )
                return replace(block, block_id=int(cur.lastrowid))
        except StoreError as e:
            # The unique key on the generated open_worker_id column is the
            # store-level guard for "one open block per worker". A racing
            # writer may trip the day/block key first, so any duplicate on an
            # open block is resolved against the committed open block.
            if block.is_active and is_duplicate_key(e):
                if is_duplicate_key(e, OPEN_WORKER_KEY) or self.find_active(block.worker_id) is not None:
                    raise AlreadyClockedInError(block.worker_id) from e
            raise

    def update(self, block: TimeBlock) -> TimeBlock:
        with db_cursor(self._conn_factory) as (_, cur):
            # Blocks are mutated once, from open to closed.
            cur.execute(
                """
                UPDATE time_blocks
                SET clock_in_time=%s, clock_out_time=%s, hours_worked=%s, is_active=%s
                WHERE block_id=%s AND is_active=1
                """,
                (
                    block.clock_in_time,
                    block.clock_out_time,
                    float(block.hours_worked),
                    1 if block.is_active else 0,
                    block.block_id,
                ),
            )
            if cur.rowcount == 0:
                cur.execute("SELECT block_id FROM time_blocks WHERE block_id=%s", (block.block_id,))
                if fetchone(cur) is None:
                    raise StoreError(f"Time block {block.block_id} not found")
                raise NotClockedInError(block.worker_id)
            return block

    def find_active(self, worker_id: int) -> Optional[TimeBlock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_blocks
                WHERE worker_id=%s AND is_active=1
                LIMIT 1
                """,
                (worker_id,),
            )
            r = fetchone(cur)
            return _to_block(r) if r else None

    def find_by_date_range(self, worker_id: int, start: date, end: date) -> Sequence[TimeBlock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_blocks
                WHERE worker_id=%s AND work_date >= %s AND work_date < %s
                ORDER BY work_date ASC, block_number ASC
                """,
                (worker_id, start, end),
            )
            return [_to_block(r) for r in fetchall(cur)]

    def find_workers_with_active_blocks(self) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT worker_id FROM time_blocks WHERE is_active=1 ORDER BY worker_id")
            return [int(r["worker_id"]) for r in fetchall(cur)]
