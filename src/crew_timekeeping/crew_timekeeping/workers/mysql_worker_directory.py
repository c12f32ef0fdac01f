from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Worker
from .repository import WorkerDirectory


class MySQLWorkerDirectory(WorkerDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT worker_id, full_name, is_active FROM workers WHERE worker_id=%s",
                (worker_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Worker(
                worker_id=int(row["worker_id"]),
                full_name=row["full_name"],
                is_active=bool(row.get("is_active", True)),
            )

    def list_active(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT worker_id, full_name, is_active
                FROM workers
                WHERE is_active=1
                ORDER BY worker_id ASC
                """
            )
            return [
                Worker(worker_id=int(r["worker_id"]), full_name=r["full_name"], is_active=True)
                for r in fetchall(cur)
            ]
