from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .clock.service import ClockService
from .core.enums import StorageBackend
from .database.connection import DatabaseConnection, DBConfig
from .payroll.rates import FixedRateSource, WageRateSource
from .payroll.service import TimeReportingService
from .segments.memory_repository import InMemoryWorkSegmentRepository
from .segments.mysql_segment_repository import MySQLWorkSegmentRepository
from .segments.repository import WorkSegmentRepository
from .segments.service import WorkSegmentService
from .timeblocks.memory_repository import InMemoryTimeBlockRepository
from .timeblocks.mysql_timeblock_repository import MySQLTimeBlockRepository
from .timeblocks.query import TimeBlockQueryService
from .timeblocks.repository import TimeBlockRepository
from .workers.memory_directory import InMemoryWorkerDirectory
from .workers.model import Worker
from .workers.mysql_worker_directory import MySQLWorkerDirectory
from .workers.repository import WorkerDirectory


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    blocks_repo: TimeBlockRepository
    segments_repo: WorkSegmentRepository
    workers: WorkerDirectory
    rates: WageRateSource

    time_block_queries: TimeBlockQueryService
    clock_service: ClockService
    segment_service: WorkSegmentService
    reporting_service: TimeReportingService


def _wire(
    *,
    conn: Optional[DatabaseConnection],
    blocks_repo: TimeBlockRepository,
    segments_repo: WorkSegmentRepository,
    workers: WorkerDirectory,
    rates: WageRateSource,
    check_roster: bool = True,
) -> Container:
    queries = TimeBlockQueryService(blocks_repo)
    return Container(
        conn=conn,
        blocks_repo=blocks_repo,
        segments_repo=segments_repo,
        workers=workers,
        rates=rates,
        time_block_queries=queries,
        clock_service=ClockService(blocks_repo, queries, workers if check_roster else None),
        segment_service=WorkSegmentService(segments_repo),
        reporting_service=TimeReportingService(queries, rates=rates, workers=workers),
    )


def build_container(*, db_config: dict, hourly_rate: float | None = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    rates = FixedRateSource(hourly_rate) if hourly_rate is not None else FixedRateSource()
    return _wire(
        conn=conn,
        blocks_repo=MySQLTimeBlockRepository(conn),
        segments_repo=MySQLWorkSegmentRepository(conn),
        workers=MySQLWorkerDirectory(conn),
        rates=rates,
    )


def build_memory_container(
    *,
    workers: Optional[Iterable[Worker]] = None,
    rates: Optional[WageRateSource] = None,
) -> Container:
    """In-process wiring. Without a roster, clock-in accepts any worker id."""
    return _wire(
        conn=None,
        blocks_repo=InMemoryTimeBlockRepository(),
        segments_repo=InMemoryWorkSegmentRepository(),
        workers=InMemoryWorkerDirectory(workers or ()),
        rates=rates or FixedRateSource(),
        check_roster=workers is not None,
    )


def roster_from_settings(entries) -> Optional[list[Worker]]:
    """``[(worker_id, full_name), ...]`` from settings; ``None`` when unset or empty."""
    if not entries:
        return None
    return [Worker(int(worker_id), str(full_name)) for worker_id, full_name in entries]


def build_container_for(
    storage: str,
    *,
    db_config: dict,
    hourly_rate: float | None = None,
    workers=None,
) -> Container:
    if StorageBackend(storage) is StorageBackend.MEMORY:
        return build_memory_container(
            workers=roster_from_settings(workers),
            rates=FixedRateSource(hourly_rate) if hourly_rate is not None else None,
        )
    return build_container(db_config=db_config, hourly_rate=hourly_rate)
