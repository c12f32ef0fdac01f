from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerDirectory(Protocol):
    """Read-only view of the worker roster."""

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Worker]:
        raise NotImplementedError
