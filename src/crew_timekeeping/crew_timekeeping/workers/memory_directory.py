from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import Worker
from .repository import WorkerDirectory


class InMemoryWorkerDirectory(WorkerDirectory):
    def __init__(self, workers: Iterable[Worker] = ()):
        self._by_id = {w.worker_id: w for w in workers}

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self._by_id.get(worker_id)

    def list_active(self) -> Sequence[Worker]:
        return sorted((w for w in self._by_id.values() if w.is_active), key=lambda w: w.worker_id)
