class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AlreadyClockedInError(DomainError):
    """Raised when a worker clocks in while an open time block exists."""

    def __init__(self, worker_id: int):
        super().__init__(f"Worker {worker_id} is already clocked in")
        self.worker_id = worker_id


class NotClockedInError(DomainError):
    """Raised when a worker clocks out without an open time block."""

    def __init__(self, worker_id: int):
        super().__init__(f"Worker {worker_id} is not currently clocked in")
        self.worker_id = worker_id


class InvalidStateError(DomainError):
    """Raised when stored data breaks an invariant (e.g. open block without clock-in time)."""


class WorkerNotFoundError(DomainError):
    """Raised when the worker directory has no active worker for an id."""


class StoreError(Exception):
    """Persistence failure (I/O, connection, constraint). Propagated unchanged."""
