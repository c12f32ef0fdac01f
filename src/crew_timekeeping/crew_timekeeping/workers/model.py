from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Worker:
    """Worker identity as published by the roster (read-only here)."""

    worker_id: int
    full_name: str
    is_active: bool = True
