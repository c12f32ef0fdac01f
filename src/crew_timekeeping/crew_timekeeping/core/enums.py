from __future__ import annotations

from enum import Enum


class ClockState(str, Enum):
    """Clock state of a single worker."""

    CLOCKED_OUT = "CLOCKED_OUT"
    CLOCKED_IN = "CLOCKED_IN"


class StorageBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"
