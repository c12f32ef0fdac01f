from __future__ import annotations

from typing import Mapping, Optional, Protocol

from ..core.constants import DEFAULT_HOURLY_RATE


class WageRateSource(Protocol):
    """External wage lookup; the engine only multiplies by what it returns."""

    def hourly_rate(self, worker_id: int) -> float:
        raise NotImplementedError


class FixedRateSource(WageRateSource):
    """Flat rate with optional per-worker overrides (demo/testing wiring)."""

    def __init__(self, default_rate: float = DEFAULT_HOURLY_RATE, overrides: Optional[Mapping[int, float]] = None):
        self._default = float(default_rate)
        self._overrides = dict(overrides or {})

    def hourly_rate(self, worker_id: int) -> float:
        return float(self._overrides.get(worker_id, self._default))
