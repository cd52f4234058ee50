"""Phi accrual failure detection for a single monitored peer.

Implements the phi accrual failure detector described by Hayashibara et al.,
which outputs a continuous suspicion level rather than a binary alive/dead
decision.  This allows each consumer to choose its own threshold.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from phi_accrual.distribution import normal_sf, phi_from_tail
from phi_accrual.lock import ReadWriteLock
from phi_accrual.statistics import ONE_MS, Statistics

if TYPE_CHECKING:
    from phi_accrual.config import FailureDetectorConfig

__all__ = ["Detector", "WindowSnapshot"]


@dataclass(frozen=True)
class WindowSnapshot:
    """Consistent view of a detector's window at one instant.

    Parameters
    ----------
    intervals : tuple[int, ...]
        Retained inter-arrival intervals in milliseconds, oldest first.
    last_arrived_at : datetime
        Most recent recorded arrival.
    window_length : int
        Configured window bound.
    mean : float
        Mean interval in milliseconds.
    variance : float
        Population variance of the intervals.
    """

    intervals: tuple[int, ...]
    last_arrived_at: datetime
    window_length: int
    mean: float
    variance: float


class Detector:
    """Phi accrual failure detector for one peer (Hayashibara et al.).

    Wraps a ``Statistics`` window behind a ``ReadWriteLock``: ``insert``
    takes the exclusive side, queries take the shared side.  Nothing is
    cached between calls; every ``phi`` is derived from the current
    window.

    ``phi = -log10(1 - F(elapsed))`` where ``F`` is the normal CDF fitted
    to the window and ``elapsed`` the milliseconds since the last arrival.

    Parameters
    ----------
    window_length : int
        Number of inter-arrival intervals to retain.
    created_at : datetime | None
        Initial ``last_arrived_at`` before the first heartbeat.

    Examples
    --------
    >>> detector = Detector(100)
    >>> for ms in (0, 1000, 2010, 2990, 4000):
    ...     await detector.insert(t0 + timedelta(milliseconds=ms))
    >>> await detector.phi(t0 + timedelta(milliseconds=5000))
    0.30...
    >>> await detector.phi(t0 + timedelta(seconds=30))
    inf
    """

    def __init__(self, window_length: int, *, created_at: datetime | None = None) -> None:
        self._statistics = Statistics(window_length, created_at)
        self._lock = ReadWriteLock()

    @classmethod
    def from_config(
        cls, config: FailureDetectorConfig, *, created_at: datetime | None = None
    ) -> Detector:
        return cls(config.window_length, created_at=created_at)

    @property
    def window_length(self) -> int:
        return self._statistics.window_length

    async def insert(self, arrived_at: datetime) -> None:
        """Record one heartbeat arrival.

        Must be called in increasing timestamp order for a given peer.
        """
        async with self._lock.write():
            self._statistics.insert(arrived_at)

    async def phi(self, t: datetime) -> float:
        """Calculate the suspicion level at instant *t*.

        The window statistics and the last arrival are read under a single
        shared acquisition, so a concurrent ``insert`` can never mix state
        from before and after its write.

        Parameters
        ----------
        t : datetime
            Query instant, typically the current time.

        Returns
        -------
        float
            Non-negative phi value; ``inf`` when the silence is beyond
            anything the window can explain.
        """
        phi, _ = await self.phi_and_sample_count(t)
        return phi

    async def phi_and_sample_count(self, t: datetime) -> tuple[float, int]:
        """Suspicion level at *t* and the number of intervals it was fitted to.

        Both values come from the same shared acquisition.
        """
        async with self._lock.read():
            variance, mean = self._statistics.variance_and_mean()
            last_arrived_at = self._statistics.last_arrived_at
            samples = len(self._statistics)

        sigma = math.sqrt(variance)
        elapsed_ms = (t - last_arrived_at) / ONE_MS
        return phi_from_tail(normal_sf(elapsed_ms, mean, sigma)), samples

    async def last_arrived_at(self) -> datetime:
        async with self._lock.read():
            return self._statistics.last_arrived_at

    async def snapshot(self) -> WindowSnapshot:
        """Return the window contents and derived statistics."""
        async with self._lock.read():
            variance, mean = self._statistics.variance_and_mean()
            return WindowSnapshot(
                intervals=self._statistics.arrival_intervals,
                last_arrived_at=self._statistics.last_arrived_at,
                window_length=self._statistics.window_length,
                mean=mean,
                variance=variance,
            )

    async def is_available(self, t: datetime, threshold: float) -> bool:
        """Check if the peer is considered available (phi below *threshold*)."""
        return await self.phi(t) < threshold

    def __repr__(self) -> str:
        return f"Detector({self._statistics!r})"
