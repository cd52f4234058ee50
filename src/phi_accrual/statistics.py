"""Sliding window of heartbeat inter-arrival intervals.

Provides ``Statistics``, the plain (not concurrency-safe) record that a
``Detector`` guards, and ``local_now`` for the default timestamp source.
"""

from __future__ import annotations

import logging
import statistics
from collections import deque
from datetime import datetime, timedelta

__all__ = ["Statistics", "local_now"]

logger = logging.getLogger("phi_accrual.statistics")

ONE_MS = timedelta(milliseconds=1)


def local_now() -> datetime:
    """Return the current local time as a timezone-aware ``datetime``."""
    return datetime.now().astimezone()


class Statistics:
    """Bounded window of inter-arrival intervals for one monitored peer.

    The first ``insert`` only records the arrival time; every later one
    appends the elapsed milliseconds since the previous arrival. Once the
    window holds ``window_length`` intervals the oldest is evicted before
    the new one is appended.

    Arrivals must be inserted in increasing timestamp order. An earlier
    timestamp is not rejected and produces a negative interval.

    Parameters
    ----------
    window_length : int
        Maximum number of intervals retained. ``0`` is accepted and keeps
        the window permanently empty.
    created_at : datetime | None
        Initial value of ``last_arrived_at``. Defaults to ``local_now()``.

    Raises
    ------
    ValueError
        If *window_length* is negative or not an integer.

    Examples
    --------
    >>> stats = Statistics(10)
    >>> stats.insert(local_now())
    >>> stats.arrival_intervals
    ()
    """

    def __init__(self, window_length: int, created_at: datetime | None = None) -> None:
        if isinstance(window_length, bool) or not isinstance(window_length, int):
            msg = f"window_length must be an int, got {type(window_length).__name__}"
            raise ValueError(msg)
        if window_length < 0:
            msg = f"window_length must be >= 0, got {window_length}"
            raise ValueError(msg)
        self._window_length = window_length
        self._intervals: deque[int] = deque(maxlen=window_length)
        self._last_arrived_at = created_at if created_at is not None else local_now()
        self._n = 0

    @property
    def window_length(self) -> int:
        return self._window_length

    @property
    def last_arrived_at(self) -> datetime:
        return self._last_arrived_at

    @property
    def arrival_intervals(self) -> tuple[int, ...]:
        """Retained intervals in milliseconds, oldest first."""
        return tuple(self._intervals)

    @property
    def n(self) -> int:
        """Arrivals counted towards the window, including the bootstrap one."""
        return self._n

    def __len__(self) -> int:
        return len(self._intervals)

    def insert(self, arrived_at: datetime) -> None:
        """Record a heartbeat arrival.

        Parameters
        ----------
        arrived_at : datetime
            Arrival time of the heartbeat.
        """
        if self._n == 0:
            self._last_arrived_at = arrived_at
            self._n = 1
            return

        if self._n - 1 == self._window_length:
            if self._intervals:
                evicted = self._intervals.popleft()
                logger.debug("Evicted interval %dms (window=%d)", evicted, self._window_length)
            self._n -= 1

        # maxlen=0 discards the append, so a zero-length window stays empty
        self._intervals.append(int((arrived_at - self._last_arrived_at) / ONE_MS))
        self._last_arrived_at = arrived_at
        self._n += 1

    def variance_and_mean(self) -> tuple[float, float]:
        """Population variance and mean of the current window.

        Both values are derived from the same window contents and share
        the same denominator (the window length).

        Returns
        -------
        tuple[float, float]
            ``(variance, mean)``; ``(0.0, 0.0)`` for an empty window.
        """
        if not self._intervals:
            return 0.0, 0.0
        mu = statistics.fmean(self._intervals)
        variance = float(statistics.pvariance(self._intervals, mu))
        return max(variance, 0.0), mu

    def __repr__(self) -> str:
        return (
            f"Statistics(window_length={self._window_length}, "
            f"intervals={len(self._intervals)}, n={self._n})"
        )
