"""Per-peer collection of phi accrual detectors.

A membership subsystem usually monitors many peers at once; the registry
keeps one ``Detector`` per peer key and applies the configured threshold.
"""

from __future__ import annotations

import logging
from datetime import datetime

from phi_accrual.config import FailureDetectorConfig
from phi_accrual.detector import Detector
from phi_accrual.statistics import local_now

__all__ = ["FailureDetectorRegistry"]


class FailureDetectorRegistry:
    """Phi accrual failure detectors keyed by peer.

    Parameters
    ----------
    config : FailureDetectorConfig | None
        Window length for new detectors and the availability threshold.
    name : str
        Suffix of the ``phi_accrual.registry`` logger.

    Examples
    --------
    >>> registry = FailureDetectorRegistry(FailureDetectorConfig(threshold=8.0))
    >>> await registry.heartbeat("10.0.0.2:25520")
    >>> await registry.is_available("10.0.0.2:25520")
    True
    >>> await registry.phi("unknown-peer")
    0.0
    """

    def __init__(
        self, config: FailureDetectorConfig | None = None, *, name: str = "default"
    ) -> None:
        self._config = config or FailureDetectorConfig()
        self._detectors: dict[str, Detector] = {}
        self._logger = logging.getLogger(f"phi_accrual.registry.{name}")

    @property
    def config(self) -> FailureDetectorConfig:
        return self._config

    @property
    def tracked_peers(self) -> frozenset[str]:
        """Return the set of peer keys that have sent at least one heartbeat."""
        return frozenset(self._detectors)

    def detector(self, peer: str) -> Detector | None:
        return self._detectors.get(peer)

    async def heartbeat(self, peer: str, arrived_at: datetime | None = None) -> None:
        """Record arrival of a heartbeat from *peer*.

        Parameters
        ----------
        peer : str
            Identifier of the peer that sent the heartbeat.
        arrived_at : datetime | None
            Arrival time, ``local_now()`` when omitted.
        """
        at = arrived_at if arrived_at is not None else local_now()
        detector = self._detectors.get(peer)
        if detector is None:
            detector = Detector.from_config(self._config, created_at=at)
            self._detectors[peer] = detector
            self._logger.debug("Tracking peer %s", peer)
        await detector.insert(at)

    async def phi(self, peer: str, t: datetime | None = None) -> float:
        """Suspicion level for *peer*.

        ``0.0`` if it never sent a heartbeat or its window holds fewer than
        ``min_samples`` intervals.
        """
        detector = self._detectors.get(peer)
        if detector is None:
            return 0.0
        return await self._phi(detector, t if t is not None else local_now())

    async def _phi(self, detector: Detector, at: datetime) -> float:
        phi, samples = await detector.phi_and_sample_count(at)
        if samples < self._config.min_samples:
            return 0.0
        return phi

    async def is_available(self, peer: str, t: datetime | None = None) -> bool:
        """Check if *peer* is considered available (phi below threshold)."""
        return await self.phi(peer, t) < self._config.threshold

    async def unreachable(self, t: datetime | None = None) -> frozenset[str]:
        """Peers whose phi is at or above the threshold at instant *t*.

        Every peer is evaluated against the same instant.
        """
        at = t if t is not None else local_now()
        result: set[str] = set()
        for peer, detector in list(self._detectors.items()):
            if await self._phi(detector, at) >= self._config.threshold:
                result.add(peer)
        return frozenset(result)

    def remove(self, peer: str) -> None:
        """Stop tracking *peer* entirely.

        Called when a peer is declared down so it no longer accumulates
        stale history.
        """
        if self._detectors.pop(peer, None) is not None:
            self._logger.debug("Stopped tracking peer %s", peer)
