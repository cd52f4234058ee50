"""TOML-based configuration for phi accrual failure detectors.

Provides ``load_config`` / ``discover_config`` for loading
``phi_accrual.toml`` and the frozen dataclasses the detector and the
registry are built from.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    "CONFIG_FILENAME",
    "FailureDetectorConfig",
    "PhiAccrualConfig",
    "discover_config",
    "load_config",
]

CONFIG_FILENAME = "phi_accrual.toml"


@dataclass(frozen=True)
class FailureDetectorConfig:
    """Phi accrual failure detector tuning (Hayashibara et al.).

    Parameters
    ----------
    window_length : int
        Inter-arrival intervals retained per peer. Small windows react
        quickly to a new heartbeat rhythm, large ones give steadier
        estimates.
    threshold : float
        Phi value at or above which a peer is considered unreachable.
    min_samples : int
        Intervals a peer must have in its window before the registry
        judges it; until then its phi is reported as ``0.0``.

    Examples
    --------
    >>> FailureDetectorConfig(window_length=50, threshold=12.0)
    FailureDetectorConfig(window_length=50, threshold=12.0, min_samples=1)
    """

    window_length: int = 100
    threshold: float = 8.0
    min_samples: int = 1


@dataclass(frozen=True)
class PhiAccrualConfig:
    """Top-level configuration container.

    Parameters
    ----------
    failure_detector : FailureDetectorConfig
        Detector tuning shared by every monitored peer.

    Examples
    --------
    >>> PhiAccrualConfig().failure_detector.threshold
    8.0
    """

    failure_detector: FailureDetectorConfig = field(
        default_factory=FailureDetectorConfig
    )


def discover_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``phi_accrual.toml``.

    Parameters
    ----------
    start : Path | None
        Directory to start searching from.

    Returns
    -------
    Path | None
        Path to the discovered config file, or ``None`` if not found.
    """
    current = start or Path.cwd()
    current = current.resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(path: Path | None = None) -> PhiAccrualConfig:
    """Load a ``PhiAccrualConfig`` from a TOML file.

    If *path* is ``None``, auto-discovers ``phi_accrual.toml`` by walking up
    from the current working directory.  Returns the default config if no
    file is found.

    Parameters
    ----------
    path : Path | None
        Explicit path to a TOML config file.

    Returns
    -------
    PhiAccrualConfig

    Raises
    ------
    FileNotFoundError
        If an explicit *path* is given but does not exist.

    Examples
    --------
    >>> config = load_config(Path("phi_accrual.toml"))
    >>> config.failure_detector.window_length
    100
    """
    if path is None:
        discovered = discover_config()
        if discovered is None:
            return PhiAccrualConfig()
        path = discovered

    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as f:
        raw = tomllib.load(f)

    failure_detector = FailureDetectorConfig(**raw.get("failure_detector", {}))
    return PhiAccrualConfig(failure_detector=failure_detector)
