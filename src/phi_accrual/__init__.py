from phi_accrual.config import (
    FailureDetectorConfig,
    PhiAccrualConfig,
    discover_config,
    load_config,
)
from phi_accrual.detector import Detector, WindowSnapshot
from phi_accrual.distribution import normal_cdf, normal_sf, phi_from_tail
from phi_accrual.lock import ReadWriteLock
from phi_accrual.registry import FailureDetectorRegistry
from phi_accrual.statistics import Statistics, local_now

__all__ = [
    "Detector",
    "FailureDetectorConfig",
    "FailureDetectorRegistry",
    "PhiAccrualConfig",
    "ReadWriteLock",
    "Statistics",
    "WindowSnapshot",
    "discover_config",
    "load_config",
    "local_now",
    "normal_cdf",
    "normal_sf",
    "phi_from_tail",
]
