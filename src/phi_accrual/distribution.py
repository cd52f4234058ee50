"""Normal-distribution helpers for the phi computation.

The suspicion score only ever needs the upper tail ``1 - F``, so
``normal_sf`` evaluates it directly through ``math.erfc`` rather than
subtracting a CDF value that is already close to one.
"""

from __future__ import annotations

import math

__all__ = ["normal_cdf", "normal_sf", "phi_from_tail"]


def normal_cdf(x: float, mean: float, sigma: float) -> float:
    """Cumulative probability of *x* under the interval model.

    Evaluates ``0.5 + 0.5 * erf((x - mean) / sigma)``. A zero *sigma* is a
    point mass at *mean*: ``0.0`` up to and including *mean*, ``1.0``
    beyond it.

    The point-mass branch is deliberate. A perfectly regular peer then
    has phi ``0`` at its expected arrival instant and ``inf`` once that
    instant has passed. Returning ``1.0`` only at exactly *mean* would
    invert that, reporting certain failure on time and no suspicion
    after it.

    Examples
    --------
    >>> normal_cdf(100.0, 100.0, 10.0)
    0.5
    >>> normal_cdf(10.0, 10.0, 0.0)
    0.0
    """
    if sigma == 0.0:
        return 0.0 if x <= mean else 1.0
    return 0.5 + 0.5 * math.erf((x - mean) / sigma)


def normal_sf(x: float, mean: float, sigma: float) -> float:
    """Upper tail ``1 - normal_cdf(x, mean, sigma)`` without cancellation."""
    if sigma == 0.0:
        return 1.0 if x <= mean else 0.0
    return 0.5 * math.erfc((x - mean) / sigma)


def phi_from_tail(tail: float) -> float:
    """Convert a tail probability into a suspicion level.

    Returns ``-log10(tail)``, ``inf`` for a zero tail and never a negative
    value.
    """
    if tail <= 0.0:
        return math.inf
    if tail >= 1.0:
        return 0.0
    return -math.log10(tail)
