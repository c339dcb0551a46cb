"""
Bin boundary helpers.

Callers pass inclusive bounds (e.g. years 1950..1952); the service expects
half-open interval boundaries, so the upper bound is shifted by one:

    interval_bins(1950, 1952) -> [1950, 1951, 1952, 1953]   # 3 bins
    single_bin(1, 365)        -> [1, 366]                   # 1 bin
"""

import math
from typing import Sequence

import numpy as np


def interval_bins(first: int, last: int) -> list[int]:
    """One bin per unit step from first to last inclusive."""
    return list(range(int(first), int(last) + 2))


def single_bin(first: int, last: int) -> list[int]:
    """A single averaging interval covering first..last inclusive."""
    return [int(first), int(last) + 1]


def bin_labels(bounds: Sequence[int]) -> list[int]:
    """Lower boundary of each bin."""
    return list(bounds[:-1])


def inclusive_axis(start: float, stop: float, step: float) -> np.ndarray:
    """
    Regular axis start, start+step, ... up to and including stop.

    Same tolerance as R's seq(from, to, by) so that 0.1 steps do not lose
    the last node to floating point error.
    """
    if step == 0:
        raise ValueError("Grid step must be non-zero")
    count = (stop - start) / step
    if count < 0:
        raise ValueError(
            f"Grid step {step} does not lead from {start} to {stop}"
        )
    n = int(math.floor(count + 1e-10))
    return start + np.arange(n + 1) * step
