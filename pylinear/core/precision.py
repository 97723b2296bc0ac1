"""
Numerical precision constants and utilities.

Provides machine epsilon, the smallest normal double, and the tolerant
comparison used by the symmetry checks.
"""

import numpy as np


# Machine epsilon for float64
EPSILON: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Smallest positive normal float64; 1 / SAFE_MIN does not overflow
SAFE_MIN: float = float(np.finfo(np.float64).tiny)  # ~2.23e-308

# Default tolerance for double comparisons, absolute and relative
DOUBLE_COMPARISON_EPSILON: float = 1e-14


def equals_with_relative_tolerance(x: float, y: float, eps: float) -> bool:
    """
    Relative comparison of two doubles.

    Args:
        x: First value
        y: Second value
        eps: Maximum relative difference, scaled by max(|x|, |y|)

    Returns:
        True if |x - y| <= eps * max(|x|, |y|), or if x == y
    """
    if x == y:
        return True
    return abs(x - y) <= eps * max(abs(x), abs(y))


def equals_with_tolerances(
    x: float,
    y: float,
    relative_tolerance: float,
    absolute_tolerance: float,
) -> bool:
    """
    Compare two doubles with an absolute OR a relative tolerance.

    NaN is never equal to anything, including itself.

    Args:
        x: First value
        y: Second value
        relative_tolerance: Relative tolerance
        absolute_tolerance: Absolute tolerance

    Returns:
        True if either tolerance is satisfied
    """
    if np.isnan(x) or np.isnan(y):
        return False
    if abs(x - y) <= absolute_tolerance:
        return True
    return equals_with_relative_tolerance(x, y, relative_tolerance)
