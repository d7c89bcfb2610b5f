"""
Factory for creating interpolators by method name.
"""
from typing import Sequence

from .base import Interpolator
from .linear import LinearDiscountFactorInterpolator, LogLinearZeroInterpolator
from .step_forward import StepForwardContinuousInterpolator

# Methods whose values are discount factors rather than zero rates
DISCOUNT_FACTOR_METHODS = frozenset({"LINEAR_DF", "STEP_FORWARD", "STEP_FORWARD_CONTINUOUS"})


def create_interpolator(
    method: str, pillars: Sequence[float], values: Sequence[float]
) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method name
        pillars: Time points
        values: Values to interpolate

    Returns:
        Configured interpolator
    """
    method_upper = method.upper()

    if method_upper == "LINEAR_DF":
        return LinearDiscountFactorInterpolator(pillars, values)
    if method_upper == "LOGLINEAR_ZERO":
        return LogLinearZeroInterpolator(pillars, values)
    if method_upper in ("STEP_FORWARD", "STEP_FORWARD_CONTINUOUS"):
        return StepForwardContinuousInterpolator(pillars, values)
    raise ValueError(
        f"Unknown interpolation method: {method}. "
        "Available: LINEAR_DF, LOGLINEAR_ZERO, STEP_FORWARD"
    )
