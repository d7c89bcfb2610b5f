"""
Interpolation methods for discount and projection curves.
"""

from .base import Interpolator
from .factory import DISCOUNT_FACTOR_METHODS, create_interpolator
from .linear import LinearDiscountFactorInterpolator, LogLinearZeroInterpolator
from .step_forward import StepForwardContinuousInterpolator

__all__ = [
    'DISCOUNT_FACTOR_METHODS',
    'Interpolator',
    'LinearDiscountFactorInterpolator',
    'LogLinearZeroInterpolator',
    'StepForwardContinuousInterpolator',
    'create_interpolator',
]
