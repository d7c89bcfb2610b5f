"""
Discount and projection curves, and the rates provider built on them.
"""

from .base import BaseCurve, InterpolatedCurve
from .discount import DiscountCurve, create_flat_discount_curve
from .projection import IborProjectionCurve, create_flat_ibor_curve
from .provider import RatesProvider

__all__ = [
    "BaseCurve",
    "DiscountCurve",
    "IborProjectionCurve",
    "InterpolatedCurve",
    "RatesProvider",
    "create_flat_discount_curve",
    "create_flat_ibor_curve",
]
