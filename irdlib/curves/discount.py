"""
Discount curve per currency.
"""
import logging
import math
from datetime import date
from typing import Sequence

from .base import InterpolatedCurve

logger = logging.getLogger(__name__)


class DiscountCurve(InterpolatedCurve):
    """
    Discount curve of a currency, built from pillar discount factors.

    In the LMM pricers this curve also provides the model's initial forward
    rates and the numeraire value.
    """

    def __init__(
        self,
        reference_date: date,
        currency: str,
        pillar_times: Sequence[float],
        discount_factors: Sequence[float],
        interpolation_method: str = "LOGLINEAR_ZERO",
        name: str = "",
    ):
        super().__init__(
            reference_date,
            pillar_times,
            discount_factors,
            interpolation_method=interpolation_method,
            name=name or f"{currency}-DSC",
        )
        self.currency = currency

        sorted_pairs = sorted(zip(pillar_times, discount_factors, strict=True))
        for i in range(1, len(sorted_pairs)):
            increase = sorted_pairs[i][1] - sorted_pairs[i - 1][1]
            if increase > 1e-6:
                logger.warning(
                    "Discount factors increasing at pillar %s of %s (increase = %.8f)",
                    i,
                    self.name,
                    increase,
                )

    def shift_parallel(self, shift_bp: float) -> "DiscountCurve":
        """Curve with every zero rate shifted by ``shift_bp`` basis points."""
        return DiscountCurve(
            reference_date=self.reference_date,
            currency=self.currency,
            pillar_times=self.pillar_times,
            discount_factors=self._shifted_discount_factors(shift_bp),
            interpolation_method=self.interpolation_method,
            name=f"{self.name}_shifted_{shift_bp}bp",
        )

    def __repr__(self) -> str:
        return (
            f"DiscountCurve(reference_date={self.reference_date}, "
            f"currency='{self.currency}', "
            f"pillar_times={self.pillar_times}, "
            f"interpolation_method='{self.interpolation_method}')"
        )


def create_flat_discount_curve(
    reference_date: date,
    currency: str,
    flat_rate: float,
    max_time: float = 30.0,
    num_pillars: int = 10,
    name: str = "",
) -> DiscountCurve:
    """
    Create a discount curve with a flat continuously compounded zero rate.

    Args:
        reference_date: Curve reference date
        currency: Currency of the curve
        flat_rate: Flat zero rate (decimal)
        max_time: Last pillar time in years
        num_pillars: Number of pillar points
        name: Curve name

    Returns:
        Flat discount curve
    """
    times = [(i + 1) * max_time / num_pillars for i in range(num_pillars)]
    discount_factors = [math.exp(-flat_rate * t) for t in times]
    return DiscountCurve(
        reference_date=reference_date,
        currency=currency,
        pillar_times=times,
        discount_factors=discount_factors,
        interpolation_method="LOGLINEAR_ZERO",
        name=name,
    )
