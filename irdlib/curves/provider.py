"""Rates provider: the market data view consumed by pricers.

Curves are held per currency (discounting), per Ibor index name (projection)
and per overnight index name. Overnight indices without a dedicated curve are
projected off the discount curve of their currency.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Mapping

from irdlib.conventions.indices import IborIndex, IborIndexObservation, OvernightIndex

from .base import BaseCurve, CurveTime
from .discount import DiscountCurve
from .projection import IborProjectionCurve


@dataclass(frozen=True)
class RatesProvider:
    """Immutable container of the curves needed for pricing.

    Attributes:
        valuation_date: Valuation date (curve reference date)
        discount_curves: Discount curve per currency code
        ibor_curves: Projection curve per Ibor index name
        overnight_curves: Forward curve per overnight index name (optional)
    """

    valuation_date: date
    discount_curves: Mapping[str, DiscountCurve]
    ibor_curves: Mapping[str, IborProjectionCurve] = field(default_factory=dict)
    overnight_curves: Mapping[str, BaseCurve] = field(default_factory=dict)

    def __post_init__(self):
        for curve in (
            *self.discount_curves.values(),
            *self.ibor_curves.values(),
            *self.overnight_curves.values(),
        ):
            if curve.reference_date != self.valuation_date:
                raise ValueError(
                    f"Curve {curve} has reference date {curve.reference_date}, "
                    f"expected valuation date {self.valuation_date}"
                )

    def discount_curve(self, currency: str) -> DiscountCurve:
        try:
            return self.discount_curves[currency]
        except KeyError:
            raise ValueError(f"No discount curve available for currency {currency}") from None

    def ibor_curve(self, index: IborIndex) -> IborProjectionCurve:
        try:
            return self.ibor_curves[index.name]
        except KeyError:
            raise ValueError(f"No projection curve available for index {index.name}") from None

    def overnight_curve(self, index: OvernightIndex) -> BaseCurve:
        curve = self.overnight_curves.get(index.name)
        if curve is None:
            return self.discount_curve(index.currency)
        return curve

    def discount_factor(self, currency: str, t: CurveTime) -> float:
        """Discount factor for a currency at a date or curve time."""
        if isinstance(t, (date, datetime)) and _as_date(t) < self.valuation_date:
            raise ValueError(f"Date {t} is before valuation date {self.valuation_date}")
        return self.discount_curve(currency).df(t)

    def ibor_forward_rate(self, index: IborIndex, observation: IborIndexObservation) -> float:
        """Forward rate of an Ibor fixing."""
        return self.ibor_curve(index).forward_rate(observation)

    def overnight_compounded_period_rate(
        self, index: OvernightIndex, start_date: date, end_date: date
    ) -> float:
        """Compounded overnight rate over a period, on the index day count."""
        return self.overnight_curve(index).forward(start_date, end_date, index.day_count)


def _as_date(t: date | datetime) -> date:
    return t.date() if isinstance(t, datetime) else t
