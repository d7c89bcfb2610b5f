"""Multi-curve equivalent of a product.

A multi-curve equivalent reduces a product to the events a simulation has to
value: known amounts discounted to their payment dates, Ibor fixings with the
amounts paid on them, and compounded overnight periods with the amounts paid
on them. The Ibor and overnight lists are parallel: entry i of the payments
list is the amount paid on the fixing at entry i of the computations list.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

import numpy as np

from irdlib.instruments.rates import IborRateComputation, OvernightCompoundedRateComputation
from irdlib.instruments.swap import NotionalExchange


@dataclass(frozen=True)
class MulticurveEquivalent:
    """Immutable event decomposition of a product.

    Attributes:
        decision_time: Instant at which the events are valued; None until a
            decision schedule sets it
        discount_factor_payments: Known amounts on their payment dates
        ibor_computations: Ibor fixings
        ibor_payments: Amounts paid on each Ibor fixing (gearing and year
            fraction applied, spread excluded)
        on_computations: Compounded overnight periods
        on_payments: Amounts paid on each overnight period
    """

    decision_time: datetime | None = None
    discount_factor_payments: tuple[NotionalExchange, ...] = ()
    ibor_computations: tuple[IborRateComputation, ...] = ()
    ibor_payments: tuple[NotionalExchange, ...] = ()
    on_computations: tuple[OvernightCompoundedRateComputation, ...] = ()
    on_payments: tuple[NotionalExchange, ...] = ()

    def __post_init__(self):
        for name in (
            "discount_factor_payments",
            "ibor_computations",
            "ibor_payments",
            "on_computations",
            "on_payments",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        if len(self.ibor_computations) != len(self.ibor_payments):
            raise ValueError(
                f"{len(self.ibor_computations)} Ibor computations but "
                f"{len(self.ibor_payments)} Ibor payments"
            )
        if len(self.on_computations) != len(self.on_payments):
            raise ValueError(
                f"{len(self.on_computations)} overnight computations but "
                f"{len(self.on_payments)} overnight payments"
            )
        if len(self.currencies) > 1:
            raise ValueError(f"Payments in several currencies: {sorted(self.currencies)}")

    @property
    def currencies(self) -> frozenset[str]:
        """Currencies of all the payments."""
        payments = self.discount_factor_payments + self.ibor_payments + self.on_payments
        return frozenset(p.currency for p in payments)

    @property
    def currency(self) -> str | None:
        """Currency of the payments, None if there are none."""
        return next(iter(self.currencies), None)

    @classmethod
    def empty(cls) -> "MulticurveEquivalent":
        return cls()

    def combined_with(self, other: "MulticurveEquivalent") -> "MulticurveEquivalent":
        """Concatenate all event lists, this equivalent's events first.

        Raises:
            ValueError: If both decision times are set and differ, or if the
                payments of the two equivalents are in different currencies
        """
        if self.currency is not None and other.currency is not None and self.currency != other.currency:
            raise ValueError(
                f"Cannot combine equivalents in {self.currency} and {other.currency}"
            )
        if (
            self.decision_time is not None
            and other.decision_time is not None
            and self.decision_time != other.decision_time
        ):
            raise ValueError(
                f"Cannot combine equivalents with decision times {self.decision_time} "
                f"and {other.decision_time}"
            )
        return MulticurveEquivalent(
            decision_time=self.decision_time if self.decision_time is not None else other.decision_time,
            discount_factor_payments=self.discount_factor_payments + other.discount_factor_payments,
            ibor_computations=self.ibor_computations + other.ibor_computations,
            ibor_payments=self.ibor_payments + other.ibor_payments,
            on_computations=self.on_computations + other.on_computations,
            on_payments=self.on_payments + other.on_payments,
        )

    def with_decision_time(self, decision_time: datetime | None) -> "MulticurveEquivalent":
        return _replace(self, decision_time=decision_time)

    def with_discount_factor_payments(
        self, payments: Sequence[NotionalExchange]
    ) -> "MulticurveEquivalent":
        return _replace(self, discount_factor_payments=tuple(payments))

    def with_added_discount_factor_payment(
        self, payment: NotionalExchange
    ) -> "MulticurveEquivalent":
        return _replace(self, discount_factor_payments=self.discount_factor_payments + (payment,))


def _replace(equivalent: MulticurveEquivalent, **changes) -> MulticurveEquivalent:
    values = {
        "decision_time": equivalent.decision_time,
        "discount_factor_payments": equivalent.discount_factor_payments,
        "ibor_computations": equivalent.ibor_computations,
        "ibor_payments": equivalent.ibor_payments,
        "on_computations": equivalent.on_computations,
        "on_payments": equivalent.on_payments,
    }
    values.update(changes)
    return MulticurveEquivalent(**values)


@dataclass(frozen=True)
class MulticurveEquivalentSchedule:
    """Chronological sequence of multi-curve equivalents, one per decision time."""

    schedules: tuple[MulticurveEquivalent, ...]

    def __post_init__(self):
        object.__setattr__(self, "schedules", tuple(self.schedules))
        if not self.schedules:
            raise ValueError("Decision schedule requires at least one entry")
        times = self.decision_times
        if any(t is None for t in times):
            raise ValueError("Every entry of a decision schedule needs a decision time")
        if any(t2 < t1 for t1, t2 in zip(times[:-1], times[1:], strict=True)):
            raise ValueError("Decision times must be in chronological order")

    @property
    def decision_times(self) -> list[datetime]:
        return [equivalent.decision_time for equivalent in self.schedules]

    @property
    def expiries_count(self) -> int:
        return len(self.schedules)


def _float_array(values) -> np.ndarray:
    array = np.array(values, dtype=float, ndmin=1)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class MulticurveEquivalentValues:
    """Values matching the lists of a multi-curve equivalent position by position.

    ``on_rates`` also carries the model forward rates of a simulated path.
    """

    discount_factors: np.ndarray = field(default_factory=lambda: np.empty(0))
    ibor_rates: np.ndarray = field(default_factory=lambda: np.empty(0))
    on_rates: np.ndarray = field(default_factory=lambda: np.empty(0))

    def __post_init__(self):
        for name in ("discount_factors", "ibor_rates", "on_rates"):
            object.__setattr__(self, name, _float_array(getattr(self, name)))

    def __repr__(self) -> str:
        return (
            f"MulticurveEquivalentValues(discount_factors={self.discount_factors.tolist()}, "
            f"ibor_rates={self.ibor_rates.tolist()}, on_rates={self.on_rates.tolist()})"
        )
