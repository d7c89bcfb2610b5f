"""Decomposition of products into multi-curve equivalents."""

from .decision_schedule import (
    decision_schedule,
    decision_schedule_cms,
    decision_schedule_cms_spread,
    decision_schedule_ratchet,
    decision_schedule_swaption,
    multicurve_equivalent,
    ratchet_leg,
)
from .multicurve import (
    MulticurveEquivalent,
    MulticurveEquivalentSchedule,
    MulticurveEquivalentValues,
)
from .starting_values import starting_values, starting_values_rates

__all__ = [
    "MulticurveEquivalent",
    "MulticurveEquivalentSchedule",
    "MulticurveEquivalentValues",
    "decision_schedule",
    "decision_schedule_cms",
    "decision_schedule_cms_spread",
    "decision_schedule_ratchet",
    "decision_schedule_swaption",
    "multicurve_equivalent",
    "ratchet_leg",
    "starting_values",
    "starting_values_rates",
]
