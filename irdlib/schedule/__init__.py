"""Schedule generation and date arithmetic."""

from .adjustments import (
    add_tenor_months,
    adjust_date,
    apply_end_of_month_rule,
    get_month_end,
    is_end_of_month,
)
from .generator import Period, build_schedule

__all__ = [
    "Period",
    "add_tenor_months",
    "adjust_date",
    "apply_end_of_month_rule",
    "build_schedule",
    "get_month_end",
    "is_end_of_month",
]
