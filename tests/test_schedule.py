"""Tests for date adjustments and schedule generation."""

from datetime import date

import pytest

from irdlib.conventions.calendars import TARGET
from irdlib.conventions.types import BusinessDayAdjustment, Frequency, RollConvention
from irdlib.schedule import (
    add_tenor_months,
    adjust_date,
    apply_end_of_month_rule,
    build_schedule,
    is_end_of_month,
)


class TestAdjustments:
    """Tests for business day adjustments."""

    def test_following(self):
        # Saturday to Monday
        assert adjust_date(date(2028, 1, 15), BusinessDayAdjustment.FOLLOWING, TARGET) == date(2028, 1, 17)

    def test_modified_following_stays_in_month(self):
        # Sunday 2025-08-31 would roll into September
        adjusted = adjust_date(date(2025, 8, 31), BusinessDayAdjustment.MODIFIED_FOLLOWING, TARGET)
        assert adjusted == date(2025, 8, 29)

    def test_no_adjustment(self):
        saturday = date(2028, 1, 15)
        assert adjust_date(saturday, BusinessDayAdjustment.NO_ADJUSTMENT, TARGET) == saturday

    def test_end_of_month_rule(self):
        assert is_end_of_month(date(2025, 2, 28))
        assert apply_end_of_month_rule(date(2025, 2, 28), 1, True) == date(2025, 3, 31)
        assert apply_end_of_month_rule(date(2025, 1, 31), 1, False) == date(2025, 2, 28)

    def test_add_tenor_months(self):
        assert add_tenor_months(date(2027, 3, 15), 6, TARGET) == date(2027, 9, 15)


class TestBuildSchedule:
    """Tests for leg schedules."""

    def test_quarterly_forward(self):
        periods = build_schedule(
            date(2026, 1, 15),
            date(2028, 1, 15),
            Frequency.QUARTERLY,
            TARGET,
            roll_convention=RollConvention.FORWARD,
        )
        assert len(periods) == 8
        assert [p.period_index for p in periods] == list(range(1, 9))
        assert periods[0].start_date == date(2026, 1, 15)
        assert periods[-1].end_date == date(2028, 1, 17)
        for previous, current in zip(periods[:-1], periods[1:]):
            assert previous.end_date == current.start_date

    def test_annual_backward(self):
        periods = build_schedule(
            date(2026, 1, 15), date(2031, 1, 15), Frequency.ANNUAL, TARGET
        )
        assert len(periods) == 5
        assert periods[1].start_date == date(2027, 1, 15)
        assert periods[2].start_date == date(2028, 1, 17)

    def test_pay_delay(self):
        periods = build_schedule(
            date(2026, 1, 15),
            date(2027, 1, 15),
            Frequency.ANNUAL,
            TARGET,
            pay_delay_days=1,
        )
        assert periods[0].payment_date == date(2027, 1, 18)

    def test_invalid_dates(self):
        with pytest.raises(ValueError):
            build_schedule(date(2026, 1, 15), date(2026, 1, 15), Frequency.ANNUAL, TARGET)
