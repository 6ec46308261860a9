"""Tests for finproj.financial.calculators.retirement."""

import math

import pytest

from finproj.core.exceptions import InvalidParametersError
from finproj.financial.calculators.retirement import (
    INVESTMENT_STRATEGIES,
    MAX_YEARS_OF_INCOME,
    compare_strategies,
    project_retirement,
)


@pytest.mark.smoke
class TestProjectRetirement:
    def test_future_values(self):
        p = project_retirement(35, 65, 10_000, 500, 0.05, 2_000, 0.02)
        assert p.years_to_retirement == 30
        # 1.05^30 = 4.3219
        assert p.future_value_savings == pytest.approx(43_219.42, rel=1e-4)
        monthly = 0.05 / 12
        assert p.future_value_contributions == pytest.approx(500 * ((1 + monthly) ** 360 - 1) / monthly)
        assert p.total_at_retirement == pytest.approx(p.future_value_savings + p.future_value_contributions)

    def test_income_figures(self):
        p = project_retirement(35, 65, 10_000, 500, 0.05, 2_000, 0.02)
        assert p.adjusted_monthly_income == pytest.approx(2_000 * 1.02**30)
        assert p.monthly_income == pytest.approx(p.total_at_retirement * 0.04 / 12)
        assert p.years_of_income == pytest.approx(p.total_at_retirement / (p.adjusted_monthly_income * 12))
        assert p.annual_shortfall == pytest.approx(p.adjusted_monthly_income * 12 - p.total_at_retirement * 0.04)

    def test_zero_return(self):
        p = project_retirement(40, 60, 10_000, 100, 0, 1_000)
        assert p.future_value_savings == 10_000
        assert p.future_value_contributions == 24_000

    def test_recommended_savings_closes_gap(self):
        short = project_retirement(45, 65, 5_000, 100, 0.05, 3_000, 0.02)
        assert not short.on_track
        assert short.recommended_monthly_savings > 100

        fixed = project_retirement(45, 65, 5_000, short.recommended_monthly_savings, 0.05, 3_000, 0.02)
        assert fixed.annual_shortfall == pytest.approx(0, abs=1e-6)

    def test_on_track(self):
        p = project_retirement(30, 65, 2_000_000, 0, 0.05, 1_000)
        assert p.on_track
        assert p.recommended_monthly_savings == 0

    def test_years_of_income_capped(self):
        assert project_retirement(30, 65, 2_000_000, 0, 0.05, 0.01).years_of_income == MAX_YEARS_OF_INCOME

    def test_no_expenses(self):
        assert math.isinf(project_retirement(30, 65, 1_000, 0, 0.05, 0).years_of_income)

    def test_custom_withdrawal_rate(self):
        p = project_retirement(35, 65, 10_000, 500, 0.05, 2_000, withdrawal_rate=0.03)
        assert p.monthly_income == pytest.approx(p.total_at_retirement * 0.03 / 12)

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"retirement_age": 30}, "must be after current age"),
            ({"current_savings": -1}, "Current savings"),
            ({"annual_return": -0.01}, "Annual return"),
            ({"withdrawal_rate": 0}, "Withdrawal rate"),
        ],
    )
    def test_invalid_inputs(self, kwargs, message):
        args = {
            "current_age": 35,
            "retirement_age": 65,
            "current_savings": 10_000,
            "monthly_contribution": 500,
            "annual_return": 0.05,
            "desired_monthly_income": 2_000,
        }
        args.update(kwargs)
        with pytest.raises(InvalidParametersError, match=message):
            project_retirement(**args)


class TestStrategies:
    def test_catalog(self):
        assert [s.expected_return for s in INVESTMENT_STRATEGIES.values()] == [0.04, 0.07, 0.10]

    def test_compare(self):
        projections = compare_strategies(35, 65, 10_000, 500, 2_500, 0.02)
        assert list(projections) == ["conservative", "balanced", "dynamic"]
        capitals = [p.total_at_retirement for p in projections.values()]
        assert capitals == sorted(capitals)
