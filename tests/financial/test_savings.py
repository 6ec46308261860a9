"""Tests for finproj.financial.calculators.savings."""

import pytest

from finproj.core.exceptions import InvalidParametersError
from finproj.financial.calculators.savings import (
    compare_rates,
    grow,
    grow_savings,
    monthly_contribution,
    months_to_goal,
    pattern_variants,
)
from finproj.financial.models import ContributionKind, ContributionPattern


@pytest.mark.smoke
class TestGrow:
    def test_ten_year_plan(self):
        result = grow(1_000, ContributionPattern.fixed(200), 0.035, 10, 0.02)
        assert result.total_contributions == 25_000
        assert result.final_amount == pytest.approx(30_105, rel=0.005)
        assert result.total_interest == pytest.approx(result.final_amount - 25_000)
        assert len(result.schedule) == 120

    def test_real_value(self):
        result = grow(1_000, ContributionPattern.fixed(200), 0.035, 10, 0.02)
        expected = result.final_amount / (1 + 0.02 / 12) ** 120
        assert result.real_final_amount == pytest.approx(expected)
        assert result.real_final_amount < result.final_amount

    def test_no_inflation_keeps_nominal_value(self):
        result = grow(1_000, ContributionPattern.fixed(200), 0.035, 2)
        assert result.real_final_amount == pytest.approx(result.final_amount)

    def test_zero_rate(self):
        result = grow(1_000, ContributionPattern.fixed(200), 0, 1)
        assert result.final_amount == 3_400
        assert result.total_interest == 0

    def test_compounding_recurrence(self):
        rate = 0.05
        result = grow(500, ContributionPattern.increasing(100, 0.1), rate, 3)
        previous = 500
        for entry in result.schedule:
            assert entry.balance == pytest.approx(previous * (1 + rate / 12) + entry.contribution)
            previous = entry.balance

    def test_from_params(self, ten_year_plan):
        direct = grow(1_000, ContributionPattern.fixed(200), 0.035, 10, 0.02)
        assert grow_savings(ten_year_plan) == direct

    @pytest.mark.parametrize(
        "args,message",
        [
            ((-1, ContributionPattern.fixed(100), 0.03, 10), "Initial amount"),
            ((0, ContributionPattern.fixed(100), -0.03, 10), "rate cannot be negative"),
            ((0, ContributionPattern.fixed(100), 0.03, 0), "at least one month"),
            ((0, ContributionPattern.fixed(100), 0.03, 10, -0.02), "Inflation"),
        ],
    )
    def test_invalid_inputs(self, args, message):
        with pytest.raises(InvalidParametersError, match=message):
            grow(*args)


class TestContributionPatterns:
    def test_increasing(self):
        result = grow(0, ContributionPattern.increasing(100, 0.10), 0, 2)
        assert result.total_contributions == pytest.approx(12 * 100 + 12 * 110)

    def test_decreasing(self):
        result = grow(0, ContributionPattern.decreasing(100, 0.5), 0, 3)
        assert result.total_contributions == pytest.approx(1_200 + 600 + 300)

    def test_decreasing_floors_at_zero(self):
        pattern = ContributionPattern.decreasing(100, 1.5)
        assert monthly_contribution(pattern, 12) == 100
        assert monthly_contribution(pattern, 13) == 0
        assert monthly_contribution(pattern, 40) == 0

    def test_irregular_cycles(self):
        pattern = ContributionPattern.irregular([100, 200, 300])
        assert [monthly_contribution(pattern, m) for m in range(1, 8)] == [100, 200, 300, 100, 200, 300, 100]

    def test_fixed(self):
        pattern = ContributionPattern.fixed(250)
        assert monthly_contribution(pattern, 1) == monthly_contribution(pattern, 120) == 250

    def test_variants(self):
        variants = pattern_variants(200)
        assert list(variants) == ["fixed", "increasing", "decreasing", "irregular"]
        assert variants["increasing"].kind == ContributionKind.INCREASING
        assert variants["irregular"].amounts == (200, 300, 150, 400, 250, 200)


class TestMonthsToGoal:
    def test_already_reached(self):
        assert months_to_goal(1_000, 5_000, 100, 0.03) == 0

    def test_zero_rate(self):
        assert months_to_goal(1_000, 0, 100, 0) == 10
        assert months_to_goal(1_050, 0, 100, 0) == 11

    def test_unreachable(self):
        assert months_to_goal(1_000, 0, 0, 0.05) is None
        assert months_to_goal(1_000, 100, 0, 0) is None

    def test_matches_projection(self):
        months = months_to_goal(10_000, 1_000, 200, 0.05)
        result = grow(1_000, ContributionPattern.fixed(200), 0.05, 5)
        assert result.schedule[months - 1].balance >= 10_000
        assert result.schedule[months - 2].balance < 10_000

    def test_interest_only(self):
        # 1,000 at 12% doubles in ~70 months
        assert months_to_goal(2_000, 1_000, 0, 0.12) == 70

    def test_negative_inputs(self):
        with pytest.raises(InvalidParametersError):
            months_to_goal(-1, 0, 100, 0.03)


class TestCompareRates:
    def test_labels_and_ordering(self, ten_year_plan):
        comparisons = compare_rates(ten_year_plan)
        assert [c.label for c in comparisons] == ["-1.0%", "current", "+1.0%", "+2.0%"]
        finals = [c.final_amount for c in comparisons]
        assert finals == sorted(finals)

    def test_negative_rates_skipped(self, ten_year_plan):
        comparisons = compare_rates(ten_year_plan, offsets=(-0.05, 0.0))
        assert [c.label for c in comparisons] == ["current"]
        assert comparisons[0].annual_rate == pytest.approx(0.035)
