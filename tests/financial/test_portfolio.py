"""Tests for finproj.financial.calculators.portfolio."""

import statistics

import pytest

from finproj.financial.calculators.portfolio import (
    PESSIMISTIC_RETURN_FLOOR,
    RISK_PROFILES,
    get_risk_profile,
    scenario_returns,
    simulate,
)
from finproj.financial.calculators.savings import grow
from finproj.financial.models import (
    AssetAllocation,
    ContributionPattern,
    RiskLevel,
    RiskProfile,
    SavingsParameters,
)


class TestRiskProfiles:
    def test_catalog(self):
        assert list(RISK_PROFILES) == ["conservative", "moderate", "aggressive"]
        returns = [p.expected_return for p in RISK_PROFILES.values()]
        volatilities = [p.volatility for p in RISK_PROFILES.values()]
        assert returns == sorted(returns)
        assert volatilities == sorted(volatilities)

    def test_lookup(self):
        assert get_risk_profile("moderate").risk_level == RiskLevel.MODERATE
        with pytest.raises(KeyError, match="Unknown risk profile"):
            get_risk_profile("yolo")

    def test_allocations(self):
        conservative = get_risk_profile("conservative").allocation
        assert conservative.bonds == 0.60
        assert sum(conservative.as_dict().values()) == pytest.approx(1)


class TestScenarioReturns:
    def test_moderate(self):
        returns = scenario_returns(get_risk_profile("moderate"))
        assert returns["optimistic"] == pytest.approx(0.125)
        assert returns["realistic"] == 0.065
        assert returns["pessimistic"] == pytest.approx(0.005)

    def test_floor(self):
        returns = scenario_returns(get_risk_profile("aggressive"))
        assert returns["pessimistic"] == PESSIMISTIC_RETURN_FLOOR


@pytest.mark.smoke
class TestSimulate:
    def test_ordering_and_metrics(self, ten_year_plan):
        profile = get_risk_profile("moderate")
        sim = simulate(profile, ten_year_plan)
        finals = [sim.pessimistic.final_amount, sim.realistic.final_amount, sim.optimistic.final_amount]
        assert finals == sorted(finals)

        realistic = sim.realistic.final_amount
        expected_drawdown = (realistic - sim.pessimistic.final_amount) / realistic * 100
        assert sim.risk_metrics.max_drawdown == pytest.approx(expected_drawdown)
        assert sim.risk_metrics.volatility == pytest.approx(statistics.pstdev(finals) / statistics.mean(finals) * 100)
        assert sim.risk_metrics.sharpe_like_ratio == pytest.approx((0.065 - 0.02) / 0.12)

    def test_realistic_matches_growth_engine(self, ten_year_plan):
        sim = simulate(get_risk_profile("conservative"), ten_year_plan)
        direct = grow(1_000, ContributionPattern.fixed(200), 0.045, 10)
        assert sim.realistic.final_amount == pytest.approx(direct.final_amount)

    def test_uses_fixed_contributions(self, ten_year_plan):
        increasing = SavingsParameters(
            initial_amount=1_000, pattern=ContributionPattern.increasing(200, 0.1), annual_rate=0.01, years=10
        )
        profile = get_risk_profile("aggressive")
        assert simulate(profile, increasing).realistic == simulate(profile, ten_year_plan).realistic

    def test_irregular_plan_contributes_its_mean(self):
        irregular = SavingsParameters(
            initial_amount=0, pattern=ContributionPattern.irregular([200, 300]), annual_rate=0.03, years=10
        )
        sim = simulate(get_risk_profile("moderate"), irregular)
        assert sim.realistic.total_contributions == pytest.approx(250 * 120)
        direct = grow(0, ContributionPattern.fixed(250), 0.065, 10)
        assert sim.realistic.final_amount == pytest.approx(direct.final_amount)

    def test_custom_risk_free_rate(self, ten_year_plan):
        sim = simulate(get_risk_profile("aggressive"), ten_year_plan, risk_free_rate=0.04)
        assert sim.risk_metrics.sharpe_like_ratio == pytest.approx((0.085 - 0.04) / 0.18)

    def test_zero_volatility(self, ten_year_plan):
        flat = RiskProfile(
            id="flat",
            name="Flat",
            expected_return=0.03,
            volatility=0,
            allocation=AssetAllocation(stocks=0, bonds=0, cash=1),
            risk_level=RiskLevel.CONSERVATIVE,
        )
        sim = simulate(flat, ten_year_plan)
        assert sim.risk_metrics.sharpe_like_ratio == 0
        assert sim.risk_metrics.max_drawdown == pytest.approx(0)
        assert sim.risk_metrics.volatility == pytest.approx(0)

    def test_empty_plan(self):
        empty = SavingsParameters(initial_amount=0, pattern=ContributionPattern.fixed(0), annual_rate=0, years=5)
        sim = simulate(get_risk_profile("moderate"), empty)
        assert sim.risk_metrics.max_drawdown == 0
        assert sim.risk_metrics.volatility == 0
