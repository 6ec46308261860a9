"""Portfolio risk projection.

Projects a savings plan under three return assumptions derived from a risk
profile (expected return shifted by half the volatility either way) and
summarizes how far apart the outcomes land.
"""

import statistics
from types import MappingProxyType

from loguru import logger

from finproj.financial.calculators.savings import grow
from finproj.financial.models import (
    AssetAllocation,
    ContributionPattern,
    PortfolioSimulation,
    RiskLevel,
    RiskMetrics,
    RiskProfile,
    SavingsParameters,
)

# Assumed risk-free rate for the Sharpe-like ratio
RISK_FREE_RATE = 0.02

# Lowest annual return used for the pessimistic projection
PESSIMISTIC_RETURN_FLOOR = 0.005

RISK_PROFILES = MappingProxyType(
    {
        "conservative": RiskProfile(
            id="conservative",
            name="Conservative",
            expected_return=0.045,
            volatility=0.08,
            allocation=AssetAllocation(stocks=0.20, bonds=0.60, real_estate=0.10, commodities=0.05, cash=0.05),
            risk_level=RiskLevel.CONSERVATIVE,
            description="Capital preservation with modest growth, mostly bonds",
        ),
        "moderate": RiskProfile(
            id="moderate",
            name="Moderate",
            expected_return=0.065,
            volatility=0.12,
            allocation=AssetAllocation(stocks=0.50, bonds=0.30, real_estate=0.15, commodities=0.03, cash=0.02),
            risk_level=RiskLevel.MODERATE,
            description="Balanced mix of growth and stability",
        ),
        "aggressive": RiskProfile(
            id="aggressive",
            name="Aggressive",
            expected_return=0.085,
            volatility=0.18,
            allocation=AssetAllocation(stocks=0.70, bonds=0.15, real_estate=0.10, commodities=0.04, cash=0.01),
            risk_level=RiskLevel.AGGRESSIVE,
            description="Long-term growth, accepts large swings",
        ),
    }
)


def get_risk_profile(profile_id: str) -> RiskProfile:
    """Look up a catalog risk profile by id."""
    try:
        return RISK_PROFILES[profile_id]
    except KeyError:
        raise KeyError(f"Unknown risk profile {profile_id!r}; known: {', '.join(RISK_PROFILES)}") from None


def scenario_returns(profile: RiskProfile, return_floor: float = PESSIMISTIC_RETURN_FLOOR) -> dict[str, float]:
    """Annual return assumed by each projection."""
    half_spread = profile.volatility / 2
    return {
        "optimistic": profile.expected_return + half_spread,
        "realistic": profile.expected_return,
        "pessimistic": max(return_floor, profile.expected_return - half_spread),
    }


def simulate(
    profile: RiskProfile,
    savings_params: SavingsParameters,
    risk_free_rate: float = RISK_FREE_RATE,
    return_floor: float = PESSIMISTIC_RETURN_FLOOR,
) -> PortfolioSimulation:
    """Project a plan under optimistic, realistic and pessimistic returns.

    The plan is run with a fixed contribution of ``savings_params.pattern.base_amount``
    and no inflation adjustment.

    Args:
        profile: Risk profile supplying expected return and volatility
        savings_params: Initial amount, contribution and horizon
        risk_free_rate: Baseline for the Sharpe-like ratio
        return_floor: Minimum pessimistic return

    Returns:
        PortfolioSimulation with the three projections and their risk metrics.
        Metrics that would divide by zero are reported as 0.
    """
    returns = scenario_returns(profile, return_floor)
    pattern = ContributionPattern.fixed(savings_params.pattern.base_amount)
    results = {
        name: grow(savings_params.initial_amount, pattern, rate, savings_params.years) for name, rate in returns.items()
    }

    finals = [r.final_amount for r in results.values()]
    realistic_final = results["realistic"].final_amount
    mean = statistics.mean(finals)

    max_drawdown = 0.0
    if realistic_final:
        max_drawdown = (realistic_final - results["pessimistic"].final_amount) / realistic_final * 100
    volatility = statistics.pstdev(finals) / mean * 100 if mean else 0.0
    sharpe = (profile.expected_return - risk_free_rate) / profile.volatility if profile.volatility else 0.0

    metrics = RiskMetrics(max_drawdown=max_drawdown, sharpe_like_ratio=sharpe, volatility=volatility)
    logger.debug(
        f"Simulated {profile.id}: realistic {realistic_final:,.2f}, drawdown {max_drawdown:.1f}%, "
        f"sharpe-like {sharpe:.2f}"
    )
    return PortfolioSimulation(
        profile=profile,
        optimistic=results["optimistic"],
        realistic=results["realistic"],
        pessimistic=results["pessimistic"],
        risk_metrics=metrics,
        returns=returns,
    )
