"""Shared test fixtures for finproj."""

import os
import tempfile

import pytest

from finproj.financial.models import ContributionPattern, LoanParameters, SavingsParameters


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "engine": {
            "risk_free_rate": 0.03,
            "tax_year": 2025,
        },
        "logging": {
            "level": "error",
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def mortgage():
    """25-year mortgage of 240k at 3.5%."""
    return LoanParameters(principal=240_000, annual_rate=0.035, term_months=300)


@pytest.fixture
def ten_year_plan():
    """1,000 up front plus 200/month at 3.5% for 10 years, 2% inflation."""
    return SavingsParameters(
        initial_amount=1_000,
        pattern=ContributionPattern.fixed(200),
        annual_rate=0.035,
        years=10,
        inflation_rate=0.02,
    )
