"""Tests for finproj.core.config_schema and Config.validated()."""

import pytest
from pydantic import ValidationError

from finproj.core.config import Config
from finproj.core.config_schema import EngineConfig, FinprojConfig, LoggingConfig


@pytest.mark.smoke
class TestConfigSchema:
    def test_defaults_populate(self):
        cfg = FinprojConfig()
        assert cfg.engine.risk_free_rate == 0.02
        assert cfg.engine.pessimistic_return_floor == 0.005
        assert cfg.engine.social_contribution_rate == 0.22
        assert cfg.engine.tax_year == 2024
        assert cfg.logging.level == "WARNING"
        assert cfg.logging.rotation == "10 MB"

    def test_valid_config(self):
        cfg = FinprojConfig.model_validate(
            {"engine": {"risk_free_rate": 0.03, "tax_year": 2025}, "logging": {"level": "debug", "file": "/tmp/x.log"}}
        )
        assert cfg.engine.risk_free_rate == 0.03
        assert cfg.engine.tax_year == 2025
        assert cfg.logging.level == "DEBUG"
        assert cfg.logging.file == "/tmp/x.log"

    def test_extra_sections_allowed(self):
        cfg = FinprojConfig.model_validate({"reporting": {"currency": "EUR"}})
        assert cfg.reporting == {"currency": "EUR"}

    def test_validated_from_config(self, tmp_config_file):
        cfg = Config(config_file=tmp_config_file).validated()
        assert isinstance(cfg, FinprojConfig)
        assert cfg.engine.risk_free_rate == 0.03
        assert cfg.logging.level == "ERROR"


class TestEngineConfig:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("risk_free_rate", -0.01),
            ("risk_free_rate", 1.5),
            ("withdrawal_rate", 0),
            ("social_contribution_rate", 1.0),
        ],
    )
    def test_out_of_range_rates(self, field, value):
        with pytest.raises(ValidationError):
            EngineConfig(**{field: value})

    def test_unknown_tax_year(self):
        with pytest.raises(ValidationError, match="no income tax brackets"):
            EngineConfig(tax_year=1999)

    def test_env_style_strings(self):
        cfg = EngineConfig.model_validate({"withdrawal_rate": "0.035", "tax_year": "2025"})
        assert cfg.withdrawal_rate == 0.035
        assert cfg.tax_year == 2025


class TestLoggingConfig:
    def test_level_normalized(self):
        assert LoggingConfig(level="info").level == "INFO"

    def test_unknown_level(self):
        with pytest.raises(ValidationError, match="unknown log level"):
            LoggingConfig(level="verbose")
