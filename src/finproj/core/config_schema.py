"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``FinprojConfig``
instance.  Existing dict-based access continues to work unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finproj.financial.calculators.tax_tables import INCOME_TAX_BRACKETS

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class EngineConfig(BaseModel):
    """Assumptions handed to the projection engines by their callers."""

    risk_free_rate: float = Field(0.02, ge=0, le=1)
    pessimistic_return_floor: float = Field(0.005, ge=0, le=1)
    withdrawal_rate: float = Field(0.04, gt=0, le=1)
    social_contribution_rate: float = Field(0.22, ge=0, lt=1)
    tax_year: int = 2024

    @field_validator("tax_year")
    @classmethod
    def _known_tax_year(cls, v: int) -> int:
        if v not in INCOME_TAX_BRACKETS:
            raise ValueError(f"no income tax brackets for year {v}; known years: {sorted(INCOME_TAX_BRACKETS)}")
        return v


class LoggingConfig(BaseModel):
    """Where and how verbosely loguru writes."""

    level: str = "WARNING"
    file: str | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level


class FinprojConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so embedding applications can bolt on custom
    sections without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    engine: EngineConfig = EngineConfig()
    logging: LoggingConfig = LoggingConfig()
