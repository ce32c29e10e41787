"""
Rate tables consumed by the projection engine.

This module defines the immutable pay-scale, government-rate and business-rule
tables. They are validated once when built from calculator configuration and
then shared read-only by every projection run.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from lifemath.exceptions import ConfigurationError

NUM_PAY_STEPS = 13
REQUIRED_SUBSIDY_TIERS = ("150", "200", "250", "300")

_TABLE_CONFIG = ConfigDict(
    frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore"
)


class PayScale(BaseModel):
    """Step rates and cumulative-hour thresholds for the 13-step pay scale."""

    model_config = _TABLE_CONFIG

    year: Optional[int] = Field(default=None, description="Pay scale year")
    step_rates: Dict[int, float] = Field(..., description="Base hourly rate by step")
    step_thresholds: Dict[int, float] = Field(
        ..., description="Upper cumulative-hours bound (inclusive) by step"
    )
    annual_raise_rate: float = Field(
        default=0.0, gt=-1, description="Fractional raise compounded per year"
    )

    @field_validator("step_rates", "step_thresholds")
    @classmethod
    def validate_all_steps_present(cls, v: Dict[int, float]) -> Dict[int, float]:
        missing = [step for step in range(1, NUM_PAY_STEPS + 1) if step not in v]
        if missing:
            raise ValueError(f"Pay scale is missing steps: {missing}")
        return v

    @field_validator("step_thresholds")
    @classmethod
    def validate_thresholds_increasing(cls, v: Dict[int, float]) -> Dict[int, float]:
        ordered = [v[step] for step in range(1, NUM_PAY_STEPS + 1)]
        for step, (lower, upper) in enumerate(zip(ordered, ordered[1:]), start=1):
            if upper <= lower:
                raise ValueError(
                    f"Step thresholds must be strictly increasing: step {step + 1} "
                    f"({upper}) <= step {step} ({lower})"
                )
        return v

    def thresholds_in_step_order(self) -> List[float]:
        """Thresholds for steps 1..13, in step order."""
        return [self.step_thresholds[step] for step in range(1, NUM_PAY_STEPS + 1)]


class IncomeThresholds(BaseModel):
    """FPL percentage band in which an ACA subsidy applies."""

    model_config = _TABLE_CONFIG

    minimum_percent: float = Field(..., ge=0, description="Lower FPL bound (inclusive)")
    maximum_percent: float = Field(..., ge=0, description="Upper FPL bound (inclusive)")

    @model_validator(mode="after")
    def validate_band(self) -> "IncomeThresholds":
        if self.maximum_percent < self.minimum_percent:
            raise ValueError("maximumPercent must be >= minimumPercent")
        return self


class ACASettings(BaseModel):
    """ACA premium tax credit parameters."""

    model_config = _TABLE_CONFIG

    federal_poverty_level: float = Field(..., gt=0, description="Annual FPL in dollars")
    benchmark_premium_monthly: float = Field(
        ..., ge=0, description="Benchmark silver plan premium per month"
    )
    subsidy_rates: Dict[str, float] = Field(
        ..., description="Applicable contribution rate keyed by FPL-percent tier"
    )
    income_thresholds: IncomeThresholds

    @field_validator("subsidy_rates")
    @classmethod
    def validate_required_tiers(cls, v: Dict[str, float]) -> Dict[str, float]:
        missing = [tier for tier in REQUIRED_SUBSIDY_TIERS if tier not in v]
        if missing:
            raise ValueError(f"ACA subsidy rates are missing tiers: {missing}")
        return v


class UnemploymentRules(BaseModel):
    """State unemployment insurance benefit rules."""

    model_config = _TABLE_CONFIG

    minimum_earnings: float = Field(..., ge=0)
    quarter_multiplier: float = Field(..., ge=0)
    weekly_benefit_deduction: float = Field(..., ge=0)
    weeks_per_quarter: float = Field(..., gt=0)
    max_weekly_benefit: float = Field(..., ge=0)
    duration_multiplier: float = Field(..., ge=0)
    min_duration_weeks: int = Field(..., ge=0)
    max_duration_weeks: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_duration_bounds(self) -> "UnemploymentRules":
        if self.max_duration_weeks < self.min_duration_weeks:
            raise ValueError("maxDurationWeeks must be >= minDurationWeeks")
        return self


class PTORules(BaseModel):
    """Paid time off accrual ratio."""

    model_config = _TABLE_CONFIG

    hours_per_pto_hour: float = Field(..., gt=0, alias="hoursPerPTOHour")
    description: str = Field(default="")


class RetirementRules(BaseModel):
    """Share of profit sharing routed to the retirement account."""

    model_config = _TABLE_CONFIG

    contribution_rate: float = Field(..., ge=0, le=1)
    description: str = Field(default="")


class CalculationRules(BaseModel):
    """Display constants for projection rows."""

    model_config = _TABLE_CONFIG

    max_career_hours: float = Field(..., ge=0)
    display_overflow: str = Field(default="----")


class RateTables(BaseModel):
    """All tables a projection run reads. Never mutated by the engine."""

    model_config = _TABLE_CONFIG

    pay_scale: PayScale
    aca: ACASettings
    unemployment: UnemploymentRules
    pto: PTORules
    retirement: RetirementRules
    calculations: CalculationRules

    @classmethod
    def from_calculator_config(
        cls, config: Mapping[str, Any], unemployment_ruleset: str = "utah2025"
    ) -> "RateTables":
        """
        Build rate tables from a calculator configuration document.

        Args:
            config: Parsed calculator configuration (camelCase keys)
            unemployment_ruleset: Key of the unemployment ruleset to use

        Returns:
            Validated rate tables

        Raises:
            ConfigurationError: If a section is missing or fails validation
        """
        try:
            government_rates = _mapping_section(config, "governmentRates")
            business_rules = _mapping_section(config, "businessRules")
            rulesets = _mapping_section(government_rates, "unemployment")
            if unemployment_ruleset not in rulesets:
                raise ConfigurationError(
                    f"Unemployment ruleset '{unemployment_ruleset}' not found; "
                    f"available: {sorted(rulesets)}"
                )
            return cls(
                pay_scale=config["payScale"],
                aca=government_rates["aca"],
                unemployment=rulesets[unemployment_ruleset],
                pto=business_rules["pto"],
                retirement=business_rules["retirement"],
                calculations=business_rules["calculations"],
            )
        except KeyError as e:
            raise ConfigurationError(f"Missing configuration section: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(f"Invalid rate tables: {e}") from e


def _mapping_section(document: Any, key: str) -> Mapping[str, Any]:
    """Look up a section that must itself be a JSON object."""
    if not isinstance(document, Mapping):
        raise ConfigurationError(
            f"Expected an object containing '{key}', got {type(document).__name__}"
        )
    section = document[key]
    if not isinstance(section, Mapping):
        raise ConfigurationError(
            f"Configuration section '{key}' must be an object, "
            f"got {type(section).__name__}"
        )
    return section
