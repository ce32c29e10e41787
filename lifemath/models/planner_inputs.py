"""
Planner input record.

The input record is what a user edits in the calculator form. Raw form values
(empty strings, partially typed numbers) are coerced to numbers here so that
the projection engine only ever sees finite numeric fields.
"""

import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def get_numeric_value(field_value: Any) -> float:
    """
    Coerce a raw form value to a number.

    Empty values, None and NaN become 0. Strings are parsed like a browser
    ``parseFloat``: surrounding whitespace is ignored and the longest numeric
    prefix is used, so ``"12abc"`` gives 12 and ``"abc"`` gives 0.
    """
    if field_value is None or field_value == "":
        return 0.0

    if isinstance(field_value, (int, float)):
        return 0.0 if math.isnan(field_value) else float(field_value)

    match = _FLOAT_PREFIX.match(str(field_value).strip())
    if match is None:
        return 0.0
    return float(match.group(0))


class PlannerInputs(BaseModel):
    """User-supplied projection inputs. Percent fields hold whole percentages."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Personal info
    current_age: int = Field(default=0, ge=0, description="First simulated age")
    end_age: int = Field(default=0, ge=0, description="Last simulated age (inclusive)")
    starting_career_hours: float = Field(
        default=0.0, description="Cumulative credited hours at the start"
    )
    annual_hours: float = Field(default=0.0, description="Hours worked per year")

    # Income
    starting_profit_sharing: float = Field(
        default=0.0, description="Profit sharing paid in the first simulated year"
    )
    annual_raise_percent: float = Field(
        default=0.0,
        alias="annualRaise",
        description="Informational only; raises come from the pay scale",
    )
    profit_sharing_percent: float = Field(
        default=0.0, description="Profit sharing as a percent of prior-year wages"
    )
    other_income_annual: float = Field(default=0.0, alias="otherIncome")
    partner_income_monthly: float = Field(default=0.0, alias="partnerIncome")
    tax_rate_percent: float = Field(default=0.0, alias="taxRate")

    # Expenses
    current_expenses_annual: float = Field(
        default=0.0, alias="currentExpenses", description="Year-0 annual expenses"
    )
    expense_inflation_percent: float = Field(default=0.0, alias="expenseInflation")

    # Accounts
    retirement_balance: float = Field(default=0.0)
    taxable_balance: float = Field(default=0.0)
    cash_balance: float = Field(default=0.0)
    investment_return_percent: float = Field(default=0.0, alias="investmentReturn")
    cash_return_percent: float = Field(default=0.0, alias="cashReturn")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_form_value(cls, v: Any) -> float:
        return get_numeric_value(v)

    @model_validator(mode="after")
    def validate_age_range(self) -> "PlannerInputs":
        if self.end_age < self.current_age:
            raise ValueError(
                f"End age ({self.end_age}) must be >= current age ({self.current_age})"
            )
        return self

    @property
    def years_to_project(self) -> int:
        """Number of simulated years, both bounds inclusive."""
        return self.end_age - self.current_age + 1

    def snapshot(self) -> "PlannerInputs":
        """Re-validated copy, detached from later edits to this record."""
        return PlannerInputs.model_validate(self.model_dump())
