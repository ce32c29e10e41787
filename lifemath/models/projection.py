"""
Year-by-year projection runner.

Drives the yearly loop from the current age to the end age, threading the
one-year lagged wage and after-tax income figures and the account balances
between years, and summarises the finished sequence.
"""

import logging
from typing import List, Optional, Tuple, Union

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from .liquidity import AccountBalances, LiquidityEngine, LiquidityState
from .planner_inputs import PlannerInputs
from .rate_tables import RateTables
from .yearly_income import YearlyIncome, YearlyIncomeAssembler

logger = logging.getLogger(__name__)


class ProjectionRow(BaseModel):
    """One simulated year of the projection."""

    model_config = ConfigDict(frozen=True)

    age: int
    cumulative_career_hours: Union[float, str] = Field(
        ..., description="Career hours, or the overflow label past the cap"
    )
    pay_step: int
    hourly_rate: float
    seasonal_work_earnings: float
    other_income: float
    profit_share: float
    pto_payout: float
    total_work_income: float
    unemployment_benefits: float
    retirement_contribution: float
    total_gross_income: float
    after_tax_income: float
    aca_subsidy: float
    partner_annual_income: float
    annual_expenses: float
    shortfall: float = Field(..., description="Positive is a deficit, negative a surplus")
    ending_cash: float
    ending_taxable: float
    ending_retirement: float
    total_net_worth: float
    liquidity_state: LiquidityState

    @classmethod
    def from_year(
        cls, age: int, income: YearlyIncome, balances: AccountBalances
    ) -> "ProjectionRow":
        return cls(
            age=age,
            cumulative_career_hours=income.career_hours_display,
            pay_step=income.pay_step,
            hourly_rate=income.hourly_rate,
            seasonal_work_earnings=income.seasonal_work_earnings,
            other_income=income.other_income,
            profit_share=income.profit_share,
            pto_payout=income.pto_payout,
            total_work_income=income.total_work_income,
            unemployment_benefits=income.unemployment_benefits,
            retirement_contribution=income.retirement_contribution,
            total_gross_income=income.total_gross_income,
            after_tax_income=income.after_tax_income,
            aca_subsidy=income.aca_subsidy,
            partner_annual_income=income.partner_annual_income,
            annual_expenses=income.annual_expenses,
            shortfall=income.shortfall,
            ending_cash=balances.cash,
            ending_taxable=balances.taxable,
            ending_retirement=balances.retirement,
            total_net_worth=balances.total_net_worth,
            liquidity_state=balances.state,
        )


class WageGrowth(BaseModel):
    """Hourly rate at the first and last simulated year."""

    model_config = ConfigDict(frozen=True)

    start_rate: float
    end_rate: float
    percent_increase: float


class FinalShortfall(BaseModel):
    """Shortfall of the last simulated year."""

    model_config = ConfigDict(frozen=True)

    amount: float
    is_deficit: bool = Field(..., description="True when expenses exceed income")


class ProjectionSummary(BaseModel):
    """Headline figures derived from a completed projection."""

    model_config = ConfigDict(frozen=True)

    wage_growth: WageGrowth
    cash_depleted_age: Optional[int] = Field(
        default=None, description="First age with no cash left (None = never)"
    )
    taxable_depleted_age: Optional[int] = Field(
        default=None, description="First age with no taxable balance (None = never)"
    )
    final_net_worth: float
    final_age: int
    final_shortfall: FinalShortfall


def summarize_projection(rows: List[ProjectionRow]) -> ProjectionSummary:
    """
    Derive the projection summary from a non-empty row sequence.

    Args:
        rows: Projection rows in age order

    Returns:
        ProjectionSummary for the sequence
    """
    if not rows:
        raise ValueError("Cannot summarize an empty projection")

    first_year = rows[0]
    last_year = rows[-1]

    if first_year.hourly_rate > 0:
        percent_increase = (last_year.hourly_rate / first_year.hourly_rate - 1) * 100
    else:
        percent_increase = 0.0

    cash_depleted_age = next((r.age for r in rows if r.ending_cash <= 0), None)
    taxable_depleted_age = next((r.age for r in rows if r.ending_taxable <= 0), None)

    return ProjectionSummary(
        wage_growth=WageGrowth(
            start_rate=first_year.hourly_rate,
            end_rate=last_year.hourly_rate,
            percent_increase=percent_increase,
        ),
        cash_depleted_age=cash_depleted_age,
        taxable_depleted_age=taxable_depleted_age,
        final_net_worth=last_year.total_net_worth,
        final_age=last_year.age,
        final_shortfall=FinalShortfall(
            amount=last_year.shortfall, is_deficit=last_year.shortfall > 0
        ),
    )


class ProjectionResult(BaseModel):
    """Rows and summary of one projection run."""

    model_config = ConfigDict(frozen=True)

    rows: List[ProjectionRow] = Field(..., min_length=1)
    summary: ProjectionSummary

    @property
    def ages(self) -> List[int]:
        return [row.age for row in self.rows]

    def get_series(self, field_name: str) -> NDArray[np.float64]:
        """Get one numeric row field as an array in age order."""
        if field_name not in ProjectionRow.model_fields:
            raise ValueError(f"Unknown projection field: {field_name}")
        if field_name in ("cumulative_career_hours", "liquidity_state"):
            raise ValueError(f"Field {field_name} is not numeric")
        return np.array([getattr(row, field_name) for row in self.rows], dtype=np.float64)

    def to_dataframe(self) -> pd.DataFrame:
        """Rows as a DataFrame indexed by age."""
        records = [row.model_dump(mode="json") for row in self.rows]
        return pd.DataFrame.from_records(records).set_index("age")


class ProjectionRunner(BaseModel):
    """Runs a projection for one snapshot of planner inputs."""

    model_config = ConfigDict(frozen=True)

    inputs: PlannerInputs = Field(..., description="Inputs snapshotted for this run")
    rates: RateTables = Field(..., description="Read-only rate tables")

    @classmethod
    def create(cls, inputs: PlannerInputs, rates: RateTables) -> "ProjectionRunner":
        return cls(inputs=inputs.snapshot(), rates=rates)

    def run(self) -> ProjectionResult:
        """Simulate every year from the current age to the end age inclusive."""
        inputs = self.inputs
        assembler = YearlyIncomeAssembler.create(inputs, self.rates)
        liquidity = LiquidityEngine(
            cash_return_rate=inputs.cash_return_percent / 100,
            investment_return_rate=inputs.investment_return_percent / 100,
        )

        logger.debug(
            f"Projecting ages {inputs.current_age}-{inputs.end_age} "
            f"({inputs.years_to_project} years)"
        )

        balances = AccountBalances(
            cash=inputs.cash_balance,
            taxable=inputs.taxable_balance,
            retirement=inputs.retirement_balance,
        )
        prior_year_w2 = 0.0
        prior_year_after_tax_income = 0.0
        rows: List[ProjectionRow] = []

        for year_index in range(inputs.years_to_project):
            age = inputs.current_age + year_index
            income = assembler.assemble(
                year_index, prior_year_w2, prior_year_after_tax_income
            )
            previous_state = balances.state
            balances = liquidity.apply_year(
                balances, income.shortfall, income.retirement_contribution
            )
            if balances.state != previous_state:
                logger.debug(f"Age {age}: liquidity state -> {balances.state.value}")

            rows.append(ProjectionRow.from_year(age, income, balances))

            prior_year_w2 = income.seasonal_work_earnings
            prior_year_after_tax_income = income.after_tax_income

        return ProjectionResult(rows=rows, summary=summarize_projection(rows))


def run_projection(
    inputs: PlannerInputs, rates: RateTables
) -> Tuple[List[ProjectionRow], ProjectionSummary]:
    """
    Run a projection.

    Args:
        inputs: Planner inputs; snapshotted at the start of the run
        rates: Validated rate tables; never mutated

    Returns:
        Tuple of (rows in age order, summary)
    """
    result = ProjectionRunner.create(inputs, rates).run()
    return result.rows, result.summary
