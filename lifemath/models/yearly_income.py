"""
Yearly income assembly.

Combines the wage model, the benefit formulas, PTO, profit sharing and other
household income into one simulated year's gross income, after-tax income and
shortfall against inflated expenses.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from .benefit_formulas import (
    calculate_aca_subsidy,
    calculate_pto_payout,
    calculate_unemployment_benefits,
)
from .planner_inputs import PlannerInputs
from .rate_tables import RateTables
from .wage_model import WageModel


class YearlyIncome(BaseModel):
    """Income figures for one simulated year."""

    model_config = ConfigDict(frozen=True)

    year_index: int = Field(..., ge=0, description="Years since the first age")
    cumulative_career_hours: float = Field(..., description="Credited career hours")
    career_hours_display: Union[float, str] = Field(
        ..., description="Career hours, or the overflow label past the cap"
    )
    pay_step: int = Field(..., ge=1)
    hourly_rate: float
    seasonal_work_earnings: float = Field(..., description="W-2 wages for the year")
    pto_payout: float
    unemployment_benefits: float
    profit_share: float
    retirement_contribution: float
    other_income: float
    total_work_income: float
    total_gross_income: float
    after_tax_income: float
    aca_subsidy: float
    partner_annual_income: float
    annual_expenses: float
    total_household_income: float
    shortfall: float = Field(..., description="Expenses minus income; negative is surplus")


class YearlyIncomeAssembler(BaseModel):
    """Builds a YearlyIncome for any year index of a projection."""

    model_config = ConfigDict(frozen=True)

    inputs: PlannerInputs
    rates: RateTables
    wage_model: WageModel

    @classmethod
    def create(cls, inputs: PlannerInputs, rates: RateTables) -> "YearlyIncomeAssembler":
        return cls(inputs=inputs, rates=rates, wage_model=WageModel(pay_scale=rates.pay_scale))

    def assemble(
        self,
        year_index: int,
        prior_year_w2: float = 0.0,
        prior_year_after_tax_income: float = 0.0,
    ) -> YearlyIncome:
        """
        Assemble one year's income figures.

        Args:
            year_index: 0-based year since the projection's first age
            prior_year_w2: Previous year's seasonal W-2 earnings (0 in year 0)
            prior_year_after_tax_income: Previous year's after-tax income

        Returns:
            YearlyIncome for the year
        """
        inputs = self.inputs
        rates = self.rates

        cumulative_hours = (
            inputs.starting_career_hours + year_index * inputs.annual_hours
        )
        pay_step = self.wage_model.determine_step(cumulative_hours)
        hourly_rate = self.wage_model.hourly_rate(cumulative_hours, year_index)
        seasonal_work_earnings = hourly_rate * inputs.annual_hours

        pto_payout = calculate_pto_payout(inputs.annual_hours, hourly_rate, rates.pto)
        unemployment_benefits = calculate_unemployment_benefits(
            seasonal_work_earnings, prior_year_w2, rates.unemployment
        )

        # Profit sharing is paid a year in arrears on prior-year wages.
        if year_index == 0:
            profit_share = inputs.starting_profit_sharing
        else:
            profit_share = prior_year_w2 * (inputs.profit_sharing_percent / 100)
        retirement_contribution = profit_share * rates.retirement.contribution_rate

        total_work_income = seasonal_work_earnings + profit_share + pto_payout
        total_gross_income = (
            total_work_income + inputs.other_income_annual + unemployment_benefits
        )
        after_tax_income = total_gross_income * (1 - inputs.tax_rate_percent / 100)

        aca_subsidy = 0.0
        if year_index > 0:
            aca_subsidy = calculate_aca_subsidy(prior_year_after_tax_income, rates.aca)

        partner_annual_income = inputs.partner_income_monthly * 12
        annual_expenses = inputs.current_expenses_annual * (
            1 + inputs.expense_inflation_percent / 100
        ) ** year_index

        total_household_income = after_tax_income + partner_annual_income + aca_subsidy
        shortfall = annual_expenses - total_household_income

        if cumulative_hours > rates.calculations.max_career_hours:
            career_hours_display: Union[float, str] = rates.calculations.display_overflow
        else:
            career_hours_display = cumulative_hours

        return YearlyIncome(
            year_index=year_index,
            cumulative_career_hours=cumulative_hours,
            career_hours_display=career_hours_display,
            pay_step=pay_step,
            hourly_rate=hourly_rate,
            seasonal_work_earnings=seasonal_work_earnings,
            pto_payout=pto_payout,
            unemployment_benefits=unemployment_benefits,
            profit_share=profit_share,
            retirement_contribution=retirement_contribution,
            other_income=inputs.other_income_annual,
            total_work_income=total_work_income,
            total_gross_income=total_gross_income,
            after_tax_income=after_tax_income,
            aca_subsidy=aca_subsidy,
            partner_annual_income=partner_annual_income,
            annual_expenses=annual_expenses,
            total_household_income=total_household_income,
            shortfall=shortfall,
        )
