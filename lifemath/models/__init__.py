"""Projection engine models for the Life Math planner."""

from .benefit_formulas import (
    calculate_aca_subsidy,
    calculate_pto_payout,
    calculate_unemployment_benefits,
)
from .expenses import ExpenseBudget, ExpenseCategory, ExpenseField
from .liquidity import AccountBalances, LiquidityEngine, LiquidityState
from .planner_inputs import PlannerInputs, get_numeric_value
from .projection import (
    FinalShortfall,
    ProjectionResult,
    ProjectionRow,
    ProjectionRunner,
    ProjectionSummary,
    WageGrowth,
    run_projection,
    summarize_projection,
)
from .rate_tables import (
    ACASettings,
    CalculationRules,
    IncomeThresholds,
    PayScale,
    PTORules,
    RateTables,
    RetirementRules,
    UnemploymentRules,
)
from .wage_model import WageModel
from .yearly_income import YearlyIncome, YearlyIncomeAssembler

__all__ = [
    "ACASettings",
    "AccountBalances",
    "CalculationRules",
    "ExpenseBudget",
    "ExpenseCategory",
    "ExpenseField",
    "FinalShortfall",
    "IncomeThresholds",
    "LiquidityEngine",
    "LiquidityState",
    "PTORules",
    "PayScale",
    "PlannerInputs",
    "ProjectionResult",
    "ProjectionRow",
    "ProjectionRunner",
    "ProjectionSummary",
    "RateTables",
    "RetirementRules",
    "UnemploymentRules",
    "WageGrowth",
    "WageModel",
    "YearlyIncome",
    "YearlyIncomeAssembler",
    "calculate_aca_subsidy",
    "calculate_pto_payout",
    "calculate_unemployment_benefits",
    "get_numeric_value",
    "run_projection",
    "summarize_projection",
]
