"""
Benefit formulas: ACA premium subsidy, unemployment insurance and PTO payout.

Each formula is a pure function of one or two income figures and the matching
slice of the rate tables. None of them read global configuration.
"""

import math

from .rate_tables import ACASettings, PTORules, UnemploymentRules

# Contribution rate reduction per 100 FPL points above the 300% tier.
ACA_SLOPE_ABOVE_300 = 0.019


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties toward +infinity."""
    return math.floor(value + 0.5)


def applicable_contribution_rate(percent_fpl: float, aca: ACASettings) -> float:
    """Expected contribution rate for an income expressed as percent of FPL."""
    rates = aca.subsidy_rates
    if percent_fpl <= 150:
        return rates["150"]
    elif percent_fpl <= 200:
        return rates["200"]
    elif percent_fpl <= 250:
        return rates["250"]
    elif percent_fpl <= 300:
        return rates["300"]

    percent_above_300 = (percent_fpl - 300) / 100
    return rates["300"] - percent_above_300 * ACA_SLOPE_ABOVE_300


def calculate_aca_subsidy(after_tax_income: float, aca: ACASettings) -> float:
    """
    Calculate the ACA premium subsidy for an annual income.

    Args:
        after_tax_income: Annual after-tax income (the prior projection year's)
        aca: ACA settings from the rate tables

    Returns:
        Annual subsidy, never negative. Zero outside the configured FPL band.
    """
    benchmark_premium_annual = aca.benchmark_premium_monthly * 12
    percent_fpl = after_tax_income / aca.federal_poverty_level * 100

    thresholds = aca.income_thresholds
    if (
        percent_fpl < thresholds.minimum_percent
        or percent_fpl > thresholds.maximum_percent
    ):
        return 0.0

    expected_contribution = after_tax_income * applicable_contribution_rate(
        percent_fpl, aca
    )
    return max(0.0, benchmark_premium_annual - expected_contribution)


def calculate_unemployment_benefits(
    current_year_earnings: float, prior_year_earnings: float, rules: UnemploymentRules
) -> float:
    """
    Calculate total unemployment benefits for a two-year base period.

    Quarterly earnings are approximated as a quarter of annual earnings.

    Args:
        current_year_earnings: W-2 earnings for the current year
        prior_year_earnings: W-2 earnings for the prior year
        rules: Unemployment rules from the rate tables

    Returns:
        Weekly benefit times benefit duration in weeks, or 0 when ineligible
    """
    base_period_earnings = current_year_earnings + prior_year_earnings
    highest_quarter_earnings = max(current_year_earnings / 4, prior_year_earnings / 4)

    if (
        base_period_earnings < rules.minimum_earnings
        or base_period_earnings < highest_quarter_earnings * rules.quarter_multiplier
    ):
        return 0.0

    weekly_benefit = round_half_up(
        highest_quarter_earnings / rules.weeks_per_quarter
        - rules.weekly_benefit_deduction
    )
    weekly_benefit = min(weekly_benefit, rules.max_weekly_benefit)

    if weekly_benefit <= 0:
        return 0.0

    duration_weeks = math.floor(
        base_period_earnings * rules.duration_multiplier / weekly_benefit
    )
    duration_weeks = max(
        rules.min_duration_weeks, min(rules.max_duration_weeks, duration_weeks)
    )

    return float(weekly_benefit * duration_weeks)


def calculate_pto_payout(annual_hours: float, hourly_rate: float, pto: PTORules) -> float:
    """PTO payout: whole accrued PTO hours times the hourly rate."""
    pto_hours = math.floor(annual_hours / pto.hours_per_pto_hour)
    return pto_hours * hourly_rate
