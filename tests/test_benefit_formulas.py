"""
Tests for the ACA subsidy, unemployment insurance and PTO payout formulas.
"""

import pytest

from lifemath.models.benefit_formulas import (
    applicable_contribution_rate,
    calculate_aca_subsidy,
    calculate_pto_payout,
    calculate_unemployment_benefits,
    round_half_up,
)


class TestRoundHalfUp:
    """Test tie-breaking for weekly benefit rounding."""

    def test_ties_round_up(self):
        """Test that exact halves round toward positive infinity."""
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-2.5) == -2

    def test_non_ties(self):
        """Test ordinary rounding away from ties."""
        assert round_half_up(237.31) == 237
        assert round_half_up(237.7) == 238


class TestACASubsidy:
    """Test the ACA premium subsidy."""

    def test_contribution_rate_tiers(self, rate_tables):
        """Test the tiered contribution rates."""
        aca = rate_tables.aca

        assert applicable_contribution_rate(120, aca) == 0.0285
        assert applicable_contribution_rate(150, aca) == 0.0285
        assert applicable_contribution_rate(175, aca) == 0.057
        assert applicable_contribution_rate(250, aca) == 0.0855
        assert applicable_contribution_rate(300, aca) == 0.114
        assert applicable_contribution_rate(350, aca) == pytest.approx(0.1045)

    def test_lower_bound_is_inclusive(self, rate_tables):
        """Test income at exactly 100% FPL qualifies."""
        subsidy = calculate_aca_subsidy(15060, rate_tables.aca)

        assert subsidy == pytest.approx(5400 - 15060 * 0.0285)

    def test_below_band_is_zero(self, rate_tables):
        """Test income below 100% FPL gets no subsidy."""
        assert calculate_aca_subsidy(15000, rate_tables.aca) == 0.0
        assert calculate_aca_subsidy(0, rate_tables.aca) == 0.0

    def test_above_band_is_zero(self, rate_tables):
        """Test income above 400% FPL gets no subsidy."""
        assert calculate_aca_subsidy(60241, rate_tables.aca) == 0.0

    def test_three_hundred_percent(self, rate_tables):
        """Test the subsidy at the top of the flat tiers."""
        subsidy = calculate_aca_subsidy(45180, rate_tables.aca)

        assert subsidy == pytest.approx(5400 - 45180 * 0.114)

    def test_never_negative(self, rate_tables):
        """Test expected contribution above the premium floors at zero."""
        assert calculate_aca_subsidy(60240, rate_tables.aca) == 0.0

    def test_subsidy_shrinks_with_income(self, rate_tables):
        """Test higher income never increases the subsidy within the band."""
        incomes = range(15060, 60240, 500)
        subsidies = [calculate_aca_subsidy(i, rate_tables.aca) for i in incomes]

        assert all(s >= 0 for s in subsidies)
        assert subsidies == sorted(subsidies, reverse=True)


class TestUnemploymentBenefits:
    """Test the unemployment insurance estimate."""

    def test_no_earnings(self, rate_tables):
        """Test zero earnings gives zero benefits."""
        assert calculate_unemployment_benefits(0, 0, rate_tables.unemployment) == 0.0

    def test_below_minimum_earnings(self, rate_tables):
        """Test the base period earnings minimum."""
        assert calculate_unemployment_benefits(3000, 2000, rate_tables.unemployment) == 0.0

    def test_first_year_seasonal_wages(self, rate_tables):
        """Test a season of wages with no prior year."""
        # Highest quarter 6300: weekly round(6300/26 - 5) = 237, duration capped at 26.
        benefits = calculate_unemployment_benefits(25200, 0, rate_tables.unemployment)

        assert benefits == 237 * 26

    def test_weekly_benefit_cap(self, rate_tables):
        """Test benefits never exceed the weekly cap times the maximum duration."""
        benefits = calculate_unemployment_benefits(
            200000, 200000, rate_tables.unemployment
        )

        assert benefits == 777 * 26

    def test_uses_higher_year_for_quarter(self, rate_tables):
        """Test that the higher of the two years sets the weekly benefit."""
        rules = rate_tables.unemployment

        assert calculate_unemployment_benefits(
            10000, 30000, rules
        ) == calculate_unemployment_benefits(30000, 10000, rules)

    def test_non_decreasing_in_earnings(self, rate_tables):
        """Test more earnings never reduce benefits."""
        rules = rate_tables.unemployment
        benefits = [
            calculate_unemployment_benefits(e, 0, rules) for e in range(0, 200000, 2500)
        ]

        assert benefits == sorted(benefits)
        assert max(benefits) <= 777 * 26


class TestPTOPayout:
    """Test the PTO payout."""

    def test_whole_pto_hours(self, rate_tables):
        """Test only whole accrued hours are paid."""
        assert calculate_pto_payout(800, 31.5, rate_tables.pto) == pytest.approx(819.0)

    def test_less_than_one_hour_accrued(self, rate_tables):
        """Test fewer hours than one accrual period pays nothing."""
        assert calculate_pto_payout(29, 31.5, rate_tables.pto) == 0.0
