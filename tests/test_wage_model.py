"""Tests for the step-based wage model."""

import pytest

from lifemath.models.wage_model import WageModel


@pytest.fixture
def wage_model(rate_tables):
    """Wage model over the example pay scale."""
    return WageModel(pay_scale=rate_tables.pay_scale)


class TestDetermineStep:
    """Test pay step lookup from cumulative hours."""

    @pytest.mark.parametrize(
        "hours, step",
        [
            (0, 1),
            (699, 1),
            (700, 2),
            (1399, 2),
            (1400, 3),
            (5000, 6),
            (9695, 9),
            (10000, 9),
            (14699, 12),
            (14700, 13),
            (99999, 13),
            (100000, 13),
        ],
    )
    def test_threshold_boundaries(self, wage_model, hours, step):
        """Test that thresholds are inclusive upper bounds."""
        assert wage_model.determine_step(hours) == step

    def test_step_never_decreases(self, wage_model):
        """Test that more hours never lower the step."""
        steps = [wage_model.determine_step(hours) for hours in range(0, 20000, 50)]

        assert steps == sorted(steps)


class TestHourlyRate:
    """Test hourly rate compounding."""

    def test_base_rate_in_first_year(self, wage_model):
        """Test no raise is applied in year 0."""
        assert wage_model.hourly_rate(9695, 0) == 31.5

    def test_rate_compounds_yearly(self, wage_model):
        """Test the annual raise compounds per year from the start."""
        assert wage_model.hourly_rate(9695, 1) == pytest.approx(31.5 * 1.04)
        assert wage_model.hourly_rate(9695, 3) == pytest.approx(31.5 * 1.04**3)

    def test_rate_follows_step(self, wage_model):
        """Test the base rate comes from the step for the hours."""
        assert wage_model.hourly_rate(100, 0) == 20.0
        assert wage_model.hourly_rate(20000, 0) == 35.5
