"""Tests for planner input coercion and validation."""

import pytest
from pydantic import ValidationError

from lifemath.models.planner_inputs import PlannerInputs, get_numeric_value


class TestGetNumericValue:
    """Test raw form value coercion."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 0.0),
            ("", 0.0),
            ("abc", 0.0),
            (float("nan"), 0.0),
            (7, 7.0),
            (2.5, 2.5),
            ("42", 42.0),
            ("  3.5 ", 3.5),
            ("12abc", 12.0),
            ("-2e3", -2000.0),
            (".5", 0.5),
            ("1,500", 1.0),
        ],
    )
    def test_coercion(self, raw, expected):
        """Test values are coerced like a browser number parse."""
        assert get_numeric_value(raw) == expected


class TestPlannerInputs:
    """Test the planner input record."""

    def test_from_camel_case_form_data(self):
        """Test that form field names and raw values are accepted."""
        inputs = PlannerInputs.model_validate(
            {
                "currentAge": "44",
                "endAge": 60,
                "annualHours": "800",
                "taxRate": "",
                "partnerIncome": "1500",
                "currentExpenses": "52980",
                "cashReturn": "3.98",
            }
        )

        assert inputs.current_age == 44
        assert inputs.end_age == 60
        assert inputs.annual_hours == 800.0
        assert inputs.tax_rate_percent == 0.0
        assert inputs.partner_income_monthly == 1500.0
        assert inputs.current_expenses_annual == 52980.0
        assert inputs.cash_return_percent == 3.98

    def test_missing_fields_default_to_zero(self):
        """Test that omitted fields are zero."""
        inputs = PlannerInputs()

        assert inputs.current_age == 0
        assert inputs.cash_balance == 0.0
        assert inputs.years_to_project == 1

    def test_unknown_fields_ignored(self):
        """Test that expense line fields do not break validation."""
        inputs = PlannerInputs.model_validate({"currentAge": 30, "endAge": 31, "rent": 1760})

        assert inputs.years_to_project == 2

    def test_end_age_before_current_age(self):
        """Test that an inverted age range is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            PlannerInputs(current_age=60, end_age=44)

        assert "End age" in str(exc_info.value)

    def test_years_to_project_is_inclusive(self, default_inputs):
        """Test both ages are simulated."""
        assert default_inputs.years_to_project == 17

    def test_snapshot_is_detached(self, default_inputs):
        """Test that a snapshot does not follow later edits."""
        snapshot = default_inputs.snapshot()
        default_inputs.cash_balance = 1.0

        assert snapshot is not default_inputs
        assert snapshot.cash_balance == 76000.0
