"""Tests for the configured expense budget."""

import pytest

from lifemath.models.expenses import ExpenseBudget, ExpenseCategory, ExpenseField


@pytest.fixture
def budget(example_config):
    categories = example_config["defaultValues"]["expenses"]["categories"]
    return ExpenseBudget.model_validate({"categories": categories})


class TestExpenseCategory:
    """Test a single expense category."""

    def test_monthly_category_annualised(self):
        """Test monthly categories are multiplied by twelve."""
        category = ExpenseCategory(
            title="Essential",
            frequency="monthly",
            fields={"rent": ExpenseField(label="Rent", default=1000)},
        )

        assert category.total({}) == 1000
        assert category.annual_total({}) == 12000

    def test_annual_category_not_multiplied(self):
        """Test annual categories are used as entered."""
        category = ExpenseCategory(
            title="Annual",
            frequency="annual",
            fields={"gifts": ExpenseField(label="Gifts")},
        )

        assert category.annual_total({"gifts": "600"}) == 600

    def test_raw_values_coerced(self):
        """Test raw form values are coerced before totalling."""
        category = ExpenseCategory(
            title="Misc",
            fields={
                "a": ExpenseField(label="A", default=10),
                "b": ExpenseField(label="B", default=20),
            },
        )

        assert category.total({"a": "", "b": "5x"}) == 5

    def test_unknown_frequency_rejected(self):
        """Test only monthly and annual frequencies are accepted."""
        with pytest.raises(ValueError):
            ExpenseCategory(title="Weekly", frequency="weekly")


class TestExpenseBudget:
    """Test totals across categories."""

    def test_default_total(self, budget):
        """Test the example defaults total 4415 per month."""
        defaults = budget.default_values()

        assert defaults["rent"] == 1760
        assert budget.current_expenses_annual(defaults) == 52980

    def test_overrides_replace_defaults(self, budget):
        """Test entered values replace the configured defaults."""
        values = budget.default_values()
        values.update({"rent": 0, "carRegistration": 120})

        assert budget.current_expenses_annual(values) == 52980 - 1760 * 12 + 120

    def test_monthly_equivalents(self, budget):
        """Test per-category monthly equivalents."""
        values = budget.default_values()
        values["vacations"] = 1200

        equivalents = budget.monthly_equivalents(values)

        assert equivalents["essential"] == pytest.approx(4415)
        assert equivalents["nonEssential"] == 0
        assert equivalents["annual"] == pytest.approx(100)
