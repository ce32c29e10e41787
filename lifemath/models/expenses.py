"""
Expense budget: configured expense categories totalled into the year-0
annual expense baseline used by the projection.
"""

from typing import Any, Dict, Literal, Mapping

from pydantic import BaseModel, Field

from .planner_inputs import get_numeric_value


class ExpenseField(BaseModel):
    """A single expense line in a category."""

    label: str = Field(..., description="Display label")
    default: float = Field(default=0.0, description="Default amount")


class ExpenseCategory(BaseModel):
    """A group of expense lines entered at the same frequency."""

    title: str = Field(..., description="Display title")
    frequency: Literal["monthly", "annual"] = Field(
        default="monthly", description="How often the amounts are paid"
    )
    fields: Dict[str, ExpenseField] = Field(default_factory=dict)

    def total(self, values: Mapping[str, Any]) -> float:
        """Sum of the category's lines at its own frequency."""
        return sum(
            get_numeric_value(values.get(key, field.default))
            for key, field in self.fields.items()
        )

    def annual_total(self, values: Mapping[str, Any]) -> float:
        total = self.total(values)
        return total * 12 if self.frequency == "monthly" else total


class ExpenseBudget(BaseModel):
    """All configured expense categories."""

    categories: Dict[str, ExpenseCategory] = Field(default_factory=dict)

    def default_values(self) -> Dict[str, float]:
        """Default amount for every expense line, keyed by field name."""
        defaults = {}
        for category in self.categories.values():
            for key, field in category.fields.items():
                defaults[key] = field.default
        return defaults

    def monthly_equivalents(self, values: Mapping[str, Any]) -> Dict[str, float]:
        """Monthly-equivalent total per category."""
        return {
            key: category.annual_total(values) / 12
            for key, category in self.categories.items()
        }

    def current_expenses_annual(self, values: Mapping[str, Any]) -> float:
        """Year-0 annual expenses across every category."""
        return sum(
            category.annual_total(values) for category in self.categories.values()
        )
