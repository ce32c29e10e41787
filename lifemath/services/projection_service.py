"""
Projection service for running planner projections from form payloads.

This service merges raw form data with configured defaults, coerces it into
planner inputs, runs the projection engine against the loaded rate tables and
turns the result into a JSON-ready structure for the presentation layer.
"""

import logging
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from lifemath.exceptions import InputValidationError
from lifemath.models.planner_inputs import PlannerInputs
from lifemath.models.projection import ProjectionResult, ProjectionRunner
from lifemath.services.config_loader import CalculatorConfigLoader

logger = logging.getLogger(__name__)

NEVER_DEPLETED = "Never"


class ProjectionService:
    """Service for running projections against the loaded configuration."""

    def __init__(self, config_loader: CalculatorConfigLoader) -> None:
        """Initialize the projection service.

        Args:
            config_loader: Loaded calculator configuration
        """
        self.config_loader = config_loader
        self.logger = logging.getLogger(__name__)

    def build_inputs(self, form_data: Mapping[str, Any]) -> PlannerInputs:
        """Merge form data over configured defaults and coerce to planner inputs.

        When the payload does not carry ``currentExpenses`` the year-0 expense
        total is recomputed from the configured expense lines.

        Args:
            form_data: Raw form values keyed by camelCase field name

        Returns:
            Validated planner inputs

        Raises:
            InputValidationError: If the merged values cannot be projected
        """
        merged = self.config_loader.get_default_form_data()
        merged.update(form_data)

        if "currentExpenses" not in form_data:
            budget = self.config_loader.get_expense_budget()
            merged["currentExpenses"] = budget.current_expenses_annual(merged)

        try:
            return PlannerInputs.model_validate(merged)
        except ValidationError as e:
            raise InputValidationError(str(e)) from e

    def run_projection(self, form_data: Mapping[str, Any]) -> ProjectionResult:
        """Run a projection for a form payload.

        Args:
            form_data: Raw form values keyed by camelCase field name

        Returns:
            ProjectionResult with one row per simulated year

        Raises:
            InputValidationError: If the payload cannot be projected
        """
        inputs = self.build_inputs(form_data)
        rates = self.config_loader.get_rate_tables()

        try:
            self.logger.info(
                f"Starting projection for ages {inputs.current_age}-{inputs.end_age} "
                f"using {self.config_loader.get_config_source()} configuration"
            )
            result = ProjectionRunner.create(inputs, rates).run()
        except Exception as e:
            self.logger.error(f"Projection failed: {str(e)}")
            raise

        summary = result.summary
        self.logger.info(
            f"Completed projection: final net worth {summary.final_net_worth:.0f} "
            f"at age {summary.final_age}"
        )
        return result

    @staticmethod
    def serialize_result(result: ProjectionResult) -> Dict[str, Any]:
        """Convert a projection result into a JSON-ready dictionary.

        Depletion ages that never occur are reported as ``"Never"``.
        """
        summary = result.summary.model_dump(mode="json")
        for key in ("cash_depleted_age", "taxable_depleted_age"):
            if summary[key] is None:
                summary[key] = NEVER_DEPLETED

        return {
            "rows": [row.model_dump(mode="json") for row in result.rows],
            "summary": summary,
        }
