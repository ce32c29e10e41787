"""
Projection blueprint for the planner's JSON API.

This module provides API endpoints for reading the calculator configuration,
running projections and validating individual form fields.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from lifemath.exceptions import InputValidationError
from lifemath.models.planner_inputs import get_numeric_value
from lifemath.services.config_loader import CalculatorConfigLoader
from lifemath.services.projection_service import ProjectionService

projection_bp = Blueprint("projection", __name__, url_prefix="/api")


def _config_loader() -> CalculatorConfigLoader:
    return current_app.extensions["config_loader"]


@projection_bp.route("/config", methods=["GET"])
def get_config() -> Any:
    """Get configuration source, metadata and default form values.

    Returns:
        JSON response describing the loaded configuration
    """
    try:
        loader = _config_loader()
        budget = loader.get_expense_budget()
        return (
            jsonify(
                {
                    "config_source": loader.get_config_source(),
                    "metadata": loader.get_metadata(),
                    "default_form_data": loader.get_default_form_data(),
                    "expense_categories": budget.model_dump(mode="json")["categories"],
                }
            ),
            200,
        )

    except Exception as e:
        current_app.logger.error(f"Error reading configuration: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/projections", methods=["POST"])
def create_projection() -> Any:
    """Run a projection for the submitted form data.

    Returns:
        JSON response with projection rows and summary
    """
    try:
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        service = ProjectionService(_config_loader())
        try:
            result = service.run_projection(data)
        except InputValidationError as e:
            return jsonify({"error": "Invalid inputs", "message": str(e)}), 400

        return jsonify(service.serialize_result(result)), 200

    except Exception as e:
        current_app.logger.error(f"Error running projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/validate", methods=["POST"])
def validate_field() -> Any:
    """Validate one form field against the configured ranges.

    Returns:
        JSON response with isValid and an optional message
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        field_name = data.get("field")
        if not isinstance(field_name, str) or not field_name:
            return jsonify({"error": "field is required"}), 400

        value = get_numeric_value(data.get("value"))
        validation = _config_loader().validate_field(field_name, value)
        return (
            jsonify(validation.model_dump(by_alias=True, exclude_none=True)),
            200,
        )

    except Exception as e:
        current_app.logger.error(f"Error validating field: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500
