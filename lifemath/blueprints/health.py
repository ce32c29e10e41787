"""Health check blueprint."""

from flask import Blueprint, Response, current_app, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Reports which calculator configuration source the application is serving.

    Returns:
        JSON response with status information
    """
    loader = current_app.extensions["config_loader"]
    return jsonify({"status": "ok", "config_source": loader.get_config_source()})
