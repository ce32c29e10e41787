"""Life Math Planner Flask Application Factory."""

from typing import Optional

from flask import Flask

from lifemath.config import Settings, get_global_settings
from lifemath.services.config_loader import create_config_loader


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Settings to use instead of the global environment settings

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    if settings is None:
        settings = get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = settings.app_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = settings.app_env == "testing"
    app.logger.setLevel(settings.log_level)

    # Calculator configuration is loaded once and shared read-only
    app.extensions["config_loader"] = create_config_loader(settings)

    # Register blueprints
    from lifemath.blueprints.health import health_bp
    from lifemath.blueprints.projection import projection_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(projection_bp)

    return app
