"""
Pytest configuration and shared fixtures for the Life Math planner tests.
"""

import copy
import json

import pytest

from lifemath import create_app
from lifemath.config import PACKAGED_EXAMPLE_CONFIG, Settings
from lifemath.models.planner_inputs import PlannerInputs
from lifemath.models.rate_tables import RateTables


@pytest.fixture(scope="session")
def example_config_document():
    """The packaged example calculator configuration."""
    with open(PACKAGED_EXAMPLE_CONFIG, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def example_config(example_config_document):
    """A mutable copy of the example configuration."""
    return copy.deepcopy(example_config_document)


@pytest.fixture
def rate_tables(example_config):
    """Rate tables built from the example configuration."""
    return RateTables.from_calculator_config(example_config)


@pytest.fixture
def default_inputs():
    """Planner inputs matching the example configuration defaults."""
    return PlannerInputs(
        current_age=44,
        end_age=60,
        starting_career_hours=9695,
        annual_hours=800,
        starting_profit_sharing=0,
        annual_raise_percent=4,
        profit_sharing_percent=10,
        other_income_annual=500,
        partner_income_monthly=1500,
        tax_rate_percent=22,
        current_expenses_annual=52980,
        expense_inflation_percent=3,
        retirement_balance=560183,
        taxable_balance=124112,
        cash_balance=76000,
        investment_return_percent=6,
        cash_return_percent=3.98,
    )


@pytest.fixture
def test_settings(tmp_path):
    """Settings reading a missing main config so the example is used."""
    return Settings(
        SECRET_KEY="test-secret-key-123",
        APP_ENV="testing",
        CALCULATOR_CONFIG_PATH=str(tmp_path / "calculator-config.json"),
        CALCULATOR_EXAMPLE_CONFIG_PATH=PACKAGED_EXAMPLE_CONFIG,
    )


@pytest.fixture
def app(test_settings):
    """Flask application configured for testing."""
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
