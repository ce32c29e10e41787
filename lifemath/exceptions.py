"""
Exception hierarchy for the Life Math planner.

LifeMathError (base)
├── ConfigurationError - Missing or malformed calculator configuration
└── InputValidationError - Planner inputs that cannot be projected
"""


class LifeMathError(Exception):
    """Base exception for all planner errors."""


class ConfigurationError(LifeMathError):
    """
    Invalid calculator configuration.

    Raised when a rate table is missing a required step or tier, or when a
    configuration file cannot be turned into validated rate tables.
    """


class InputValidationError(LifeMathError):
    """Planner inputs failed validation (e.g. end age before current age)."""
