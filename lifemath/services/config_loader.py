"""
Calculator configuration loader.

Loads the calculator configuration document with a fallback chain (main file,
then the example file, then a built-in minimal configuration), validates the
rate tables once, and exposes default form values, expense categories and
input validation ranges to the rest of the application.

All fallback behaviour lives here; the projection engine only ever receives a
validated RateTables instance.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from lifemath.config import Settings
from lifemath.exceptions import ConfigurationError
from lifemath.models.expenses import ExpenseBudget
from lifemath.models.planner_inputs import PlannerInputs
from lifemath.models.rate_tables import RateTables
from lifemath.storage import LocalStorageService, StorageError, StorageService

logger = logging.getLogger(__name__)

ConfigSource = Literal["main", "example", "minimal"]


class ValidationRange(BaseModel):
    """Inclusive numeric range for a form field."""

    min: float
    max: float


class ValidationRanges(BaseModel):
    """Configured ranges for the validated form fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    age: ValidationRange
    hours: ValidationRange
    tax_rate: ValidationRange
    investment_return: ValidationRange
    cash_return: ValidationRange


class FieldValidation(BaseModel):
    """Result of validating one form field."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    message: Optional[str] = None


# Form field -> (range name, message template)
FIELD_RANGE_RULES: Dict[str, Tuple[str, str]] = {
    "currentAge": ("age", "Age must be between {min:g} and {max:g}"),
    "endAge": ("age", "Age must be between {min:g} and {max:g}"),
    "annualHours": ("hours", "Hours must be between {min:g} and {max:g}"),
    "taxRate": ("tax_rate", "Tax rate must be between {min:g}% and {max:g}%"),
    "investmentReturn": (
        "investment_return",
        "Investment return must be between {min:g}% and {max:g}%",
    ),
    "cashReturn": ("cash_return", "Cash return must be between {min:g}% and {max:g}%"),
}


def create_minimal_config() -> Dict[str, Any]:
    """Built-in configuration with zero defaults, used when no file loads."""
    this_year = date.today().year
    return {
        "metadata": {
            "version": "minimal-fallback",
            "lastUpdated": date.today().isoformat(),
            "description": "Minimal fallback configuration with zero defaults",
            "dataYear": this_year,
        },
        "defaultValues": {
            "personalInfo": {
                "currentAge": 0,
                "endAge": 0,
                "startingCareerHours": 0,
                "annualHours": 0,
            },
            "income": {
                "startingProfitSharing": 0,
                "annualRaise": 0,
                "profitSharingPercent": 0,
                "otherIncome": 0,
                "partnerIncome": 0,
            },
            "expenses": {
                "categories": {
                    "essential": {
                        "title": "Essential Monthly Expenses",
                        "frequency": "monthly",
                        "fields": {
                            "rent": {"label": "Rent", "default": 0},
                            "utilities": {"label": "Utilities", "default": 0},
                            "groceries": {"label": "Groceries", "default": 0},
                        },
                    },
                    "nonEssential": {
                        "title": "Non-Essential Monthly Expenses",
                        "frequency": "monthly",
                        "fields": {"misc": {"label": "Miscellaneous", "default": 0}},
                    },
                },
                "inflation": {"expenseInflation": 0},
            },
            "accounts": {
                "retirementBalance": 0,
                "taxableBalance": 0,
                "cashBalance": 0,
                "investmentReturn": 0,
                "cashReturn": 0,
            },
            "taxes": {"effectiveTaxRate": 0},
        },
        "governmentRates": {
            "aca": {
                "federalPovertyLevel": 15060,
                "benchmarkPremiumMonthly": 450,
                "subsidyRates": {
                    "150": 0.0285,
                    "200": 0.0570,
                    "250": 0.0855,
                    "300": 0.1140,
                    "400": 0.095,
                },
                "incomeThresholds": {"minimumPercent": 100, "maximumPercent": 400},
            },
            "unemployment": {
                "utah2025": {
                    "minimumEarnings": 5300,
                    "quarterMultiplier": 1.5,
                    "weeklyBenefitDeduction": 5,
                    "weeksPerQuarter": 26,
                    "maxWeeklyBenefit": 777,
                    "durationMultiplier": 0.27,
                    "minDurationWeeks": 10,
                    "maxDurationWeeks": 26,
                }
            },
        },
        "payScale": {
            "year": this_year,
            "stepRates": {str(step): 0 for step in range(1, 14)},
            "stepThresholds": {
                "1": 699, "2": 1399, "3": 2099, "4": 3499, "5": 4899,
                "6": 6299, "7": 7699, "8": 9099, "9": 10499, "10": 11899,
                "11": 13299, "12": 14699, "13": 99999,
            },
            "annualRaiseRate": 0,
        },
        "businessRules": {
            "pto": {
                "hoursPerPTOHour": 30,
                "description": "1 PTO hour earned per 30 hours worked",
            },
            "retirement": {
                "contributionRate": 0,
                "description": "0% of profit sharing goes to 401k",
            },
            "calculations": {"maxCareerHours": 14700, "displayOverflow": "----"},
        },
        "validation": {
            "ranges": {
                "age": {"min": 0, "max": 100},
                "hours": {"min": 0, "max": 8760},
                "taxRate": {"min": 0, "max": 100},
                "investmentReturn": {"min": 0, "max": 50},
                "cashReturn": {"min": 0, "max": 50},
            }
        },
    }


def _section(document: Mapping[str, Any], *keys: str) -> Dict[str, Any]:
    """Nested lookup returning an empty dict for any missing level."""
    current: Any = document
    for key in keys:
        if not isinstance(current, Mapping):
            return {}
        current = current.get(key, {})
    return dict(current) if isinstance(current, Mapping) else {}


def build_expense_budget(document: Mapping[str, Any]) -> ExpenseBudget:
    """
    Validate the configured expense categories.

    Raises:
        ConfigurationError: If the categories do not form a valid budget
    """
    categories = _section(document, "defaultValues", "expenses", "categories")
    try:
        return ExpenseBudget.model_validate({"categories": categories})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid expense categories: {e}") from e


class CalculatorConfigLoader:
    """Loads calculator configuration and derives the engine's inputs from it."""

    def __init__(
        self,
        storage: StorageService,
        main_config_path: str,
        example_config_path: Optional[str] = None,
        unemployment_ruleset: str = "utah2025",
    ) -> None:
        """
        Load configuration, falling back main -> example -> minimal.

        Args:
            storage: Storage service the configuration files are read from
            main_config_path: Path of the user's configuration file
            example_config_path: Path of the template configuration file
            unemployment_ruleset: Unemployment ruleset key to use
        """
        self.storage = storage
        self.unemployment_ruleset = unemployment_ruleset
        self.config: Dict[str, Any] = {}
        self.config_source: ConfigSource = "minimal"
        self.rate_tables: RateTables
        self.expense_budget: ExpenseBudget

        candidates: List[Tuple[ConfigSource, Optional[str]]] = [
            ("main", main_config_path),
            ("example", example_config_path),
        ]
        for source, path in candidates:
            if path and self._try_load(source, path):
                break
        else:
            logger.info("Using minimal default configuration")
            self.config = create_minimal_config()
            self.config_source = "minimal"
            self.rate_tables = RateTables.from_calculator_config(
                self.config, unemployment_ruleset
            )
            self.expense_budget = build_expense_budget(self.config)

        self._warn_on_missing_sections()
        metadata = self.get_metadata()
        logger.info(
            f"Calculator config loaded from {self.config_source}: "
            f"v{metadata.get('version', 'unknown')} ({metadata.get('dataYear', 'unknown')})"
        )

    def _try_load(self, source: ConfigSource, path: str) -> bool:
        """Attempt one configuration source; True when it produced rate tables."""
        if not self.storage.file_exists(path):
            logger.debug(f"No {source} configuration at {path}")
            return False

        try:
            document = self.storage.retrieve_json(path)
            rate_tables = RateTables.from_calculator_config(
                document, self.unemployment_ruleset
            )
            expense_budget = build_expense_budget(document)
        except (StorageError, ConfigurationError) as e:
            logger.warning(f"Skipping {source} configuration {path}: {e}")
            return False

        self.config = document
        self.config_source = source
        self.rate_tables = rate_tables
        self.expense_budget = expense_budget
        return True

    def _warn_on_missing_sections(self) -> None:
        warnings = []
        if not _section(self.config, "metadata").get("version"):
            warnings.append("Missing metadata.version")
        if not _section(self.config, "defaultValues"):
            warnings.append("Missing defaultValues section")
        if not _section(self.config, "validation", "ranges"):
            warnings.append("Missing validation.ranges section")

        if warnings and self.config_source != "minimal":
            logger.warning(f"Configuration validation warnings: {warnings}")

    def get_config(self) -> Dict[str, Any]:
        """Get the full configuration document."""
        return self.config

    def get_config_source(self) -> ConfigSource:
        """Get which source the configuration was loaded from."""
        return self.config_source

    def get_metadata(self) -> Dict[str, Any]:
        return _section(self.config, "metadata")

    def get_rate_tables(self) -> RateTables:
        return self.rate_tables

    def get_expense_budget(self) -> ExpenseBudget:
        """Expense categories defined in the configuration defaults."""
        return self.expense_budget

    def get_default_form_data(self) -> Dict[str, Any]:
        """
        Default form values in the flattened camelCase shape the form uses.

        Includes every configured expense line and the year-0 annual expense
        total computed from them.
        """
        defaults = _section(self.config, "defaultValues")
        personal = _section(defaults, "personalInfo")
        income = _section(defaults, "income")
        inflation = _section(defaults, "expenses", "inflation")
        accounts = _section(defaults, "accounts")
        taxes = _section(defaults, "taxes")

        form_data: Dict[str, Any] = {
            "currentAge": personal.get("currentAge", 0),
            "endAge": personal.get("endAge", 0),
            "startingCareerHours": personal.get("startingCareerHours", 0),
            "annualHours": personal.get("annualHours", 0),
            "startingProfitSharing": income.get("startingProfitSharing", 0),
            "annualRaise": income.get("annualRaise", 0),
            "profitSharingPercent": income.get("profitSharingPercent", 0),
            "otherIncome": income.get("otherIncome", 0),
            "partnerIncome": income.get("partnerIncome", 0),
            "expenseInflation": inflation.get("expenseInflation", 0),
            "retirementBalance": accounts.get("retirementBalance", 0),
            "taxableBalance": accounts.get("taxableBalance", 0),
            "cashBalance": accounts.get("cashBalance", 0),
            "investmentReturn": accounts.get("investmentReturn", 0),
            "cashReturn": accounts.get("cashReturn", 0),
            "taxRate": taxes.get("effectiveTaxRate", 0),
        }

        budget = self.get_expense_budget()
        expense_defaults = budget.default_values()
        form_data.update(expense_defaults)
        form_data["currentExpenses"] = budget.current_expenses_annual(expense_defaults)
        return form_data

    def get_default_inputs(self) -> PlannerInputs:
        """Default form values as planner inputs; expense lines are ignored."""
        return PlannerInputs.model_validate(self.get_default_form_data())

    def get_validation_ranges(self) -> Optional[ValidationRanges]:
        ranges = _section(self.config, "validation", "ranges")
        if not ranges:
            return None
        return ValidationRanges.model_validate(ranges)

    def validate_field(self, field_name: str, value: float) -> FieldValidation:
        """
        Validate a form value against the configured range for its field.

        Fields without a configured range are always valid.
        """
        ranges = self.get_validation_ranges()
        rule = FIELD_RANGE_RULES.get(field_name)
        if ranges is None or rule is None:
            return FieldValidation(is_valid=True)

        range_name, message = rule
        allowed: ValidationRange = getattr(ranges, range_name)
        if value < allowed.min or value > allowed.max:
            return FieldValidation(
                is_valid=False, message=message.format(min=allowed.min, max=allowed.max)
            )
        return FieldValidation(is_valid=True)


def create_config_loader(settings: Settings) -> CalculatorConfigLoader:
    """Create a loader reading configuration files from the local filesystem."""
    return CalculatorConfigLoader(
        storage=LocalStorageService(base_path="."),
        main_config_path=settings.calculator_config_path,
        example_config_path=settings.calculator_example_config_path,
        unemployment_ruleset=settings.unemployment_ruleset,
    )
