"""
Public entry points for the workout customization form engine.

WorkoutFormEngine wires the validator, completion calculator, formatter and
selection counter to one shared configuration. The module-level functions
delegate to a default engine built from DEFAULT_CONFIG and the environment
settings.
"""

from typing import Any, List, Mapping, Optional

from workout_wizard.completion import CompletionCalculator
from workout_wizard.config import DEFAULT_CONFIG, EngineConfig
from workout_wizard.formatter import SelectionFormatter
from workout_wizard.schemas import (
    SelectionSummaryItem,
    StepSelectionState,
    ValidationOutcome,
    ValidationResult,
)
from workout_wizard.selection import SelectionCounter
from workout_wizard.settings import WizardSettings
from workout_wizard.validator import FieldValidator, StepValidator


class WorkoutFormEngine:
    """Validation, scoring and formatting for the customization wizard."""

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        settings: Optional[WizardSettings] = None,
    ):
        """
        Initialize engine components.

        Args:
            config: Static field and step tables
            settings: Runtime settings (read from the environment if None)
        """
        self.config = config
        self.settings = settings or WizardSettings()

        self.field_validator = FieldValidator(config, self.settings.unregistered_field_policy)
        self.step_validator = StepValidator(config, self.field_validator)
        self.completion = CompletionCalculator(config)
        self.formatter = SelectionFormatter(config)
        self.selection = SelectionCounter(config, self.step_validator)

    def validate(self, field_key: str, value: Any) -> ValidationOutcome:
        return self.field_validator.validate(field_key, value)

    def validate_step(self, step_name: str, values: Mapping[str, Any]) -> ValidationResult:
        return self.step_validator.validate_step(step_name, values)

    def validate_all(self, values: Mapping[str, Any]) -> ValidationResult:
        return self.step_validator.validate_all(values)

    def step_completion(self, step_name: str, values: Mapping[str, Any]) -> int:
        return self.completion.step_completion(step_name, values)

    def overall_completion(self, values: Mapping[str, Any]) -> int:
        return self.completion.overall_completion(values)

    def format(self, field_key: str, value: Any) -> Optional[str]:
        return self.formatter.format(field_key, value)

    def selection_summary(self, values: Mapping[str, Any]) -> List[SelectionSummaryItem]:
        return self.formatter.selection_summary(values)

    def step_selection_state(
        self, step_name: str, values: Mapping[str, Any]
    ) -> StepSelectionState:
        return self.selection.step_selection_state(step_name, values)


_default_engine: Optional[WorkoutFormEngine] = None


def get_engine() -> WorkoutFormEngine:
    """Return the process-wide default engine, building it on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = WorkoutFormEngine()
    return _default_engine


def validate(field_key: str, value: Any) -> ValidationOutcome:
    return get_engine().validate(field_key, value)


def validate_step(step_name: str, values: Mapping[str, Any]) -> ValidationResult:
    return get_engine().validate_step(step_name, values)


def step_completion(step_name: str, values: Mapping[str, Any]) -> int:
    return get_engine().step_completion(step_name, values)


def overall_completion(values: Mapping[str, Any]) -> int:
    return get_engine().overall_completion(values)


def format_selection(field_key: str, value: Any) -> Optional[str]:
    return get_engine().format(field_key, value)


def step_selection_state(step_name: str, values: Mapping[str, Any]) -> StepSelectionState:
    return get_engine().step_selection_state(step_name, values)
