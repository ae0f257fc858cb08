"""
Field and step validation for the workout customization wizard.

This module implements the progressive validation rules. Field values are
checked against their type's resolved constraints; steps combine hard rules
for required/optional fields with soft guidance for progressive groups.
Failures are returned as values and never raised.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

from workout_wizard import messages as msg
from workout_wizard.config import DEFAULT_CONFIG, EngineConfig
from workout_wizard.logger import logger
from workout_wizard.schemas import (
    DurationConstraints,
    FieldType,
    MultiSelectConstraints,
    RatingConstraints,
    SingleSelectConstraints,
    StepLimit,
    TextConstraints,
    UnregisteredFieldPolicy,
    ValidationOutcome,
    ValidationResult,
    ValueCoercionError,
    coerce_value,
    is_empty_value,
)


def _bound(number: float) -> str:
    return f"{int(number)}" if float(number).is_integer() else f"{number}"


class FieldValidator:
    """
    Validates one raw field value against its type and constraints.

    The registry tag selects the value variant and the rule set. Fields with
    no registered type are handled by the unregistered-field policy.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        unregistered_policy: UnregisteredFieldPolicy = UnregisteredFieldPolicy.ALLOW,
    ):
        """
        Initialize validator.

        Args:
            config: Engine configuration (type map, constraint tables)
            unregistered_policy: Treatment of fields with no registered type
        """
        self.config = config
        self.unregistered_policy = unregistered_policy

    def validate(self, field_key: str, value: Any) -> ValidationOutcome:
        """
        Validate a single field value.

        Args:
            field_key: Field being validated
            value: Raw value from the form

        Returns:
            ValidationOutcome with is_valid and, if invalid, an error message
        """
        field_type = self.config.type_of(field_key)
        if field_type is None:
            return self._unregistered(field_key)

        constraints = self.config.constraints_of(field_key, field_type)

        if is_empty_value(value):
            if constraints.required:
                return ValidationOutcome.fail(msg.FIELD_REQUIRED)
            return ValidationOutcome.ok()

        try:
            field_value = coerce_value(field_type, value)
        except ValueCoercionError:
            return ValidationOutcome.fail(msg.INVALID_NUMBER)

        if field_type == FieldType.RATING:
            return self._validate_rating(field_value.value, constraints)
        if field_type == FieldType.DURATION:
            return self._validate_duration(field_value.minutes, constraints)
        if field_type == FieldType.MULTI_SELECT:
            return self._validate_multi_select(field_value.count, constraints)
        if field_type == FieldType.SINGLE_SELECT:
            return self._validate_single_select(field_value.value, constraints)
        return self._validate_text(field_value.text, constraints)

    def field_state(self, field_key: str, value: Any) -> str:
        """
        Classify a field for inline UI feedback.

        Returns:
            "empty", "valid" or "invalid"
        """
        if is_empty_value(value):
            return "empty"
        return "valid" if self.validate(field_key, value).is_valid else "invalid"

    def _unregistered(self, field_key: str) -> ValidationOutcome:
        if self.unregistered_policy == UnregisteredFieldPolicy.REJECT:
            logger.warning(f"Rejecting value for unregistered field: {field_key}")
            return ValidationOutcome.fail(msg.UNKNOWN_FIELD)
        logger.debug(f"No type registered for {field_key}; passing without validation")
        return ValidationOutcome.ok()

    def _validate_rating(
        self, rating: float, constraints: RatingConstraints
    ) -> ValidationOutcome:
        min_value = constraints.min if constraints.min is not None else 1
        max_value = constraints.max if constraints.max is not None else 6

        if rating < min_value or rating > max_value:
            return ValidationOutcome.fail(
                f"Must be between {_bound(min_value)} and {_bound(max_value)}"
            )
        return ValidationOutcome.ok()

    def _validate_duration(
        self, minutes: float, constraints: DurationConstraints
    ) -> ValidationOutcome:
        if constraints.min is not None and minutes < constraints.min:
            return ValidationOutcome.fail(f"Must be at least {constraints.min} minutes")

        if constraints.max is not None and minutes > constraints.max:
            return ValidationOutcome.fail(f"Must be no more than {constraints.max} minutes")

        return ValidationOutcome.ok()

    def _validate_multi_select(
        self, count: int, constraints: MultiSelectConstraints
    ) -> ValidationOutcome:
        minimum = constraints.min_selections
        maximum = constraints.max_selections

        if minimum is not None and count < minimum:
            return ValidationOutcome.fail(
                f"Select at least {minimum} {msg.pluralize(minimum, 'option')}"
            )

        if maximum is not None and count > maximum:
            return ValidationOutcome.fail(
                f"Select up to {maximum} {msg.pluralize(maximum, 'option')}"
            )

        return ValidationOutcome.ok()

    def _validate_single_select(
        self, option: str, constraints: SingleSelectConstraints
    ) -> ValidationOutcome:
        if constraints.allowed_values is not None and option not in constraints.allowed_values:
            return ValidationOutcome.fail(msg.INVALID_SELECTION)
        return ValidationOutcome.ok()

    def _validate_text(self, text: str, constraints: TextConstraints) -> ValidationOutcome:
        # Length rules before pattern; first failure wins
        if constraints.min_length is not None and len(text) < constraints.min_length:
            return ValidationOutcome.fail(
                f"Must be at least {constraints.min_length} "
                f"{msg.pluralize(constraints.min_length, 'character')}"
            )

        if constraints.max_length is not None and len(text) > constraints.max_length:
            return ValidationOutcome.fail(
                f"Must be no more than {constraints.max_length} "
                f"{msg.pluralize(constraints.max_length, 'character')}"
            )

        if constraints.pattern and not re.search(constraints.pattern, text):
            return ValidationOutcome.fail(msg.INVALID_FORMAT)

        return ValidationOutcome.ok()


class StepValidator:
    """
    Validates a named wizard step with progressive logic.

    Three policies run side by side and are never merged:
    - required fields produce hard errors when empty or invalid
    - optional fields produce hard errors only when filled and invalid
    - progressive groups produce warnings and one suggestion when partially
      filled, while their filled members are still hard-validated

    Step limits run last and can add errors the field rules did not raise.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        field_validator: Optional[FieldValidator] = None,
    ):
        """
        Initialize step validator.

        Args:
            config: Engine configuration with step declarations
            field_validator: Validator for single fields (built from config if None)
        """
        self.config = config
        self.field_validator = field_validator or FieldValidator(config)

    def validate_step(self, step_name: str, values: Mapping[str, Any]) -> ValidationResult:
        """
        Validate every field a step declares.

        Args:
            step_name: Step to validate (e.g., 'current-state')
            values: Raw field values keyed by field key

        Returns:
            ValidationResult; is_valid reflects errors only
        """
        step = self.config.step(step_name)
        if step is None:
            logger.warning(f"Validation requested for undeclared step: {step_name}")
            return ValidationResult(is_valid=True)

        errors: Dict[str, str] = {}
        warnings: Dict[str, str] = {}
        suggestions: List[str] = []

        # Step 1: required fields
        for field_key in step.required_fields:
            value = values.get(field_key)
            if is_empty_value(value):
                errors[field_key] = msg.get_validation_message(field_key, "required")
                continue
            self._record(errors, field_key, value)

        # Step 2: optional fields, only when filled
        for field_key in step.optional_fields:
            value = values.get(field_key)
            if is_empty_value(value):
                continue
            self._record(errors, field_key, value)

        # Step 3: progressive groups
        for group in step.progressive_groups:
            filled = [f for f in group.fields if not is_empty_value(values.get(f))]
            if not filled:
                continue

            if len(filled) < len(group.fields):
                missing = [f for f in group.fields if f not in filled]
                suggestions.append(
                    group.suggestion_template.format(
                        missing=msg.join_names(msg.short_field_name(f) for f in missing)
                    )
                )
                for field_key in missing:
                    warnings[field_key] = msg.get_validation_message(field_key, "suggested")

            for field_key in filled:
                self._record(errors, field_key, values.get(field_key))

        # Step 4: step-local limits
        for limit in step.limits:
            if self._exceeds(limit, values.get(limit.field)):
                errors[limit.field] = limit.message

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            suggestions=suggestions,
        )

    def validate_all(self, values: Mapping[str, Any]) -> ValidationResult:
        """
        Validate every step that contributes to overall completion.

        Args:
            values: Raw field values keyed by field key

        Returns:
            Combined ValidationResult across steps
        """
        errors: Dict[str, str] = {}
        warnings: Dict[str, str] = {}
        suggestions: List[str] = []

        for step_name in self.config.overall_steps:
            result = self.validate_step(step_name, values)
            errors.update(result.errors)
            warnings.update(result.warnings)
            suggestions.extend(result.suggestions)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            suggestions=suggestions,
        )

    def is_step_complete(self, step_name: str, values: Mapping[str, Any]) -> bool:
        """True when the step has no hard errors."""
        return self.validate_step(step_name, values).is_valid

    def _record(self, errors: Dict[str, str], field_key: str, value: Any) -> None:
        outcome = self.field_validator.validate(field_key, value)
        if not outcome.is_valid and outcome.error:
            errors[field_key] = outcome.error

    @staticmethod
    def _exceeds(limit: StepLimit, value: Any) -> bool:
        if is_empty_value(value):
            return False

        if limit.max_items is not None:
            if isinstance(value, (list, tuple, set, frozenset)) and len(value) > limit.max_items:
                return True

        if isinstance(value, str):
            if limit.max_length is not None and len(value) > limit.max_length:
                return True
            trimmed = value.strip()
            if limit.min_length is not None and 0 < len(trimmed) < limit.min_length:
                return True

        return False
