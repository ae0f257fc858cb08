"""
Pydantic models for the workout customization form engine.

This module defines the core data structures for:
- Field types and per-type constraint records
- Field values: one explicit variant per field type
- Step declarations: required/optional fields, progressive groups, step limits
- Validation results and derived selection state
"""

import math
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# Enumerations
# ============================================================================

class FieldType(str, Enum):
    """Type category governing a field's validation and formatting rules."""
    RATING = "rating"
    MULTI_SELECT = "multi-select"
    SINGLE_SELECT = "single-select"
    DURATION = "duration"
    TEXT = "text"


class UnregisteredFieldPolicy(str, Enum):
    """How the validator treats a field key with no registered type."""
    ALLOW = "allow"
    REJECT = "reject"


class ButtonPhase(str, Enum):
    """Visual state of the wizard's primary action button."""
    LOADING = "loading"
    ERROR = "error"
    DISABLED = "disabled"
    PARTIAL = "partial"
    ACTIVE = "active"


# ============================================================================
# Emptiness
# ============================================================================


def is_empty_value(value: Any) -> bool:
    """
    Check whether a raw field value counts as "not filled in".

    None, the empty string and empty collections are empty. Zero and False
    are values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


# ============================================================================
# Field Constraints
# ============================================================================


class _Constraints(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    required: bool = Field(False, description="Whether an empty value is an error")


class RatingConstraints(_Constraints):
    """Bounds for a rating scale (inclusive)."""

    min: Optional[int] = Field(1, description="Lowest accepted rating (1 if unset)")
    max: Optional[int] = Field(6, description="Highest accepted rating (6 if unset)")


class MultiSelectConstraints(_Constraints):
    """Selection count bounds for a multi-select field."""

    min_selections: Optional[int] = Field(0, ge=0, description="Fewest selections allowed")
    max_selections: Optional[int] = Field(5, ge=0, description="Most selections allowed")


class SingleSelectConstraints(_Constraints):
    """Allowed domain for a single-select field (unconstrained if None)."""

    allowed_values: Optional[Tuple[str, ...]] = Field(
        None, description="Accepted option ids; any non-empty id if not set"
    )


class DurationConstraints(_Constraints):
    """Bounds for a duration in minutes (inclusive)."""

    min: Optional[int] = Field(5, description="Shortest accepted duration (minutes)")
    max: Optional[int] = Field(120, description="Longest accepted duration (minutes)")


class TextConstraints(_Constraints):
    """Length and format rules for free text."""

    min_length: Optional[int] = Field(0, ge=0, description="Shortest accepted text")
    max_length: Optional[int] = Field(500, ge=0, description="Longest accepted text")
    pattern: Optional[str] = Field(
        None, description="Regular expression the text must contain a match for"
    )


FieldConstraints = Union[
    RatingConstraints,
    MultiSelectConstraints,
    SingleSelectConstraints,
    DurationConstraints,
    TextConstraints,
]

CONSTRAINT_MODELS: Dict[FieldType, type] = {
    FieldType.RATING: RatingConstraints,
    FieldType.MULTI_SELECT: MultiSelectConstraints,
    FieldType.SINGLE_SELECT: SingleSelectConstraints,
    FieldType.DURATION: DurationConstraints,
    FieldType.TEXT: TextConstraints,
}


# ============================================================================
# Field Values
# ============================================================================


class ValueCoercionError(ValueError):
    """Raised when a raw value cannot be coerced into its field's variant."""


class _FieldValue(BaseModel):
    model_config = ConfigDict(frozen=True)


class RatingValue(_FieldValue):
    kind: Literal["rating"] = "rating"
    value: float


class DurationValue(_FieldValue):
    kind: Literal["duration"] = "duration"
    minutes: float


class MultiSelectValue(_FieldValue):
    kind: Literal["multi-select"] = "multi-select"
    items: Tuple[Any, ...] = ()

    @property
    def count(self) -> int:
        return len(self.items)


class SingleSelectValue(_FieldValue):
    kind: Literal["single-select"] = "single-select"
    value: str


class TextValue(_FieldValue):
    kind: Literal["text"] = "text"
    text: str


FieldValue = Union[RatingValue, DurationValue, MultiSelectValue, SingleSelectValue, TextValue]


def _to_number(raw: Any) -> float:
    if isinstance(raw, str):
        raw = raw.strip()
    try:
        number = float(raw)
    except (TypeError, ValueError) as e:
        raise ValueCoercionError(f"Not a number: {raw!r}") from e
    if math.isnan(number):
        raise ValueCoercionError(f"Not a number: {raw!r}")
    return number


def coerce_value(field_type: FieldType, raw: Any) -> FieldValue:
    """
    Build the value variant for a field type from a raw form value.

    The page layer is expected to send numbers for ratings and durations,
    lists for multi-selects and strings otherwise; this re-coerces defensively.

    Args:
        field_type: Registered type of the field
        raw: Raw value as supplied by the form

    Returns:
        The matching FieldValue variant

    Raises:
        ValueCoercionError: If a rating or duration is not numeric
    """
    if field_type == FieldType.RATING:
        return RatingValue(value=_to_number(raw))
    if field_type == FieldType.DURATION:
        return DurationValue(minutes=_to_number(raw))
    if field_type == FieldType.MULTI_SELECT:
        if isinstance(raw, (list, tuple, set, frozenset)):
            return MultiSelectValue(items=tuple(raw))
        return MultiSelectValue()
    if field_type == FieldType.SINGLE_SELECT:
        return SingleSelectValue(value=str(raw))
    return TextValue(text=str(raw))


# ============================================================================
# Step Declarations
# ============================================================================


class ProgressiveGroup(BaseModel):
    """Related optional fields that should be filled in together."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Group name (e.g., 'wellness')")
    fields: Tuple[str, ...] = Field(..., min_length=1, description="Member field keys")
    suggestion_template: str = Field(
        "Please also rate your {missing} for better recommendations",
        description="Suggestion shown on partial completion; {missing} lists unfilled members",
    )


class StepLimit(BaseModel):
    """Step-local ceiling, tighter than or in addition to field constraints."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Field key the limit applies to")
    max_items: Optional[int] = Field(None, ge=0, description="Most list items allowed")
    max_length: Optional[int] = Field(None, ge=0, description="Longest text allowed")
    min_length: Optional[int] = Field(
        None, ge=0, description="Shortest non-blank text allowed (measured trimmed)"
    )
    message: str = Field(..., description="Error message when the limit is exceeded")

    @model_validator(mode="after")
    def validate_has_rule(self):
        """A limit must carry at least one rule."""
        if self.max_items is None and self.max_length is None and self.min_length is None:
            raise ValueError(f"Step limit for {self.field} defines no rule")
        return self


class StepConfig(BaseModel):
    """Declaration of one wizard step. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Human-readable step title")
    required_fields: Tuple[str, ...] = Field(default=())
    optional_fields: Tuple[str, ...] = Field(default=())
    progressive_groups: Tuple[ProgressiveGroup, ...] = Field(default=())
    gating_fields: Tuple[str, ...] = Field(
        default=(), description="Fields whose completeness decides whether the user may proceed"
    )
    limits: Tuple[StepLimit, ...] = Field(default=())

    @property
    def declared_fields(self) -> List[str]:
        """Required then optional fields, without duplicates, in declared order."""
        return list(dict.fromkeys(self.required_fields + self.optional_fields))

    @model_validator(mode="after")
    def validate_group_members(self):
        """Progressive group members must be declared on the step."""
        declared = set(self.required_fields) | set(self.optional_fields)
        for group in self.progressive_groups:
            unknown = [f for f in group.fields if f not in declared]
            if unknown:
                raise ValueError(
                    f"Progressive group '{group.name}' references undeclared fields: {unknown}"
                )
        return self


# ============================================================================
# Results
# ============================================================================


class ValidationOutcome(BaseModel):
    """Result of validating a single field value."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationOutcome":
        return cls(is_valid=False, error=error)


class ValidationResult(BaseModel):
    """
    Result of validating a wizard step.

    Only errors affect is_valid. Warnings and suggestions are guidance and
    never block progression.
    """

    is_valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)
    warnings: Dict[str, str] = Field(default_factory=dict)
    suggestions: List[str] = Field(default_factory=list)

    @field_validator("suggestions")
    @classmethod
    def drop_blank_suggestions(cls, v: List[str]) -> List[str]:
        return [s for s in v if s]


class StepSelectionState(BaseModel):
    """Selection counts for a step's gating fields. Derived, never persisted."""

    total: int = Field(..., ge=0, description="Gating fields currently filled")
    required: int = Field(..., ge=0, description="Gating fields declared for the step")
    percentage: int = Field(..., ge=0, le=100)
    is_empty: bool
    is_partial: bool
    is_complete: bool
    can_proceed: bool
    has_errors: bool = False
    error_count: int = 0
    details: Dict[str, bool] = Field(default_factory=dict)


class ButtonState(BaseModel):
    """Enablement and label for the wizard's primary action button."""

    state: ButtonPhase
    disabled: bool
    text: str
    message: Optional[str] = None
    progress: Optional[int] = Field(None, ge=0, le=100)


class ProgressIndicator(BaseModel):
    """Step progress bar state."""

    is_empty: bool
    is_partial: bool
    is_complete: bool
    text: str
    percentage: int = Field(..., ge=0, le=100)


class SelectionSummaryItem(BaseModel):
    """One formatted selection badge."""

    field: str
    value: str
