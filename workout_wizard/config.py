"""
Static configuration for the form engine.

Holds the field type registry, the type-level default constraints, the
per-field overrides and the wizard's step declarations. Everything is wrapped
in a frozen EngineConfig built once at import time and passed by reference to
the validator, calculator and selection components.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from workout_wizard import keys as k
from workout_wizard import messages as msg
from workout_wizard.schemas import (
    CONSTRAINT_MODELS,
    DurationConstraints,
    FieldConstraints,
    FieldType,
    MultiSelectConstraints,
    ProgressiveGroup,
    RatingConstraints,
    SingleSelectConstraints,
    StepConfig,
    StepLimit,
    TextConstraints,
)


# ============================================================================
# Static tables
# ============================================================================

FIELD_TYPE_MAP: Dict[str, FieldType] = {
    k.ENERGY: FieldType.RATING,
    k.SLEEP: FieldType.RATING,
    k.STRESS: FieldType.RATING,
    k.DURATION: FieldType.DURATION,
    k.FOCUS: FieldType.SINGLE_SELECT,
    k.AREAS: FieldType.MULTI_SELECT,
    k.SORENESS: FieldType.MULTI_SELECT,
    k.EQUIPMENT: FieldType.MULTI_SELECT,
    k.INCLUDE: FieldType.TEXT,
    k.EXCLUDE: FieldType.TEXT,
    k.PROMPT: FieldType.TEXT,
}

DEFAULT_FIELD_CONSTRAINTS: Dict[FieldType, FieldConstraints] = {
    FieldType.RATING: RatingConstraints(min=1, max=6),
    FieldType.MULTI_SELECT: MultiSelectConstraints(min_selections=0, max_selections=5),
    FieldType.SINGLE_SELECT: SingleSelectConstraints(),
    # One bound for every duration context (quick and detailed flows)
    FieldType.DURATION: DurationConstraints(min=5, max=120),
    FieldType.TEXT: TextConstraints(min_length=0, max_length=500),
}

FIELD_SPECIFIC_CONSTRAINTS: Dict[str, Dict[str, Any]] = {
    k.ENERGY: {"min": 1, "max": 6},
    k.SLEEP: {"min": 1, "max": 6},
    k.STRESS: {"min": 1, "max": 6},
    k.AREAS: {"max_selections": 5},
    k.SORENESS: {"max_selections": 5},
    k.EQUIPMENT: {"max_selections": 10},
    k.PROMPT: {"max_length": 500},
}

WELLNESS_GROUP = ProgressiveGroup(
    name="wellness",
    fields=(k.ENERGY, k.SLEEP, k.STRESS),
)

STEP_CONFIGS: Dict[str, StepConfig] = {
    k.STEP_FOCUS_ENERGY: StepConfig(
        label="Focus & Energy",
        optional_fields=(k.FOCUS, k.ENERGY),
        gating_fields=(k.FOCUS, k.ENERGY),
    ),
    k.STEP_DURATION_EQUIPMENT: StepConfig(
        label="Duration & Equipment",
        optional_fields=(k.DURATION, k.EQUIPMENT),
        gating_fields=(k.DURATION, k.EQUIPMENT),
    ),
    k.STEP_WORKOUT_STRUCTURE: StepConfig(
        label="Workout Structure",
        optional_fields=(k.FOCUS, k.DURATION, k.AREAS),
        gating_fields=(k.FOCUS, k.DURATION),
        limits=(StepLimit(field=k.AREAS, max_items=5, message=msg.AREAS_MAX),),
    ),
    k.STEP_CURRENT_STATE: StepConfig(
        label="Current State",
        optional_fields=(k.ENERGY, k.SLEEP, k.STRESS, k.SORENESS),
        progressive_groups=(WELLNESS_GROUP,),
        gating_fields=(k.ENERGY,),
        limits=(StepLimit(field=k.SORENESS, max_items=5, message=msg.SORENESS_MAX),),
    ),
    k.STEP_EQUIPMENT_PREFERENCES: StepConfig(
        label="Equipment & Preferences",
        optional_fields=(k.EQUIPMENT, k.INCLUDE, k.EXCLUDE),
        gating_fields=(k.EQUIPMENT,),
        limits=(
            StepLimit(field=k.EQUIPMENT, max_items=10, message=msg.EQUIPMENT_MAX),
            StepLimit(field=k.INCLUDE, max_length=500, message=msg.INCLUDE_MAX_LENGTH),
            StepLimit(field=k.EXCLUDE, max_length=500, message=msg.EXCLUDE_MAX_LENGTH),
        ),
    ),
    k.STEP_ADDITIONAL_CONTEXT: StepConfig(
        label="Additional Context",
        optional_fields=(k.PROMPT,),
        limits=(
            StepLimit(field=k.PROMPT, max_length=500, message=msg.PROMPT_MAX_LENGTH),
            StepLimit(field=k.PROMPT, min_length=10, message=msg.PROMPT_MIN_LENGTH),
        ),
    ),
}

OVERALL_STEPS: Tuple[str, ...] = (
    k.STEP_WORKOUT_STRUCTURE,
    k.STEP_CURRENT_STATE,
    k.STEP_EQUIPMENT_PREFERENCES,
)


# ============================================================================
# Engine configuration
# ============================================================================


class EngineConfig(BaseModel):
    """
    Immutable configuration shared by all engine components.

    Construction validates the tables against each other, so a bad override
    or step declaration fails at process start rather than on a user's
    keystroke.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    field_types: Mapping[str, FieldType] = Field(default_factory=lambda: dict(FIELD_TYPE_MAP))
    default_constraints: Mapping[FieldType, Any] = Field(
        default_factory=lambda: dict(DEFAULT_FIELD_CONSTRAINTS)
    )
    field_overrides: Mapping[str, Mapping[str, Any]] = Field(
        default_factory=lambda: {key: dict(v) for key, v in FIELD_SPECIFIC_CONSTRAINTS.items()}
    )
    steps: Mapping[str, StepConfig] = Field(default_factory=lambda: dict(STEP_CONFIGS))
    overall_steps: Tuple[str, ...] = OVERALL_STEPS

    @field_validator("field_types", "default_constraints", "steps")
    @classmethod
    def freeze_table(cls, v: Mapping[Any, Any]) -> Mapping[Any, Any]:
        """Store tables as read-only views over private copies."""
        return MappingProxyType(dict(v))

    @field_validator("field_overrides")
    @classmethod
    def freeze_overrides(
        cls, v: Mapping[str, Mapping[str, Any]]
    ) -> Mapping[str, Mapping[str, Any]]:
        return MappingProxyType({key: MappingProxyType(dict(o)) for key, o in v.items()})

    @model_validator(mode="after")
    def validate_tables(self):
        """Check defaults, overrides and steps agree with each other."""
        for field_type, model in CONSTRAINT_MODELS.items():
            defaults = self.default_constraints.get(field_type)
            if not isinstance(defaults, model):
                raise ValueError(
                    f"Default constraints for '{field_type.value}' must be a {model.__name__}"
                )

        for key, overrides in self.field_overrides.items():
            field_type = self.field_types.get(key)
            if field_type is None:
                raise ValueError(f"Constraint override for unregistered field: {key}")
            allowed = set(CONSTRAINT_MODELS[field_type].model_fields)
            unknown = set(overrides) - allowed
            if unknown:
                raise ValueError(
                    f"Override for {key} names keys not in '{field_type.value}' "
                    f"constraints: {sorted(unknown)}"
                )
            # Surface bad override values now
            self.default_constraints[field_type].model_validate(
                {**self.default_constraints[field_type].model_dump(), **overrides}
            )

        missing = [s for s in self.overall_steps if s not in self.steps]
        if missing:
            raise ValueError(f"Overall steps not declared: {missing}")

        return self

    def type_of(self, field_key: str) -> Optional[FieldType]:
        """Registered type for a field, or None if unregistered."""
        return self.field_types.get(field_key)

    def constraints_of(self, field_key: str, field_type: FieldType) -> FieldConstraints:
        """
        Effective constraints: type defaults overlaid with field overrides.

        Overrides replace values of existing keys only; they never remove one.
        """
        defaults = self.default_constraints[field_type]
        overrides: Mapping[str, Any] = self.field_overrides.get(field_key, {})
        if not overrides:
            return defaults
        return type(defaults).model_validate({**defaults.model_dump(), **overrides})

    def step(self, step_name: str) -> Optional[StepConfig]:
        return self.steps.get(step_name)


DEFAULT_CONFIG = EngineConfig()


def type_of(field_key: str) -> Optional[FieldType]:
    """Registered type for a field in the default configuration."""
    return DEFAULT_CONFIG.type_of(field_key)


def constraints_of(field_key: str, field_type: FieldType) -> FieldConstraints:
    """Effective constraints for a field in the default configuration."""
    return DEFAULT_CONFIG.constraints_of(field_key, field_type)
