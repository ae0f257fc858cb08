"""Field keys and step names for workout customization."""

PREFIX = "customization_"

FOCUS = "customization_focus"
ENERGY = "customization_energy"
DURATION = "customization_duration"
EQUIPMENT = "customization_equipment"
AREAS = "customization_areas"
SORENESS = "customization_soreness"
STRESS = "customization_stress"
SLEEP = "customization_sleep"
INCLUDE = "customization_include"
EXCLUDE = "customization_exclude"
PROMPT = "customization_prompt"

ALL_FIELDS = (
    FOCUS,
    ENERGY,
    DURATION,
    EQUIPMENT,
    AREAS,
    SORENESS,
    STRESS,
    SLEEP,
    INCLUDE,
    EXCLUDE,
    PROMPT,
)

# Quick workout flow
STEP_FOCUS_ENERGY = "focus-energy"
STEP_DURATION_EQUIPMENT = "duration-equipment"

# Detailed workout flow
STEP_WORKOUT_STRUCTURE = "workout-structure"
STEP_CURRENT_STATE = "current-state"
STEP_EQUIPMENT_PREFERENCES = "equipment-preferences"
STEP_ADDITIONAL_CONTEXT = "additional-context"
