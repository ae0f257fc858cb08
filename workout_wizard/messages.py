"""
User-facing validation messages for the workout customization wizard.

Field-specific messages take precedence over the generic ones; anything
without a specific message falls back to a general message for its kind.
"""

from typing import Dict, Iterable, Optional

from workout_wizard import keys as k


# Required field messages
FIELD_REQUIRED = "This field is required"
FOCUS_REQUIRED = "Please select a workout focus"
ENERGY_REQUIRED = "Please rate your current energy level"
DURATION_REQUIRED = "Please select a workout duration"
EQUIPMENT_REQUIRED = "Please select available equipment"
SLEEP_REQUIRED = "Please rate your sleep quality"
STRESS_REQUIRED = "Please indicate your current stress level"

# Progressive guidance
FIELD_SUGGESTED = "Completing this field improves your recommendations"

# Step limit messages
AREAS_MAX = "Select up to 5 focus areas"
SORENESS_MAX = "Select up to 5 soreness areas"
EQUIPMENT_MAX = "Select up to 10 equipment items"
INCLUDE_MAX_LENGTH = "Exercise list is too long (max 500 characters)"
EXCLUDE_MAX_LENGTH = "Exercise list is too long (max 500 characters)"
PROMPT_MAX_LENGTH = "Additional context is too long (max 500 characters)"
PROMPT_MIN_LENGTH = "Please add a bit more detail (at least 10 characters)"

# General messages
INVALID_SELECTION = "Invalid selection"
INVALID_NUMBER = "Must be a valid number"
INVALID_FORMAT = "Invalid format"
UNKNOWN_FIELD = "Unknown field"
UNEXPECTED_ERROR = "An unexpected error occurred. Please try again."


FIELD_MESSAGES: Dict[str, Dict[str, str]] = {
    k.FOCUS: {"required": FOCUS_REQUIRED},
    k.ENERGY: {
        "required": ENERGY_REQUIRED,
        "suggested": ENERGY_REQUIRED,
    },
    k.DURATION: {"required": DURATION_REQUIRED},
    k.EQUIPMENT: {"required": EQUIPMENT_REQUIRED},
    k.SLEEP: {
        "required": SLEEP_REQUIRED,
        "suggested": SLEEP_REQUIRED,
    },
    k.STRESS: {
        "required": STRESS_REQUIRED,
        "suggested": STRESS_REQUIRED,
    },
}

_FALLBACKS = {
    "required": FIELD_REQUIRED,
    "suggested": FIELD_SUGGESTED,
}


def get_validation_message(field_key: str, kind: str) -> str:
    """
    Get the message for a field and error kind.

    Args:
        field_key: Field the message is for
        kind: Message kind ("required" or "suggested")

    Returns:
        The most specific message available
    """
    specific = FIELD_MESSAGES.get(field_key, {}).get(kind)
    if specific:
        return specific

    return _FALLBACKS.get(kind, UNEXPECTED_ERROR)


def short_field_name(field_key: str) -> str:
    """'customization_energy' -> 'energy'."""
    return field_key.replace(k.PREFIX, "", 1).replace("_", " ")


def format_field_name(field_key: str) -> str:
    """'customization_energy' -> 'Energy'."""
    return " ".join(word[:1].upper() + word[1:] for word in short_field_name(field_key).split(" "))


def join_names(names: Iterable[str]) -> str:
    """Join names into one phrase: 'a', 'a and b', 'a, b and c'."""
    names = list(names)
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} and {names[-1]}"


def pluralize(count: int, noun: str, plural: Optional[str] = None) -> str:
    """Return noun or its plural for count (plural defaults to noun + 's')."""
    if count == 1:
        return noun
    return plural if plural is not None else f"{noun}s"
