"""
Selection value formatting for badges and summaries.

Turns raw field values into short display strings. Formatting is
independent of validity: an out-of-range value simply has no display string.
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from workout_wizard import keys as k
from workout_wizard.completion import round_half_up
from workout_wizard.config import DEFAULT_CONFIG, EngineConfig
from workout_wizard.logger import logger
from workout_wizard.messages import pluralize
from workout_wizard.schemas import (
    FieldType,
    SelectionSummaryItem,
    ValueCoercionError,
    coerce_value,
)


# ============================================================================
# Display tables
# ============================================================================

RATING_LABELS: Dict[str, Tuple[str, ...]] = {
    k.ENERGY: ("Very Low", "Low", "Moderate", "Somewhat High", "High", "Very High"),
    k.SLEEP: ("Very Poor", "Poor", "Fair", "Good", "Very Good", "Excellent"),
    k.STRESS: ("Very Low", "Low", "Moderate", "High", "Very High", "Extreme"),
}

FOCUS_NAMES: Dict[str, str] = {
    "energizing_boost": "Energizing Boost",
    "improve_posture": "Improve Posture",
    "stress_reduction": "Stress Reduction",
    "quick_sweat": "Quick Sweat",
    "gentle_recovery": "Gentle Recovery",
    "core_abs": "Core & Abs",
}

EQUIPMENT_NAMES: Dict[str, str] = {
    "bodyweight": "Body Weight",
    "available_equipment": "Available Equipment",
    "full_gym": "Full Gym",
}


class MultiSelectDisplay(BaseModel):
    """How a multi-select field renders in a badge."""

    model_config = ConfigDict(frozen=True)

    unit: str
    names: Dict[str, str] = {}
    empty_label: Optional[str] = None


MULTI_SELECT_DISPLAY: Dict[str, MultiSelectDisplay] = {
    k.AREAS: MultiSelectDisplay(unit="areas"),
    # No soreness is an answer in itself
    k.SORENESS: MultiSelectDisplay(unit="areas", empty_label="None"),
    k.EQUIPMENT: MultiSelectDisplay(unit="items", names=EQUIPMENT_NAMES),
}

SINGLE_SELECT_NAMES: Dict[str, Dict[str, str]] = {
    k.FOCUS: FOCUS_NAMES,
}

TEXT_LIST_NOUNS: Dict[str, str] = {
    k.INCLUDE: "exercises",
    k.EXCLUDE: "exercises",
}


def snake_to_title(value: str) -> str:
    """'upper_body' -> 'Upper Body'."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), value.replace("_", " "))


def format_duration(minutes: int) -> str:
    """Bucket a duration: '15 min', '1 hour', '2 hours', '1h 30m'."""
    if minutes < 60:
        return f"{minutes} min"
    hours, remainder = divmod(minutes, 60)
    if remainder:
        return f"{hours}h {remainder}m"
    return f"{hours} {pluralize(hours, 'hour')}"


class SelectionFormatter:
    """
    Converts raw field values into display strings.

    Returns None whenever there is nothing meaningful to show. Never raises:
    internal failures are logged and treated as None.
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config

    def format(self, field_key: str, value: Any) -> Optional[str]:
        """
        Format a selection value for display.

        Args:
            field_key: Field the value belongs to
            value: Raw value from the form

        Returns:
            Display string, or None if there is nothing to display
        """
        field_type = self.config.type_of(field_key)
        if field_type is None:
            return None

        try:
            if field_type == FieldType.DURATION:
                return self._format_duration(value)
            if field_type == FieldType.RATING:
                return self._format_rating(field_key, value)
            if field_type == FieldType.MULTI_SELECT:
                return self._format_multi_select(field_key, value)
            if field_type == FieldType.SINGLE_SELECT:
                return self._format_single_select(field_key, value)
            return self._format_text_list(field_key, value)
        except Exception as e:
            logger.warning(f"Error formatting selection value for {field_key}: {e}")
            return None

    def selection_summary(self, values: Mapping[str, Any]) -> List[SelectionSummaryItem]:
        """
        Formatted badges for every registered field present in values.

        Args:
            values: Raw field values keyed by field key

        Returns:
            Summary items in registry order, skipping fields with no display
        """
        summary = []
        for field_key in self.config.field_types:
            if field_key not in values:
                continue
            formatted = self.format(field_key, values[field_key])
            if formatted:
                summary.append(SelectionSummaryItem(field=field_key, value=formatted))
        return summary

    def _format_duration(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        try:
            minutes = coerce_value(FieldType.DURATION, value).minutes
        except ValueCoercionError:
            return None
        rounded = round_half_up(minutes)
        if rounded <= 0:
            return None
        return format_duration(rounded)

    def _format_rating(self, field_key: str, value: Any) -> Optional[str]:
        labels = RATING_LABELS.get(field_key)
        if not labels or value is None:
            return None
        try:
            rating = coerce_value(FieldType.RATING, value).value
        except ValueCoercionError:
            return None
        scale = self.config.constraints_of(field_key, FieldType.RATING).max or len(labels)
        if not rating.is_integer() or not 1 <= rating <= min(scale, len(labels)):
            return None
        index = int(rating)
        return f"{labels[index - 1]} ({index}/{scale})"

    def _format_multi_select(self, field_key: str, value: Any) -> Optional[str]:
        display = MULTI_SELECT_DISPLAY.get(field_key)
        if display is None:
            return None

        if isinstance(value, (list, tuple)):
            items = list(value)
        elif isinstance(value, (set, frozenset)):
            items = sorted(value, key=str)
        elif isinstance(value, str) and value.strip():
            # Quick flow sends a single option id as a bare string
            items = [value]
        else:
            items = []

        if not items:
            return display.empty_label
        if len(items) == 1:
            item = str(items[0])
            return display.names.get(item) or snake_to_title(item)
        return f"{len(items)} {display.unit} selected"

    def _format_single_select(self, field_key: str, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value:
            return None
        names = SINGLE_SELECT_NAMES.get(field_key, {})
        return names.get(value) or snake_to_title(value)

    def _format_text_list(self, field_key: str, value: Any) -> Optional[str]:
        noun = TEXT_LIST_NOUNS.get(field_key)
        if noun is None or not isinstance(value, str):
            return None

        entries = [e.strip() for e in value.split(",")]
        entries = [e for e in entries if e]
        if not entries:
            return None
        if len(entries) == 1:
            return entries[0]
        return f"{len(entries)} {noun}"
