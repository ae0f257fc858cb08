"""
Completion percentage calculation.

Step completion is the share of a step's declared fields holding a value.
Overall completion weights every scored step equally, regardless of how
many fields each declares.
"""

import math
from typing import Any, List, Mapping

from workout_wizard.config import DEFAULT_CONFIG, EngineConfig
from workout_wizard.logger import logger
from workout_wizard.schemas import is_empty_value


def round_half_up(number: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(number + 0.5))


class CompletionCalculator:
    """Computes per-step and overall completion percentages (0-100)."""

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config

    def step_completion(self, step_name: str, values: Mapping[str, Any]) -> int:
        """
        Percentage of a step's declared fields that are filled.

        Args:
            step_name: Step to score
            values: Raw field values keyed by field key

        Returns:
            Integer percentage; 100 for a step declaring no fields,
            0 for an undeclared step
        """
        step = self.config.step(step_name)
        if step is None:
            logger.warning(f"Completion requested for undeclared step: {step_name}")
            return 0

        fields = step.declared_fields
        if not fields:
            return 100

        filled = sum(1 for f in fields if not is_empty_value(values.get(f)))
        return round_half_up(100 * filled / len(fields))

    def overall_completion(self, values: Mapping[str, Any]) -> int:
        """
        Mean of the step percentages over the scored steps.

        Args:
            values: Raw field values keyed by field key

        Returns:
            Integer percentage
        """
        steps = self.config.overall_steps
        if not steps:
            return 100

        percentages = [self.step_completion(s, values) for s in steps]
        return round_half_up(sum(percentages) / len(percentages))

    def missing_fields(self, step_name: str, values: Mapping[str, Any]) -> List[str]:
        """Declared fields of a step that are still empty, in declared order."""
        step = self.config.step(step_name)
        if step is None:
            return []
        return [f for f in step.declared_fields if is_empty_value(values.get(f))]
