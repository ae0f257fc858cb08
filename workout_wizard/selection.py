"""
Selection counting and button/progress state for wizard steps.

Only a step's gating fields are counted here. Completion scoring over the
full field list lives in workout_wizard.completion.
"""

from typing import Any, Mapping, Optional

from workout_wizard.completion import round_half_up
from workout_wizard.config import DEFAULT_CONFIG, EngineConfig
from workout_wizard.logger import logger
from workout_wizard.schemas import (
    ButtonPhase,
    ButtonState,
    ProgressIndicator,
    StepSelectionState,
    is_empty_value,
)
from workout_wizard.validator import StepValidator

READY_MESSAGE = "Ready to proceed"
EMPTY_MESSAGE = "Complete current step to continue"


def _error_text(count: int) -> str:
    return f"{count} validation error{'s' if count != 1 else ''} found"


class SelectionCounter:
    """
    Derives selection state for a step from current values.

    Recomputed from scratch on every call; nothing is cached.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        step_validator: Optional[StepValidator] = None,
    ):
        self.config = config
        self.step_validator = step_validator or StepValidator(config)

    def step_selection_state(
        self, step_name: str, values: Mapping[str, Any]
    ) -> StepSelectionState:
        """
        Count filled gating fields and decide whether the user may proceed.

        Args:
            step_name: Step to inspect
            values: Raw field values keyed by field key

        Returns:
            StepSelectionState; can_proceed requires every gating field filled
            and no hard validation errors anywhere in the step. An undeclared
            step is empty and never lets the user proceed
        """
        step = self.config.step(step_name)
        if step is None:
            logger.warning(f"Selection state requested for undeclared step: {step_name}")
            return StepSelectionState(
                total=0,
                required=0,
                percentage=0,
                is_empty=True,
                is_partial=False,
                is_complete=False,
                can_proceed=False,
            )

        gating = step.gating_fields

        details = {f: not is_empty_value(values.get(f)) for f in gating}
        total = sum(details.values())
        required = len(gating)

        errors = self.step_validator.validate_step(step_name, values).errors
        error_count = len(errors)

        all_filled = total == required
        is_complete = all_filled and error_count == 0
        percentage = 100 if required == 0 else round_half_up(100 * total / required)

        return StepSelectionState(
            total=total,
            required=required,
            percentage=percentage,
            is_empty=required > 0 and total == 0,
            is_partial=0 < total < required,
            is_complete=is_complete,
            can_proceed=is_complete,
            has_errors=error_count > 0,
            error_count=error_count,
            details=details,
        )

    def button_state(
        self,
        step_name: str,
        values: Mapping[str, Any],
        errors: Optional[Mapping[str, str]] = None,
        is_generating: bool = False,
        final_step: bool = False,
    ) -> ButtonState:
        """
        Primary button state for a step.

        Precedence: generating, then validation errors, then selection
        progress.

        Args:
            step_name: Active step
            values: Raw field values keyed by field key
            errors: Errors already shown by the page; the step's own
                validation errors are used if None
            is_generating: Whether a workout is being generated
            final_step: Whether proceeding generates the workout

        Returns:
            ButtonState
        """
        if is_generating:
            return ButtonState(state=ButtonPhase.LOADING, disabled=True, text="Generating...")

        selections = self.step_selection_state(step_name, values)
        error_count = len(errors) if errors is not None else selections.error_count

        if error_count:
            return ButtonState(
                state=ButtonPhase.ERROR,
                disabled=True,
                text="Fix validation errors",
                message=_error_text(error_count),
            )

        if selections.is_empty:
            return ButtonState(
                state=ButtonPhase.DISABLED,
                disabled=True,
                text="Complete current step",
                message=EMPTY_MESSAGE,
                progress=0,
            )

        if selections.is_partial:
            return ButtonState(
                state=ButtonPhase.PARTIAL,
                disabled=False,
                text="Continue",
                message=f"{selections.total} of {selections.required} selections made",
                progress=selections.percentage,
            )

        return ButtonState(
            state=ButtonPhase.ACTIVE,
            disabled=False,
            text="Generate Workout" if final_step else "Next",
            message=READY_MESSAGE,
            progress=100,
        )

    def progress_indicator(
        self,
        step_name: str,
        values: Mapping[str, Any],
        errors: Optional[Mapping[str, str]] = None,
    ) -> ProgressIndicator:
        """Progress bar state for a step."""
        selections = self.step_selection_state(step_name, values)
        error_count = len(errors) if errors is not None else selections.error_count

        if error_count:
            return ProgressIndicator(
                is_empty=False,
                is_partial=False,
                is_complete=False,
                text=_error_text(error_count),
                percentage=0,
            )

        if selections.is_empty:
            return ProgressIndicator(
                is_empty=True, is_partial=False, is_complete=False, text=EMPTY_MESSAGE, percentage=0
            )

        if selections.is_partial:
            return ProgressIndicator(
                is_empty=False,
                is_partial=True,
                is_complete=False,
                text=f"{selections.total} of {selections.required} selections made",
                percentage=selections.percentage,
            )

        return ProgressIndicator(
            is_empty=False, is_partial=False, is_complete=True, text=READY_MESSAGE, percentage=100
        )
