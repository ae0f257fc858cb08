"""
Tests for step selection state and button/progress derivation.

Scenario from the quick workout flow:
1. Focus chosen, energy missing -> partial, cannot proceed
2. Energy added -> complete, can proceed
3. Energy out of range -> all gating filled, but errors block proceeding
"""

import pytest

from workout_wizard import keys as k
from workout_wizard.schemas import ButtonPhase
from workout_wizard.selection import SelectionCounter


@pytest.fixture
def counter():
    return SelectionCounter()


def test_empty_gating_step(counter):
    state = counter.step_selection_state(k.STEP_FOCUS_ENERGY, {})

    assert state.is_empty is True
    assert state.is_partial is False
    assert state.is_complete is False
    assert state.can_proceed is False
    assert state.total == 0
    assert state.required == 2
    assert state.percentage == 0


def test_focus_without_energy_is_partial(counter):
    values = {k.FOCUS: "energizing_boost", k.ENERGY: None}

    state = counter.step_selection_state(k.STEP_FOCUS_ENERGY, values)

    assert state.is_partial is True
    assert state.is_complete is False
    assert state.can_proceed is False
    assert state.percentage == 50
    assert state.details == {k.FOCUS: True, k.ENERGY: False}


def test_adding_energy_completes_step(counter):
    values = {k.FOCUS: "energizing_boost", k.ENERGY: 4}

    state = counter.step_selection_state(k.STEP_FOCUS_ENERGY, values)

    assert state.is_complete is True
    assert state.can_proceed is True
    assert state.is_partial is False
    assert state.percentage == 100


def test_errors_block_proceeding(counter):
    values = {k.FOCUS: "energizing_boost", k.ENERGY: 9}

    state = counter.step_selection_state(k.STEP_FOCUS_ENERGY, values)

    assert state.total == 2
    assert state.is_complete is False
    assert state.can_proceed is False
    assert state.has_errors is True
    assert state.error_count == 1


def test_gating_subset_of_larger_step(counter):
    """Areas is scored for completion but does not gate the structure step."""
    values = {k.FOCUS: "core_abs", k.DURATION: 30}

    state = counter.step_selection_state(k.STEP_WORKOUT_STRUCTURE, values)

    assert state.required == 2
    assert state.can_proceed is True
    assert k.AREAS not in state.details


def test_error_in_non_gating_field_blocks(counter):
    values = {k.FOCUS: "core_abs", k.DURATION: 30, k.AREAS: list("abcdef")}

    state = counter.step_selection_state(k.STEP_WORKOUT_STRUCTURE, values)

    assert state.total == state.required
    assert state.can_proceed is False


def test_step_without_gating_fields(counter):
    state = counter.step_selection_state(k.STEP_ADDITIONAL_CONTEXT, {})

    assert state.is_empty is False
    assert state.percentage == 100
    assert state.can_proceed is True


def test_undeclared_step_never_proceeds(counter):
    state = counter.step_selection_state("cool-down", {k.FOCUS: "core_abs"})

    assert state.is_empty is True
    assert state.is_complete is False
    assert state.can_proceed is False
    assert state.percentage == 0
    assert state.required == 0


def test_undeclared_step_button_is_disabled(counter):
    button = counter.button_state("cool-down", {})

    assert button.state == ButtonPhase.DISABLED
    assert button.disabled is True


# Button state

def test_button_loading_takes_precedence(counter):
    button = counter.button_state(k.STEP_FOCUS_ENERGY, {}, is_generating=True)

    assert button.state == ButtonPhase.LOADING
    assert button.disabled is True


def test_button_error_state(counter):
    button = counter.button_state(k.STEP_FOCUS_ENERGY, {k.FOCUS: "x", k.ENERGY: 0})

    assert button.state == ButtonPhase.ERROR
    assert button.disabled is True
    assert button.message == "1 validation error found"


def test_button_uses_page_errors_when_given(counter):
    errors = {k.FOCUS: "Invalid selection", k.ENERGY: "Must be between 1 and 6"}

    button = counter.button_state(k.STEP_FOCUS_ENERGY, {}, errors=errors)

    assert button.state == ButtonPhase.ERROR
    assert button.message == "2 validation errors found"


def test_button_progression(counter):
    empty = counter.button_state(k.STEP_DURATION_EQUIPMENT, {})
    partial = counter.button_state(k.STEP_DURATION_EQUIPMENT, {k.DURATION: 20})
    ready = counter.button_state(
        k.STEP_DURATION_EQUIPMENT,
        {k.DURATION: 20, k.EQUIPMENT: "bodyweight"},
        final_step=True,
    )

    assert empty.state == ButtonPhase.DISABLED and empty.disabled is True
    assert partial.state == ButtonPhase.PARTIAL and partial.disabled is False
    assert partial.message == "1 of 2 selections made"
    assert partial.progress == 50
    assert ready.state == ButtonPhase.ACTIVE
    assert ready.text == "Generate Workout"
    assert ready.progress == 100


def test_progress_indicator(counter):
    partial = counter.progress_indicator(k.STEP_FOCUS_ENERGY, {k.ENERGY: 3})
    done = counter.progress_indicator(k.STEP_FOCUS_ENERGY, {k.ENERGY: 3, k.FOCUS: "quick_sweat"})
    broken = counter.progress_indicator(k.STEP_FOCUS_ENERGY, {k.ENERGY: 30})

    assert partial.is_partial is True
    assert partial.percentage == 50
    assert done.is_complete is True
    assert done.text == "Ready to proceed"
    assert broken.percentage == 0
    assert broken.text == "1 validation error found"
