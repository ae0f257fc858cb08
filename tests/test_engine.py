"""
End-to-end tests for the engine's public entry points.
"""

import pytest
from loguru import logger

from workout_wizard import engine
from workout_wizard import keys as k
from workout_wizard.engine import WorkoutFormEngine
from workout_wizard.logger import setup_logger
from workout_wizard.schemas import UnregisteredFieldPolicy
from workout_wizard.settings import WizardSettings


@pytest.fixture
def form_engine():
    return WorkoutFormEngine(settings=WizardSettings(_env_file=None))


def test_module_level_contracts():
    assert engine.validate(k.ENERGY, 4).is_valid is True
    assert engine.validate_step(k.STEP_CURRENT_STATE, {k.ENERGY: 4}).is_valid is True
    assert engine.step_completion(k.STEP_CURRENT_STATE, {k.ENERGY: 4}) == 25
    assert engine.overall_completion({}) == 0
    assert engine.format_selection(k.DURATION, 90) == "1h 30m"
    assert engine.step_selection_state(k.STEP_FOCUS_ENERGY, {}).is_empty is True


def test_default_engine_is_reused():
    assert engine.get_engine() is engine.get_engine()


def test_quick_flow_scenario(form_engine):
    values = {k.FOCUS: "energizing_boost"}

    before = form_engine.step_selection_state(k.STEP_FOCUS_ENERGY, values)
    assert before.is_partial is True
    assert before.can_proceed is False
    assert form_engine.format(k.FOCUS, values[k.FOCUS]) == "Energizing Boost"

    values[k.ENERGY] = 4
    after = form_engine.step_selection_state(k.STEP_FOCUS_ENERGY, values)
    assert after.is_complete is True
    assert after.can_proceed is True
    assert form_engine.format(k.ENERGY, 4) == "Somewhat High (4/6)"


def test_detailed_flow_scenario(form_engine):
    values = {
        k.FOCUS: "gentle_recovery",
        k.DURATION: 75,
        k.AREAS: ["lower_body"],
        k.SLEEP: 2,
        k.EQUIPMENT: ["foam_roller", "mat"],
        k.INCLUDE: "pigeon pose, cat cow",
    }

    result = form_engine.validate_all(values)

    assert result.is_valid is True
    assert set(result.warnings) == {k.ENERGY, k.STRESS}
    assert result.suggestions == [
        "Please also rate your energy and stress for better recommendations"
    ]
    assert form_engine.step_completion(k.STEP_WORKOUT_STRUCTURE, values) == 100
    assert form_engine.step_completion(k.STEP_CURRENT_STATE, values) == 25
    assert form_engine.step_completion(k.STEP_EQUIPMENT_PREFERENCES, values) == 67
    # (100 + 25 + 67) / 3 = 64
    assert form_engine.overall_completion(values) == 64

    summary = {item.field: item.value for item in form_engine.selection_summary(values)}
    assert summary[k.DURATION] == "1h 15m"
    assert summary[k.SLEEP] == "Poor (2/6)"
    assert summary[k.EQUIPMENT] == "2 items selected"
    assert summary[k.INCLUDE] == "2 exercises"


def test_validate_is_idempotent(form_engine):
    first = form_engine.validate(k.AREAS, list("abcdef"))
    second = form_engine.validate(k.AREAS, list("abcdef"))

    assert first == second
    assert first.is_valid is False


def test_engine_does_not_mutate_values(form_engine):
    values = {k.AREAS: ["core"], k.ENERGY: "4"}
    snapshot = {key: (list(v) if isinstance(v, list) else v) for key, v in values.items()}

    form_engine.validate_step(k.STEP_CURRENT_STATE, values)
    form_engine.step_selection_state(k.STEP_FOCUS_ENERGY, values)
    form_engine.selection_summary(values)

    assert values == snapshot


def test_reject_policy_from_settings():
    settings = WizardSettings(
        _env_file=None, unregistered_field_policy=UnregisteredFieldPolicy.REJECT
    )
    strict_engine = WorkoutFormEngine(settings=settings)

    assert strict_engine.validate("customization_mood", "happy").is_valid is False
    assert strict_engine.validate(k.ENERGY, 3).is_valid is True


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("WORKOUT_WIZARD_UNREGISTERED_FIELD_POLICY", "reject")
    monkeypatch.setenv("WORKOUT_WIZARD_LOG_LEVEL", "debug")

    settings = WizardSettings(_env_file=None)

    assert settings.unregistered_field_policy == UnregisteredFieldPolicy.REJECT
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_log_level():
    with pytest.raises(ValueError):
        WizardSettings(_env_file=None, log_level="chatty")


def test_engine_logging_is_silent_until_configured(form_engine):
    messages = []
    sink_id = logger.add(messages.append, level="DEBUG")
    try:
        form_engine.validate("customization_mood", "happy")
        form_engine.step_completion("cool-down", {})
    finally:
        logger.remove(sink_id)

    assert messages == []


def test_setup_logger_enables_engine_logging(form_engine, tmp_path):
    log_file = tmp_path / "logs" / "wizard.log"
    try:
        setup_logger(level="WARNING", log_file=str(log_file))
        form_engine.step_completion("cool-down", {})
    finally:
        logger.remove()
        logger.disable("workout_wizard")

    assert "undeclared step: cool-down" in log_file.read_text()
