"""Runtime settings for the workout wizard engine."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workout_wizard.schemas import UnregisteredFieldPolicy


class WizardSettings(BaseSettings):
    """
    Environment-driven knobs (prefix WORKOUT_WIZARD_).

    The field tables themselves are static and live in workout_wizard.config.
    """

    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)
    unregistered_field_policy: UnregisteredFieldPolicy = Field(
        default=UnregisteredFieldPolicy.ALLOW,
        description="'allow' passes unknown fields as valid, 'reject' fails them",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WORKOUT_WIZARD_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level
