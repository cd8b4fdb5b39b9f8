"""
Configuration management for the timesheet engine.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timesheet_engine.calculators.deduction_calculator import DeductionRules
from timesheet_engine.calculators.duration_calculator import DurationPolicy


class TimesheetSettings(BaseSettings):
    """Configuration settings for the timesheet engine."""

    # Summarization API Configuration
    summary_api_key: Optional[str] = Field(default=None, alias="SUMMARY_API_KEY")
    summary_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="SUMMARY_API_BASE_URL",
    )
    summary_model: str = Field(default="gemini-2.0-flash", alias="SUMMARY_MODEL")
    summary_timeout: float = Field(default=30.0, alias="SUMMARY_TIMEOUT")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Retry Configuration
    max_retries: int = Field(default=3, alias="MAX_RETRIES")
    retry_delay: float = Field(default=1.0, alias="RETRY_DELAY")

    # Timesheet Rules
    duration_policy: DurationPolicy = Field(
        default=DurationPolicy.SEGMENT, alias="DURATION_POLICY"
    )
    max_jobs_per_day: int = Field(default=12, ge=1, alias="MAX_JOBS_PER_DAY")
    default_jobs_per_day: int = Field(default=3, ge=1, alias="DEFAULT_JOBS_PER_DAY")
    travel_deduction_threshold_hours: float = Field(
        default=6.0, ge=0, alias="TRAVEL_DEDUCTION_THRESHOLD_HOURS"
    )
    travel_deduction_minutes: int = Field(
        default=60, ge=0, alias="TRAVEL_DEDUCTION_MINUTES"
    )
    lunch_deduction_threshold_hours: float = Field(
        default=4.0, ge=0, alias="LUNCH_DEDUCTION_THRESHOLD_HOURS"
    )
    lunch_deduction_minutes: int = Field(
        default=30, ge=0, alias="LUNCH_DEDUCTION_MINUTES"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("duration_policy", mode="before")
    @classmethod
    def normalize_duration_policy(cls, v):
        """Accept policy names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("summary_api_key")
    @classmethod
    def empty_key_is_unset(cls, v):
        """Treat a blank API key as not configured."""
        if v is not None and not v.strip():
            return None
        return v

    def get_deduction_rules(self) -> DeductionRules:
        """Build the deduction rules used for net hours."""
        return DeductionRules(
            travel_threshold_hours=self.travel_deduction_threshold_hours,
            travel_deduction_minutes=self.travel_deduction_minutes,
            lunch_threshold_hours=self.lunch_deduction_threshold_hours,
            lunch_deduction_minutes=self.lunch_deduction_minutes,
        )

    def get_summary_endpoint(self) -> str:
        """Get the generateContent URL for the configured model (without key)."""
        base = self.summary_api_base_url.rstrip("/")
        return f"{base}/models/{self.summary_model}:generateContent"


def load_config(env_file: Optional[str] = None) -> TimesheetSettings:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return TimesheetSettings()


# Global configuration instance
_config: Optional[TimesheetSettings] = None


def get_config() -> TimesheetSettings:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> TimesheetSettings:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
