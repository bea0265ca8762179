from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_data_path() -> str:
    """Default location of the JSON storage file (next to the project root)."""
    return str((PROJECT_ROOT / "workout_calendar.json").resolve())


def get_database_url() -> str:
    """Default SQLite URL, using an absolute path to avoid path resolution issues."""
    db_path = (PROJECT_ROOT / "workout_calendar.db").resolve()
    return f"sqlite:///{db_path}"


class Settings(BaseSettings):
    storage_backend: Literal["memory", "file", "sql", "redis"] = Field(
        default="file",
        validation_alias="STORAGE_BACKEND",
        description="Key-value backend holding the schedule snapshot",
    )
    data_path: str = Field(default_factory=get_data_path, validation_alias="DATA_PATH")
    database_url: str = Field(default_factory=get_database_url, validation_alias="DATABASE_URL")
    redis_url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    redis_key_prefix: str = Field(default="workout_calendar:", validation_alias="REDIS_KEY_PREFIX")
    rest_exercise_id: str = Field(
        default="rest",
        validation_alias="REST_EXERCISE_ID",
        description="Exercise substituted when a day's selection becomes empty",
    )
    tint_alpha: float = Field(
        default=0.18,
        validation_alias="TINT_ALPHA",
        description="Opacity used when tinting past days",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_json: bool = Field(default=False, validation_alias="LOG_JSON", description="Write the log file as JSON lines")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("tint_alpha")
    @classmethod
    def validate_tint_alpha(cls, value: float) -> float:
        """Tint opacity must be within 0.0-1.0."""
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"TINT_ALPHA must be between 0.0 and 1.0, got {value}")
        return value

    @field_validator("rest_exercise_id")
    @classmethod
    def validate_rest_exercise_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("REST_EXERCISE_ID must not be empty")
        return value.strip()

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
