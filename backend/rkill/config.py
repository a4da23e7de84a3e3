"""Application configuration management."""
import signal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rkill.utils.helpers import normalize_signal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "rkill"
    LOG_LEVEL: str = "WARNING"

    # Termination
    KILL_SIGNAL: str = "SIGKILL" if hasattr(signal, "SIGKILL") else "SIGTERM"  # Windows has no SIGKILL
    SKIP_SELF: bool = True  # Never match the running rkill process by name

    model_config = SettingsConfigDict(
        env_prefix="RKILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    @field_validator("KILL_SIGNAL")
    @classmethod
    def validate_kill_signal(cls, value: str) -> str:
        """Accept "KILL", "SIGTERM" or "15"."""
        return normalize_signal(value)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


settings = Settings()
