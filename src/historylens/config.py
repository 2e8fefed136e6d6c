"""
Configuration management for HistoryLens.

Loads the bounding policy and logging settings from environment variables
with sensible defaults.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file if it exists
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Bounding Policy
    max_query_length: int = Field(
        default=1000, description="Longest accepted query string (characters)", ge=1
    )
    max_entries: int = Field(
        default=2000,
        description="Valid records kept (most recent first) before any ranking",
        ge=1,
    )
    max_scoring_entries: int = Field(
        default=10000,
        description="Keyword-matched records kept (most recent first) before scoring",
        ge=1,
    )
    max_field_length: int = Field(
        default=10000,
        description="URL/title length at which a record is considered implausible",
        ge=1,
    )

    # Output Configuration
    top_domains: int = Field(
        default=20, description="Number of domains reported by domain analysis", ge=1
    )
    default_max_results: int = Field(
        default=50, description="Result count used when the caller gives none", ge=0
    )
    default_max_chars: int = Field(
        default=20000, description="Character budget for formatted LLM context", ge=0
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[str] = Field(
        default=None, description="Path to log file (None = no file logging)"
    )

    class Config:
        env_prefix = "HISTORYLENS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in .env


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        Settings: The application settings.

    Raises:
        ValueError: If an environment variable holds an invalid value.
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except Exception as e:
            raise ValueError(
                f"Failed to load settings. Check the HISTORYLENS_* environment variables. Error: {e}"
            ) from e
    return _settings


def reload_settings() -> Settings:
    """
    Reload settings from environment variables.

    Useful for testing or when environment variables change.

    Returns:
        Settings: The reloaded settings.
    """
    global _settings
    _settings = None
    return get_settings()
