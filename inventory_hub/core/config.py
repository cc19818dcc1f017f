from functools import lru_cache
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    PROJECT_NAME: str = "Inventory Hub"
    DEBUG: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # Partner API timeout settings
    DEFAULT_TIMEOUT: float = 10.0  # seconds
    MAX_RETRIES: int = 2
    RETRY_BACKOFF_FACTOR: float = 0.3

    # Transfer request validation
    STRICT_RULE_VALIDATION: bool = True
    STRICT_REGISTRATION: bool = True

    # Seed the in-memory internal store with the demo rows
    SEED_INTERNAL_INVENTORY: bool = True

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level and reject unknown names."""
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


def load_env_file(env_file: str = ".env") -> bool:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".

    Returns:
        bool: True if the file existed and was loaded
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        return load_dotenv(env_path)
    return False


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    load_env_file()
    return Settings()
