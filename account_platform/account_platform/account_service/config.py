"""
Configuration management for the account service
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Account service configuration loaded from environment variables"""

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_TIMEOUT_SECONDS: float = 10.0

    # Token Configuration
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    # Unset means issued tokens carry no exp claim
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None

    # Password hashing work factor (pbkdf2_sha256 rounds)
    PASSWORD_HASH_ROUNDS: int = 29000

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("JWT_SECRET", "DATABASE_URL")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("ACCESS_TOKEN_EXPIRE_MINUTES")
    @classmethod
    def _positive_expiry(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("must be a positive number of minutes")
        return value


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.

    Raises:
        pydantic.ValidationError: if JWT_SECRET or DATABASE_URL is missing,
        which aborts startup.
    """
    return Settings()
