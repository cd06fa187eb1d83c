from datetime import datetime
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Premia Voting API"
    PROJECT_VERSION: str = "0.1.0"
    PROJECT_DESCRIPTION: str = "API for nomination voting with scheduled results"
    ENV: str = Field(default="development",
                     description="environment of the application like development, production, etc.")
    API_V1_PREFIX: str = "/api/v1"
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./premia.db",
                              description="async Database URL")
    DB_ECHO: bool = Field(default=False, description="echo SQL statements")

    SECRET_KEY: str = Field(default="change-me-in-production",
                            description="key used to sign access tokens")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    RESULTS_REVEAL_AT: Optional[datetime] = Field(
        default=None, description="results stay hidden from non-admins until this time")
    LOCK_VOTING_AFTER_REVEAL: bool = Field(
        default=False, description="refuse new votes once results are visible")

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    ADMIN_USERNAME: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


@lru_cache
def get_settings() -> Settings:
    return settings
