"""
Configuration Management

Centralized configuration management using Pydantic Settings for type safety
and environment variable integration.
"""

from typing import List, Optional
from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class DatabaseSettings(BaseSettings):
    """Database configuration settings"""

    DATABASE_URL: str = Field(default="sqlite:///./travelplanner.db")

    # Connection pool settings (ignored for SQLite)
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_RECYCLE: int = Field(default=3600)

    DB_ECHO: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


class SecuritySettings(BaseSettings):
    """Security configuration settings"""

    SECRET_KEY: str = Field(
        default="change-me-in-production-3f9c1d0e8a7b4c2d9e6f5a4b3c2d1e0f",
        min_length=32
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60)

    CORS_ORIGINS: List[str] = Field(default=["http://localhost:3000"])

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")  # json or text
    LOG_FILE: Optional[str] = Field(default=None)
    LOG_ROTATION: str = Field(default="daily")
    LOG_RETENTION: int = Field(default=14)  # days

    ENABLE_STRUCTURED_LOGGING: bool = Field(default=True)
    LOG_SQL_QUERIES: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of {valid_levels}')
        return v.upper()

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v):
        if v.lower() not in ('json', 'text'):
            raise ValueError('Log format must be either json or text')
        return v.lower()


class APISettings(BaseSettings):
    """API configuration settings"""

    API_V1_PREFIX: str = Field(default="/api/v1")
    API_VERSION: str = Field(default="1.0.0")
    API_TITLE: str = Field(default="Travel Planner API")
    API_DESCRIPTION: str = Field(
        default="Multi-city trip itineraries, calendars and regional recommendations"
    )

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=10, ge=1)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1)

    ENABLE_REQUEST_LOGGING: bool = Field(default=True)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }


class CalendarSettings(BaseSettings):
    """Calendar aggregation settings"""

    # Trip summaries listed per month in the year overview
    MONTH_PREVIEW_LIMIT: int = Field(default=10, ge=1)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }


class Settings(BaseSettings):
    """Main application settings"""

    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    PROJECT_NAME: str = Field(default="Travel Planner")

    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    logging: LoggingSettings = LoggingSettings()
    api: APISettings = APISettings()
    calendar: CalendarSettings = CalendarSettings()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ['development', 'staging', 'production', 'testing']
        if v not in valid_envs:
            raise ValueError(f'Environment must be one of {valid_envs}')
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings()


# Global settings instance
settings = get_settings()
