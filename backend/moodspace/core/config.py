"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator
from typing import List, Optional, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Mood Space"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    EXPOSE_ERROR_DETAILS: bool = True  # Set to False to hide exception text in 500 responses

    # Database (Supabase Postgres in production)
    DATABASE_URL: str = "sqlite:///./moodspace.db"
    DB_ECHO: bool = False

    # Identity provider (Supabase Auth)
    SUPABASE_URL: str = Field(
        default="",
        validation_alias=AliasChoices("NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_URL"),
    )
    SUPABASE_ANON_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("NEXT_PUBLIC_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY"),
    )
    SUPABASE_SERVICE_ROLE_KEY: str = ""  # Only used by the enrichment endpoint
    SUPABASE_JWT_SECRET: Optional[str] = None  # Enables local token verification
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    HTTP_TIMEOUT: float = 10.0

    # Session cookie for server-rendered pages
    SESSION_COOKIE_NAME: str = "sb-access-token"
    SESSION_COOKIE_SECURE: bool = False

    # Dashboard
    DASHBOARD_TIMEZONE: str = "UTC"  # Zone used to decide which day is "today"
    HISTORY_LIMIT: int = 50

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("SUPABASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
