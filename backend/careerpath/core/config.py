"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    APP_NAME: str = "CareerPath"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENV: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./careerpath.db"
    DATABASE_ECHO: bool = False

    # Auth (session tokens issued by the identity provider)
    AUTH_ENABLED: bool = True
    AUTH_JWT_KEY: str | None = None  # PEM public key, or shared secret for HS* algorithms
    AUTH_JWT_ALGORITHM: str = "RS256"
    AUTH_JWT_ISSUER: str | None = None
    AUTH_SESSION_COOKIE: str = "__session"
    DEV_USER_ID: str = "test-user"
    SIGN_IN_URL: str = "/sign-in"

    # Identity provider backend API
    IDENTITY_API_URL: str = "https://api.clerk.com/v1"
    IDENTITY_SECRET_KEY: str | None = None
    IDENTITY_USERS_PAGE_SIZE: int = 100

    # Data
    STRICT_STORED_DATA: bool = True
    ROADMAP_DELETE_POLICY: Literal["cascade", "reject"] = "cascade"

    # AI
    OPENAI_API_KEY: str | None = None
    OPENAI_API_BASE_URL: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    AI_STEPS_TEMPERATURE: float = 0.7
    AI_STEPS_MAX_TOKENS: int = 1024
    AI_HELPER_TEMPERATURE: float = 0.5
    AI_HELPER_MAX_TOKENS: int = 512

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
