"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Simple SMTP Settings"
    app_env: Literal["development", "staging", "production"] = "development"
    app_secret_key: str
    app_base_url: str = "http://localhost:8000"
    app_debug: bool = False
    app_log_level: str = "INFO"
    app_timezone: str = "Europe/Warsaw"

    # Database
    database_url: str = "sqlite+aiosqlite:///./smtp_settings.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # JWT Authentication
    jwt_secret_key: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 1440  # 24 hours
    nonce_expire_minutes: int = 720

    # System mail identity (used when the stored settings leave a gap)
    admin_email: str = "admin@example.com"
    email_from_address: str = "noreply@example.com"
    email_from_name: str = ""

    # Ambient transport, used while the SMTP override is disabled
    mail_default_host: str = "localhost"
    mail_default_port: int = 25
    smtp_timeout: int = 30
    # Self-signed certificates are accepted unless this is switched on
    smtp_verify_certificates: bool = False

    # i18n
    default_language: str = "pl"
    supported_languages: str = "pl,en"

    @property
    def effective_jwt_secret(self) -> str:
        """Get the JWT secret key, falling back to app secret key."""
        return self.jwt_secret_key or self.app_secret_key

    @property
    def effective_from_name(self) -> str:
        """Default sender display name, falling back to the site name."""
        return self.email_from_name or self.app_name

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def async_database_url(self) -> str:
        """Get database URL with an async driver for SQLAlchemy."""
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    @property
    def supported_languages_list(self) -> list[str]:
        """Get supported languages as a list."""
        return [lang.strip() for lang in self.supported_languages.split(",")]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
