"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="Lodging ERP", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/lodging",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="Lodging ERP API", description="API documentation title"
    )
    api_description: str = Field(
        default="Bookings, invoicing, customers and rental unit allocation",
        description="API documentation description",
    )
    default_lang: str = Field(
        default="en", description="Language used for multilang contents"
    )

    # Authentication
    auth_secret_key: str = Field(
        default="change-me", description="Secret used to sign access tokens"
    )
    auth_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    auth_access_token_validity: int = Field(
        default=3600, ge=1, description="Access token validity, in seconds"
    )
    auth_token_https: bool = Field(
        default=False, description="Restrict the access token cookie to HTTPS"
    )
    backend_url: str = Field(
        default="http://localhost:8000", description="Public URL of the backend"
    )

    # Email (SMTP)
    email_smtp_host: Optional[str] = Field(default=None, description="SMTP host")
    email_smtp_port: int = Field(default=587, ge=1, le=65535, description="SMTP port")
    email_smtp_account_username: Optional[str] = Field(
        default=None, description="SMTP account username"
    )
    email_smtp_account_password: Optional[str] = Field(
        default=None, description="SMTP account password"
    )
    email_smtp_account_displayname: str = Field(
        default="Lodging ERP", description="Display name used in the From header"
    )
    email_smtp_use_tls: bool = Field(default=True, description="Use STARTTLS")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
