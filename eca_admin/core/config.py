# eca_admin/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List


class Settings(BaseSettings):
    """Application settings read from environment variables"""

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./eca_admin.db",
        description="Database connection URL",
    )
    AUTO_CREATE_TABLES: bool = Field(
        default=True,
        description="Create missing tables at startup",
    )
    SEED_REFERENCE_DATA: bool = Field(
        default=True,
        description="Insert default genres, statuses and the bootstrap admin at startup",
    )

    # Security
    SECRET_KEY: str = Field(
        ...,  # required
        min_length=32,
        description="Secret key used to sign JWT",
    )
    ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=720,  # 12 hours
        description="Access token lifetime in minutes",
    )
    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Enable slowapi rate limiting",
    )
    LOGIN_RATE_LIMIT: str = Field(
        default="10/minute",
        description="Rate limit applied to the login endpoint",
    )

    # Bootstrap admin
    ADMIN_EMAIL: str | None = Field(
        default=None,
        description="Email of the super admin created at startup",
    )
    ADMIN_PASSWORD: str | None = Field(
        default=None,
        description="Password of the super admin created at startup",
    )

    # CORS
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )

    # App
    APP_NAME: str = Field(
        default="ECA Admin",
        description="Application name",
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode (exposes storage error details)",
    )
    DEFAULT_PAGE_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Page size used by paginated listings",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
